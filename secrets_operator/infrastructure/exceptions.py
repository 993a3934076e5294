"""Infrastructure exceptions for cluster and local-probe operations.

Both extend OperatorException so presentation can map them to HTTP
responses consistently. Coordination watchers treat them as transient
and retry.
"""

from secrets_operator.domain.enums import ErrorKind
from secrets_operator.domain.exceptions import OperatorException


class ReplicaStoreException(OperatorException):
    """Listing or patching controller replicas failed."""

    def __init__(
        self,
        operation: str,
        reason: str,
        replica: str | None = None,
        status: int | None = None,
    ) -> None:
        """Initialize with the failed operation and its cause.

        Args:
            operation: 'list' or 'patch'.
            reason: Error text from the API client.
            replica: Replica name for per-replica operations.
            status: HTTP status returned by the API server, if any.
        """
        target = f"pod {replica}" if replica else "pods"
        super().__init__(
            f"failed to {operation} {target}: {reason}",
            ErrorKind.REPLICA_STORE_ERROR.value,
            {"operation": operation, "replica": replica, "status": status, "reason": reason},
        )


class LifecycleProbeException(OperatorException):
    """The local lifecycle probe could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"failed to read lifecycle probe {path}: {reason}",
            ErrorKind.LIFECYCLE_PROBE_ERROR.value,
            {"path": path, "reason": reason},
        )
