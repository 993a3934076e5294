"""Domain enumerations for the secrets operator.

Enums represent fixed sets of domain values (error kinds, watcher outcomes).
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of operator error kinds.

    Every OperatorException carries one of these as its error_code, so
    callers branch on kind instead of parsing messages.
    """

    INVALID_UID_LENGTH = "INVALID_UID_LENGTH"
    DUPLICATE_UID = "DUPLICATE_UID"
    KEY_LENGTH_EXCEEDED = "KEY_LENGTH_EXCEEDED"
    EMPTY_NAMESPACE = "EMPTY_NAMESPACE"
    CLONED_PARENT_NOT_ALLOWED = "CLONED_PARENT_NOT_ALLOWED"
    EMPTY_AUTH_METHOD = "EMPTY_AUTH_METHOD"
    INCOMPLETE_CLIENT_CONTEXT = "INCOMPLETE_CLIENT_CONTEXT"
    INVALID_LABEL_SELECTOR = "INVALID_LABEL_SELECTOR"
    ANNOTATION_PUBLISH_FAILED = "ANNOTATION_PUBLISH_FAILED"
    REPLICA_STORE_ERROR = "REPLICA_STORE_ERROR"
    LIFECYCLE_PROBE_ERROR = "LIFECYCLE_PROBE_ERROR"

    @classmethod
    def values(cls) -> list[str]:
        """Return all error kind values as strings."""
        return [kind.value for kind in cls]


class WatchOutcome(str, Enum):
    """Terminal result of a replica coordination watcher.

    A watcher keeps polling until one of these is reached; transient
    read/list errors are retried, so there is no failed result.
    """

    SATISFIED = "satisfied"
    CANCELLED = "cancelled"
