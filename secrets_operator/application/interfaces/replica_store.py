"""Replica store interface (port).

Implemented by infrastructure (e.g. KubernetesReplicaStore). Failures are
raised as ReplicaStoreException so callers can treat them as transient.
"""

from typing import Protocol

from secrets_operator.domain.entities import ReplicaDescriptor


class IReplicaStore(Protocol):
    """Queryable, patchable store of controller replica descriptors."""

    async def list_replicas(self, label_selector: str) -> list[ReplicaDescriptor]:
        """Return every replica matching the label selector.

        Raises:
            ReplicaStoreException: If the list call fails.
        """
        ...

    async def patch_annotations(
        self, replica: ReplicaDescriptor, annotations: dict[str, str]
    ) -> None:
        """Merge annotations into the replica's annotation map (merge patch).

        Raises:
            ReplicaStoreException: If the patch call fails.
        """
        ...
