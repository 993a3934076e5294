"""k8s: replica store backed by the official kubernetes client."""

from secrets_operator.infrastructure.k8s.replica_store import (
    KubernetesReplicaStore,
    replica_from_pod,
)

__all__ = ["KubernetesReplicaStore", "replica_from_pod"]
