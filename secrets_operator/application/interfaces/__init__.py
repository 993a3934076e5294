"""Application interfaces (ports).

Protocols for the external collaborators: the cluster object store holding
controller replicas and the local lifecycle probe.
"""

from secrets_operator.application.interfaces.lifecycle_probe import ILifecycleProbe
from secrets_operator.application.interfaces.replica_store import IReplicaStore

__all__ = [
    "ILifecycleProbe",
    "IReplicaStore",
]
