"""Application layer: interfaces and services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (replica store, lifecycle probe).
"""

from secrets_operator.application.interfaces import ILifecycleProbe, IReplicaStore
from secrets_operator.application.services import (
    AnnotationPublisher,
    CacheKeyService,
    RevocationCoordinator,
    ShutdownService,
)

__all__ = [
    "AnnotationPublisher",
    "CacheKeyService",
    "ILifecycleProbe",
    "IReplicaStore",
    "RevocationCoordinator",
    "ShutdownService",
]
