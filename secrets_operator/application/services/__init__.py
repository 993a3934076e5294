"""Application services: cache key derivation and replica coordination."""

from secrets_operator.application.services.annotation_publisher import AnnotationPublisher
from secrets_operator.application.services.cache_key_service import (
    CacheKeyService,
    KeyHashAlgorithm,
    TruncatedSHA256Algorithm,
    clone_client_cache_key,
    compute_client_cache_key,
    compute_client_cache_key_from_client,
    is_clone,
    validate_uid,
)
from secrets_operator.application.services.revocation_coordinator import (
    RevocationCoordinator,
)
from secrets_operator.application.services.shutdown_service import ShutdownService

__all__ = [
    "AnnotationPublisher",
    "CacheKeyService",
    "KeyHashAlgorithm",
    "RevocationCoordinator",
    "ShutdownService",
    "TruncatedSHA256Algorithm",
    "clone_client_cache_key",
    "compute_client_cache_key",
    "compute_client_cache_key_from_client",
    "is_clone",
    "validate_uid",
]
