"""Cache: in-memory client cache keyed by ClientCacheKey."""

from secrets_operator.infrastructure.cache.client_cache import ClientCache

__all__ = ["ClientCache"]
