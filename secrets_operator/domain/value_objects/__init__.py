"""Domain value objects and shared value types."""

from secrets_operator.domain.value_objects.core import ClientCacheKey

__all__ = ["ClientCacheKey"]
