"""Pydantic response schemas for the probe and triage endpoints."""

from secrets_operator.schemas.cache import CacheKeysResponse
from secrets_operator.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

__all__ = [
    "CacheKeysResponse",
    "HealthResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
]
