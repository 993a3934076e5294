"""API v1 router aggregation."""

from fastapi import APIRouter

from secrets_operator.api.v1.endpoints import cache, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(cache.router, prefix="/cache", tags=["cache"])
