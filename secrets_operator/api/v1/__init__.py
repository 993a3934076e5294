"""API v1: probe and triage endpoints."""

from secrets_operator.api.v1.router import api_router

__all__ = ["api_router"]
