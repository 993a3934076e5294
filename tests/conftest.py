"""Pytest configuration and fixtures for the secrets operator.

Uses secrets_operator.main:app for HTTP tests (lifespan is not run, so no
Kubernetes API is needed; tests/unit/test_lifespan.py drives it with fakes).
In-memory fakes live in tests/fakes.py.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from secrets_operator.core.config import CoordinationConfig
from secrets_operator.main import app


@pytest.fixture
def coordination_config() -> CoordinationConfig:
    """Coordination config with a short poll interval for fast tests."""
    return CoordinationConfig(poll_interval_seconds=0.01)


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
