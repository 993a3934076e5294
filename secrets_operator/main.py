"""FastAPI application entry point for the operator manager probes.

Wiring only: lifespan, exception handlers, routers. Run with
``uvicorn secrets_operator.main:app``.

Settings are loaded inside create_app() so that tests can set env (and
optionally clear get_settings cache) before calling create_app().
"""

from fastapi import FastAPI

from secrets_operator.api.v1 import api_router
from secrets_operator.core.config import get_settings
from secrets_operator.core.exception_handlers import register_exception_handlers
from secrets_operator.core.lifespan import create_lifespan
from secrets_operator.shared.telemetry.logging import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
