"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps operator and framework
exceptions to HTTP responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from secrets_operator.core.config import get_settings
from secrets_operator.domain.enums import ErrorKind
from secrets_operator.domain.exceptions import OperatorException

logger = logging.getLogger(__name__)

# Map error kind to HTTP status when applicable; everything else is 400.
_ERROR_CODE_STATUS: dict[str, int] = {
    ErrorKind.ANNOTATION_PUBLISH_FAILED.value: 502,
    ErrorKind.REPLICA_STORE_ERROR.value: 503,
    ErrorKind.LIFECYCLE_PROBE_ERROR.value: 503,
}


def _operator_exception_handler(request: Request, exc: OperatorException) -> JSONResponse:
    """Return JSON from OperatorException.to_dict() with appropriate status code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""
    app.add_exception_handler(OperatorException, _operator_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
