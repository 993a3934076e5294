"""Health check endpoints used for the manager's liveness and readiness probes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from secrets_operator.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Shutdown in progress", "model": ReadinessErrorResponse}},
)
def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 while serving; 503 once the pre-delete hook started shutdown."""
    shutting_down = getattr(request.app.state, "shutting_down", None)
    if shutting_down is None or not shutting_down.is_set():
        return ReadinessResponse()
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(
            message="pre-delete hook started; revoking in-memory credentials",
        ).model_dump(),
    )
