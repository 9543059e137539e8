"""
Health check router.

Provides liveness and readiness endpoints for orchestrator health checks.
No business logic. Returns application status and version.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from email_hint.domain.directory.errors import StorageUnavailableError
from email_hint.domain.directory.ports import DirectoryProvider
from email_hint.interfaces.directory.dependencies import get_directory_provider
from email_hint.interfaces.directory.schemas import HealthResponse

logger = logging.getLogger(__name__)

HTTP_503 = 503

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status and version.",
)
def health_check(request: Request) -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(status="ok", version=request.app.version)


@router.get(
    "/health/ready",
    response_model=HealthResponse,
    responses={HTTP_503: {"model": HealthResponse}},
    summary="Readiness check",
    description="Pings the employees database through the directory provider.",
)
def readiness_check(
    request: Request,
    provider: DirectoryProvider = Depends(get_directory_provider),
):
    """Return 200 when the database answers, 503 otherwise."""
    try:
        provider.ping()
    except StorageUnavailableError as exc:
        logger.warning("Readiness check failed: %s", exc.message)
        body = HealthResponse(status="unavailable", version=request.app.version)
        return JSONResponse(status_code=HTTP_503, content=body.model_dump())
    return HealthResponse(status="ok", version=request.app.version)
