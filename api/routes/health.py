"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from modules.auth.interfaces import IUserRepository
from shared.config import get_settings

from ..dependencies import get_user_repository

router = APIRouter()

_started_at = time.monotonic()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    environment: str
    uptime: float


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
        uptime=round(time.monotonic() - _started_at, 3),
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
async def readiness_check(
    users: IUserRepository = Depends(get_user_repository),
):
    """
    Readiness check endpoint.

    Returns 503 while the user store is unreachable.
    """
    if users.ping():
        return ReadinessResponse(status="ready", database="connected")

    return JSONResponse(
        status_code=503,
        content=ReadinessResponse(status="unavailable", database="disconnected").model_dump(),
    )
