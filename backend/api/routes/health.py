"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    storage: str
    auth: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether storage and JWT validation are configured.
    """
    settings = get_settings()
    if settings.storage_backend == "memory":
        storage = "memory"
    elif settings.supabase_url and settings.supabase_service_role_key:
        storage = "configured"
    else:
        storage = "missing"
    auth = "configured" if settings.supabase_jwt_secret else "missing"

    return ReadinessResponse(
        status="ready" if storage != "missing" and auth != "missing" else "degraded",
        storage=storage,
        auth=auth,
    )
