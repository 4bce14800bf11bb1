# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.dependencies import SettingsDep

router = APIRouter()

VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Which upstreams are configured."""
    data_store: str
    subscribe_webhook: str
    unsubscribe_webhook: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep):
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(settings: SettingsDep):
    """
    Readiness check endpoint.

    Reports which upstreams are configured. Does not call them, so a
    readiness probe never creates Airtable traffic or fires a Zap.
    An unset webhook is "disabled", which is a valid setup.
    """
    checks = ChecksResponse(
        data_store="configured" if settings.AIRTABLE_ENDPOINT and settings.AIRTABLE_API_KEY else "missing",
        subscribe_webhook="configured" if settings.subscribe_webhook_url else "disabled",
        unsubscribe_webhook="configured" if settings.unsubscribe_webhook_url else "disabled",
    )

    return ReadinessResponse(
        status="ready" if checks.data_store == "configured" else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )
