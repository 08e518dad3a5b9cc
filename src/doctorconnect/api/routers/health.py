"""
Health check endpoints.
"""

import logging

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ...core.container import ServiceNames
from ...core.utils.datetime_utils import utc_now
from ..deps import ContainerDep, SettingsDep
from ..schemas.common import ApiResponse
from ..utils.responses import ok

router = APIRouter(prefix="/health", tags=["health"])
logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    timestamp: str
    version: str
    service: str


@router.get("", response_model=ApiResponse[HealthResponse])
async def health_check(request: Request, settings: SettingsDep):
    """
    Health check endpoint.

    Returns the current status of the service.
    """
    return ok(request, data=HealthResponse(
        status="healthy",
        timestamp=utc_now().isoformat(),
        version=settings.app_version,
        service=settings.app_name,
    ), message="OK")


@router.get("/ready", response_model=ApiResponse[dict])
async def readiness_check(request: Request, container: ContainerDep):
    """
    Readiness check endpoint.

    Pings MongoDB when the app owns a database connection.
    """
    checks = {}
    all_ok = True

    client = container.get_or_none(ServiceNames.DATABASE_CLIENT)
    if client is None:
        checks["database"] = "not_configured"
    else:
        try:
            await client.admin.command("ping")
            checks["database"] = "ok"
        except Exception as e:
            logger.warning("Readiness ping failed: %s", e)
            checks["database"] = f"error: {str(e)[:50]}"
            all_ok = False

    status = "ready" if all_ok else "degraded"
    return ok(request, data={
        "status": status,
        "timestamp": utc_now().isoformat(),
        "checks": checks,
    }, message="OK" if all_ok else "Some services unavailable")


@router.get("/live", response_model=ApiResponse[dict])
async def liveness_check(request: Request):
    """
    Liveness check endpoint.

    Returns whether the service is alive.
    """
    return ok(request, data={"status": "alive", "timestamp": utc_now().isoformat()}, message="OK")
