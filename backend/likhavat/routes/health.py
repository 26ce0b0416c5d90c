"""
Kacchi Likhavat Backend — Root and Health Check Routes
=======================================================

What:  Public liveness (GET /) and readiness (GET /health) endpoints.
Who:   Docker health checks, load balancers and uptime monitors.

Status levels for /health:
    - healthy:   database answers SELECT 1 (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time
from typing import Any, Dict

from fastapi import APIRouter, Response, status
from sqlalchemy import text

from likhavat import __version__
from likhavat.database import engine
from likhavat.schemas.common import ApiResponse, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/",
    response_model=ApiResponse[Dict[str, Any]],
    summary="API root",
    description="Confirms the process is up. Does not touch the database.",
)
async def root():
    return ApiResponse(
        message="Kacchi Likhavat API is running",
        data={"version": __version__, "docs": "/docs"},
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
    description=(
        "Reports whether the backend can reach its database. Returns 503 when it "
        "cannot, so load balancers stop routing traffic to this instance."
    ),
)
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
