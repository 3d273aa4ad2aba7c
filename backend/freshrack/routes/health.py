"""
Freshrack Backend — Liveness & Health Routes
==============================================

What:  GET / (plain-text liveness) and GET /health (dependency check).
How:   Liveness answers without touching the database. Health round-trips
       `SELECT 1` and reports 503 when the database is unreachable.
Who:   Browsers and uptime pings hit /; container health checks hit /health.
"""

import logging
import time

from fastapi import APIRouter, Response, status
from fastapi.responses import PlainTextResponse

from freshrack import __version__
from freshrack.database import verify_connection
from freshrack.schemas.food import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

LIVENESS_TEXT = "Freshrack server is running"

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Liveness string")
async def root() -> str:
    return LIVENESS_TEXT


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(response: Response) -> HealthResponse:
    """
    Check the database connection.

    Returns:
        HealthResponse; HTTP 503 with status "unhealthy" when SELECT 1 fails.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        await verify_connection()
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
