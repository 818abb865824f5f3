"""
BlackPeopleEats Backend — Health Check Route
==============================================

What:  GET /health for Docker health checks and load balancer probes.

Status levels:
    healthy:   database answers SELECT 1 (HTTP 200)
    unhealthy: database unreachable (HTTP 503)

Gemini and Stripe are optional; their rows only say whether the real
provider or the fallback/mock path is in use.
"""

import logging
import time

from fastapi import APIRouter, Response
from sqlalchemy import text

from blackpeopleeats import __version__
from blackpeopleeats.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    from blackpeopleeats.database import engine
    from blackpeopleeats.services.gemini_service import highlights_service
    from blackpeopleeats.services.payment_service import payment_service

    db_status = "connected"
    overall = "healthy"
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    gemini_status = "configured" if await highlights_service.health_check() else "fallback"
    payments_status = "configured" if payment_service.configured else "mock"

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        gemini=gemini_status,
        payments=payments_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
