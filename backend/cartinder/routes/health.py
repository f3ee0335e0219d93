"""
Car Tinder Backend — Health Check Route
=========================================

What:  Health check endpoint for monitoring and load balancer checks.
How:   Runs SELECT 1 through the request's CarStore and reports the result.
Who:   Called by Docker health checks and uptime monitors.

Status levels:
    - healthy:   Database reachable
    - unhealthy: Database unreachable (HTTP stays 200; monitors read `status`)
"""

import logging
import time

from fastapi import APIRouter, Depends

from cartinder import __version__
from cartinder.exceptions import StoreError
from cartinder.schemas.car import HealthResponse
from cartinder.services.car_store import CarStore, get_car_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: CarStore = Depends(get_car_store)) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await store.ping()
    except StoreError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", e.message)

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
