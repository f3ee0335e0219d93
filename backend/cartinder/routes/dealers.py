"""
Car Tinder Backend — Dealer Route Handlers
============================================

What:  GET /dealer/logs returns the dealer activity log, newest first.
Why:   Dealers review what happened to their listings. Rows are written by
       database triggers; this service only reads them.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from cartinder.schemas.car import ErrorResponse
from cartinder.services.car_service import car_service
from cartinder.services.car_store import CarStore, get_car_store

router = APIRouter(prefix="/dealer", tags=["Dealers"])


@router.get(
    "/logs",
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="Dealer activity log ordered by logged_at (newest first)",
)
async def get_dealer_logs(
    store: CarStore = Depends(get_car_store),
) -> List[Dict[str, Any]]:
    return await car_service.get_dealer_logs(store)
