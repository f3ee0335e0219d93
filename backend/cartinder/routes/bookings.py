"""
Car Tinder Backend — Test Drive Route Handler
===============================================

What:  POST /testdrive books a test drive for a user, car and date.
How:   CarService validates the body; the book_test_drive procedure refuses
       a second booking of the same car on the same date.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends

from cartinder.schemas.car import MessageResponse, TestDriveRequest
from cartinder.services.car_service import car_service
from cartinder.services.car_store import CarStore, get_car_store

router = APIRouter(tags=["Test Drives"])


@router.post(
    "/testdrive",
    response_model=MessageResponse,
    responses={
        400: {
            "description": "Missing fields, or this car is already booked on that date",
            "model": MessageResponse,
        },
        500: {"description": "Store error", "model": MessageResponse},
    },
    summary="Book a test drive",
)
async def book_test_drive(
    payload: Optional[TestDriveRequest] = Body(default=None),
    store: CarStore = Depends(get_car_store),
) -> MessageResponse:
    message = await car_service.book_test_drive(store, payload)
    return MessageResponse(message=message)
