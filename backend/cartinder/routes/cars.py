"""
Car Tinder Backend — Car & Like Route Handlers
================================================

What:  GET /cars, POST /api/like, DELETE /api/resetLikes, GET /liked/{userId}.
Why:   The swipe deck: browse cars, like them, review and clear likes.
How:   Extracts body/path data, delegates to CarService, returns JSON.
Who:   Called by the frontend swipe and favourites views.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends

from cartinder.schemas.car import (
    CarListing,
    ErrorResponse,
    LikeRequest,
    MessageResponse,
    ResetLikesRequest,
)
from cartinder.services.car_service import car_service
from cartinder.services.car_store import CarStore, get_car_store

router = APIRouter(tags=["Cars"])


@router.get(
    "/cars",
    responses={
        200: {"description": "Cars as returned by the store", "model": List[CarListing]},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="List all cars with dealer, rating and like count",
)
async def list_cars(store: CarStore = Depends(get_car_store)) -> List[Dict[str, Any]]:
    """Rows pass through unvalidated; column types are whatever the store returns."""
    return await car_service.list_cars(store)


@router.post(
    "/api/like",
    response_model=MessageResponse,
    responses={
        400: {"description": "user_id or car_id missing", "model": MessageResponse},
        500: {"description": "Store error", "model": MessageResponse},
    },
    summary="Like a car",
    description="Idempotent: liking the same car again only refreshes the timestamp.",
)
async def like_car(
    payload: Optional[LikeRequest] = Body(default=None),
    store: CarStore = Depends(get_car_store),
) -> MessageResponse:
    message = await car_service.like_car(store, payload)
    return MessageResponse(message=message)


@router.delete(
    "/api/resetLikes",
    response_model=MessageResponse,
    responses={500: {"description": "Store error", "model": MessageResponse}},
    summary="Remove all likes of a user",
)
async def reset_likes(
    payload: Optional[ResetLikesRequest] = Body(default=None),
    store: CarStore = Depends(get_car_store),
) -> MessageResponse:
    message = await car_service.reset_likes(store, payload)
    return MessageResponse(message=message)


@router.get(
    "/liked/{user_id}",
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List the cars a user liked",
    description="Returns the first result set of the get_liked_cars procedure.",
)
async def get_liked_cars(
    user_id: str,
    store: CarStore = Depends(get_car_store),
) -> List[Dict[str, Any]]:
    """
    Path ids are forwarded as strings; MySQL converts them for the procedure.
    An unknown user or one without likes gets an empty list.
    """
    return await car_service.get_liked_cars(store, user_id)
