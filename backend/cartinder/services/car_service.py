"""
Car Tinder Backend — Car Service (Validation & Failure Mapping)
================================================================

What:  Sits between the routes and CarStore: checks required fields, makes
       the single store call, and shapes store failures into each route's
       error contract.
Why:   Routes stay HTTP-only and CarStore stays SQL-only. The per-route error
       wording ("DB error" for likes, raw text for bookings, {"error": ...}
       for reads) lives in one place.
Who:   Called by route handlers with the request's CarStore.

Failure mapping per operation:
    list_cars / get_liked_cars / get_dealer_logs
        StoreError               → 500 {"error": <store message>}
    like_car / reset_likes
        ValidationError          → 400 {"message": "Missing data"}  (like only)
        StoreError               → 500 {"message": "DB error"}
    book_test_drive
        ValidationError          → 400 {"message": "Missing fields"}
        DuplicateBookingError    → 400 {"message": "You already booked ..."}
        StoreError               → 500 {"message": <store message>}

Design Decision:
    CarService is stateless; the store is passed into every call, so one
    module-level instance serves all requests.
"""

import logging
from typing import Any, Dict, List, Optional

from cartinder.exceptions import StoreError, ValidationError
from cartinder.schemas.car import LikeRequest, ResetLikesRequest, TestDriveRequest
from cartinder.services.car_store import CarStore

logger = logging.getLogger(__name__)

MISSING_DATA = "Missing data"
MISSING_FIELDS = "Missing fields"
DB_ERROR = "DB error"


def _require(payload: Any, fields: List[str], message: str) -> None:
    """
    Raise ValidationError unless every field is present and truthy.

    Absent, null, "", 0 and false all count as missing.
    """
    missing = [name for name in fields if not getattr(payload, name, None)]
    if missing:
        raise ValidationError(message=message, fields=missing)


class CarService:
    """Business-rule-free facade over CarStore."""

    async def list_cars(self, store: CarStore) -> List[Dict[str, Any]]:
        return await store.list_cars()

    async def like_car(self, store: CarStore, payload: Optional[LikeRequest]) -> str:
        """
        Like a car for a user. Repeating the like is a no-op apart from the
        refreshed timestamp.

        Returns:
            The success message for the response body.
        """
        payload = payload or LikeRequest()
        _require(payload, ["user_id", "car_id"], MISSING_DATA)

        try:
            await store.like_car(payload.user_id, payload.car_id)
        except StoreError as e:
            raise StoreError(message=DB_ERROR, body_field="message", context=e.context) from e

        logger.info("User %s liked car %s", payload.user_id, payload.car_id)
        return "Car liked!"

    async def reset_likes(self, store: CarStore, payload: Optional[ResetLikesRequest]) -> str:
        """
        Remove every like of a user. No-op for users without likes.

        user_id is passed through unchecked; a missing id matches no rows.
        """
        payload = payload or ResetLikesRequest()

        try:
            await store.reset_likes(payload.user_id)
        except StoreError as e:
            raise StoreError(message=DB_ERROR, body_field="message", context=e.context) from e

        logger.info("Likes reset for user %s", payload.user_id)
        return "Likes reset successfully!"

    async def book_test_drive(
        self, store: CarStore, payload: Optional[TestDriveRequest]
    ) -> str:
        """
        Book a test drive.

        Raises:
            ValidationError: user_id, car_id or date missing (store not called)
            DuplicateBookingError: the store already holds this booking
            StoreError: any other store failure, with the store's message
        """
        payload = payload or TestDriveRequest()
        _require(payload, ["user_id", "car_id", "date"], MISSING_FIELDS)

        try:
            await store.book_test_drive(payload.user_id, payload.car_id, payload.date)
        except StoreError as e:
            raise StoreError(message=e.message, body_field="message", context=e.context) from e

        logger.info(
            "Test drive booked: user %s, car %s on %s",
            payload.user_id, payload.car_id, payload.date,
        )
        return "Test drive booked successfully!"

    async def get_liked_cars(self, store: CarStore, user_id: str) -> List[Dict[str, Any]]:
        return await store.get_liked_cars(user_id)

    async def get_dealer_logs(self, store: CarStore) -> List[Dict[str, Any]]:
        return await store.get_dealer_logs()


# Singleton instance, imported by route handlers
car_service = CarService()
