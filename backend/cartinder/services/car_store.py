"""
Car Tinder Backend — Car Store (Data Access Collaborator)
==========================================================

What:  Executes the fixed SQL statements and stored procedures behind each
       endpoint and returns their rows as plain dicts.
Why:   The database owns the business rules (rating aggregation, like
       de-duplication, duplicate-booking detection). The backend only needs
       one place that knows the SQL text and how the driver reports failures.
How:   One coroutine per operation, each a single parameterized statement
       run on the request's AsyncSession, bounded by `store_timeout`.
Who:   Called by CarService; constructed per request by get_car_store().

Error Decoding:
    Driver errors are translated exactly once, here:
        MySQL errno 1644 (SIGNAL SQLSTATE '45000') → DomainConflictError
        anything else (including timeouts)         → StoreError
    Callers never look at driver exception objects.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Type

from fastapi import Depends
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cartinder.config import settings
from cartinder.database import get_db_session
from cartinder.exceptions import (
    DomainConflictError,
    DuplicateBookingError,
    StoreError,
)
from cartinder.middleware.request_context import record_store_call

logger = logging.getLogger(__name__)

# MySQL reports SIGNAL SQLSTATE '45000' as ER_SIGNAL_EXCEPTION
ER_SIGNAL_EXCEPTION = 1644

Row = Dict[str, Any]


# ── SQL ───────────────────────────────────────────────────────────────────
LIST_CARS_SQL = """
    SELECT
      c.car_id, c.brand, c.model, c.year, c.price, c.fuel_type, c.transmission,
      c.seating_capacity, c.image_url, d.dealer_name,
      get_avg_rating(c.car_id) AS avg_rating,
      get_total_likes(c.car_id) AS total_likes
    FROM Cars c
    LEFT JOIN Dealers d ON c.dealer_id = d.dealer_id
"""

LIKE_CAR_SQL = """
    INSERT INTO LikedCars (user_id, car_id)
    VALUES (:user_id, :car_id)
    ON DUPLICATE KEY UPDATE liked_at = NOW()
"""

RESET_LIKES_SQL = "DELETE FROM LikedCars WHERE user_id = :user_id"

BOOK_TEST_DRIVE_SQL = "CALL book_test_drive(:user_id, :car_id, :date)"

LIKED_CARS_SQL = "CALL get_liked_cars(:user_id)"

DEALER_LOGS_SQL = "SELECT * FROM DealerActivityLog ORDER BY logged_at DESC"


def _driver_code(exc: DBAPIError) -> Optional[int]:
    """Returns the numeric MySQL error code carried by the driver exception."""
    args = getattr(exc.orig, "args", ())
    if args and isinstance(args[0], int):
        return args[0]
    return None


def _driver_message(exc: DBAPIError) -> str:
    """
    Returns the human-readable part of a driver error.

    PyMySQL-style errors carry (errno, message); the raw str() would read
    "(1644, 'message')".
    """
    args = getattr(exc.orig, "args", ())
    if len(args) >= 2 and isinstance(args[1], str):
        return args[1]
    return str(exc.orig) if exc.orig is not None else str(exc)


def decode_store_error(
    exc: DBAPIError,
    conflict: Type[DomainConflictError] = DomainConflictError,
) -> Exception:
    """
    Translate a driver error into the application's tagged error variants.

    Args:
        exc:      The DBAPIError raised by SQLAlchemy
        conflict: Exception class to use when the store signals a domain
                  violation; lets each operation name its own conflict

    Returns:
        A DomainConflictError (or `conflict` subclass) or a StoreError.
    """
    code = _driver_code(exc)
    message = _driver_message(exc)
    context = {"driver_code": code, "driver_message": message}
    if code == ER_SIGNAL_EXCEPTION:
        return conflict(context=context)
    return StoreError(message=message, context=context)


class CarStore:
    """
    Data-access collaborator over one request-scoped AsyncSession.

    Every public method issues exactly one statement and returns the rows of
    its first result set (empty list for statements without rows).
    """

    def __init__(self, session: AsyncSession, timeout: Optional[float] = None):
        self.session = session
        self.timeout = timeout if timeout is not None else settings.store_timeout

    async def list_cars(self) -> List[Row]:
        return await self._run("list_cars", LIST_CARS_SQL)

    async def like_car(self, user_id: Any, car_id: Any) -> None:
        """Upserts the like; a repeated like only refreshes `liked_at`."""
        await self._run(
            "like_car", LIKE_CAR_SQL,
            {"user_id": user_id, "car_id": car_id},
            commit=True,
        )

    async def reset_likes(self, user_id: Any) -> None:
        await self._run(
            "reset_likes", RESET_LIKES_SQL, {"user_id": user_id}, commit=True,
        )

    async def book_test_drive(self, user_id: Any, car_id: Any, date: Any) -> None:
        """
        Books a test drive through the `book_test_drive` procedure.

        Raises:
            DuplicateBookingError: (user_id, car_id, date) is already booked
            StoreError: Any other store failure
        """
        await self._run(
            "book_test_drive", BOOK_TEST_DRIVE_SQL,
            {"user_id": user_id, "car_id": car_id, "date": date},
            commit=True,
            conflict=DuplicateBookingError,
        )

    async def get_liked_cars(self, user_id: Any) -> List[Row]:
        return await self._run("get_liked_cars", LIKED_CARS_SQL, {"user_id": user_id})

    async def get_dealer_logs(self) -> List[Row]:
        return await self._run("get_dealer_logs", DEALER_LOGS_SQL)

    async def ping(self) -> None:
        """Lightweight connectivity check used by GET /health."""
        await self._run("ping", "SELECT 1")

    # ── Internals ─────────────────────────────────────────────────────────

    async def _run(
        self,
        operation: str,
        sql: str,
        params: Optional[Dict[str, Any]] = None,
        *,
        commit: bool = False,
        conflict: Type[DomainConflictError] = DomainConflictError,
    ) -> List[Row]:
        try:
            rows = await asyncio.wait_for(
                self._execute(sql, params or {}, commit),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            record_store_call(operation, "timeout")
            logger.error("Store call %s timed out after %.1fs", operation, self.timeout)
            raise StoreError(
                message=f"Store call timed out after {self.timeout:g} seconds",
                context={"operation": operation},
            )
        except DBAPIError as exc:
            error = decode_store_error(exc, conflict=conflict)
            error.context["operation"] = operation
            if isinstance(error, DomainConflictError):
                record_store_call(operation, "conflict")
                logger.info("Store rejected %s: %s", operation, error.context["driver_message"])
            else:
                record_store_call(operation, "error")
                logger.error("Store call %s failed: %s", operation, error.message)
            raise error from exc
        except (SQLAlchemyError, TypeError, ValueError) as exc:
            # TypeError/ValueError: the driver could not bind a request value
            record_store_call(operation, "error")
            logger.error("Store call %s failed: %s", operation, exc)
            raise StoreError(message=str(exc), context={"operation": operation}) from exc
        record_store_call(operation, "ok")
        return rows

    async def _execute(self, sql: str, params: Dict[str, Any], commit: bool) -> List[Row]:
        result = await self.session.execute(text(sql), params)
        rows = [dict(row) for row in result.mappings().all()] if result.returns_rows else []
        if commit:
            await self.session.commit()
        return rows


# ── Dependency ────────────────────────────────────────────────────────────
async def get_car_store(db: AsyncSession = Depends(get_db_session)) -> CarStore:
    """
    FastAPI dependency handing each request its own CarStore.

    Tests override this dependency to swap in an in-memory store.
    """
    return CarStore(db)
