"""
Car Tinder Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for failed requests.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error bodies with the matching HTTP status codes.
Who:   Raised by CarService and CarStore; caught by global handlers.

Exception Hierarchy:
    CarTinderError (base)
    ├── ValidationError          → 400 Bad Request (required field missing)
    ├── NotFoundError            → 404 Not Found
    ├── DomainConflictError      → 400 Bad Request (store-signaled violation)
    │   └── DuplicateBookingError
    └── StoreError               → 500 Internal Server Error

Response Bodies:
    The public API answers with single-key bodies, e.g. {"message": "Missing data"}
    or {"error": "<driver message>"}. StoreError records which key its route
    uses in `body_field`; everything else answers under "message".
"""

from typing import Any, Dict, Optional


class CarTinderError(Exception):
    """
    Base exception for all Car Tinder application errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CarTinderError):
    """
    Raised when a required request field is missing.

    What:    A field is absent, null, or falsy ("" / 0 / false).
    When:    Before any store call; the store is never contacted.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Missing data",
        fields: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["missing_fields"] = list(fields)
        super().__init__(message=message, context=ctx)
        self.fields = list(fields or [])


class NotFoundError(CarTinderError):
    """
    Raised when a requested resource does not exist.

    When:    GET / with no landing page deployed.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        super().__init__(message=f"The requested {resource} was not found", context=ctx)


class DomainConflictError(CarTinderError):
    """
    Raised when the store rejects a call because a business rule was violated.

    What:    The store raised its reserved user-defined signal
             (SIGNAL SQLSTATE '45000', MySQL error 1644).
    Why:     These are the client's fault, not an outage, so they map to 400.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "The request conflicts with existing data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DuplicateBookingError(DomainConflictError):
    """
    Raised when a user books the same car on the same date twice.

    When:    book_test_drive() signals that (user_id, car_id, date) exists.
    """

    def __init__(
        self,
        message: str = "You already booked this car on this date.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreError(CarTinderError):
    """
    Raised when a store call fails for any reason other than a domain conflict.

    What:    Connection lost, bad SQL, missing procedure, commit failure, timeout.
    HTTP:    500 Internal Server Error

    Attributes:
        body_field: Response key the message is returned under ("error" for
                    read routes, "message" for write routes)
    """

    def __init__(
        self,
        message: str = "DB error",
        body_field: str = "error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.body_field = body_field
