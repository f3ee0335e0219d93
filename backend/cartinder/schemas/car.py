"""
Car Tinder Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract with the frontend.
Why:   Request parsing, response serialization, and OpenAPI docs.

Request models are deliberately permissive: every field is optional and
accepts any JSON value, which is forwarded to the store untouched. Presence
is checked by CarService so a missing field produces the API's own 400
message, and a value the store cannot use comes back as the route's 500.
"""

from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

# No coercion: "7", 7 and 7.0 all reach MySQL as sent
Identifier = Optional[Any]


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what the client sends in JSON bodies
# ══════════════════════════════════════════════════════════════════════════


class LikeRequest(BaseModel):
    """Body of POST /api/like."""
    user_id: Identifier = Field(default=None, description="User liking the car")
    car_id: Identifier = Field(default=None, description="Car being liked")


class ResetLikesRequest(BaseModel):
    """Body of DELETE /api/resetLikes."""
    user_id: Identifier = Field(default=None, description="User whose likes are removed")


class TestDriveRequest(BaseModel):
    """
    Body of POST /testdrive.

    `date` is passed to the store as sent (usually "2025-03-14"); the
    procedure converts it or rejects it.
    """
    __test__ = False  # not a pytest test class despite the name

    user_id: Identifier = Field(default=None, description="User booking the drive")
    car_id: Identifier = Field(default=None, description="Car to test drive")
    date: Optional[Any] = Field(default=None, description="Requested day (YYYY-MM-DD)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class CarListing(BaseModel):
    """
    What:  A car as shown on the swipe deck.
    Who:   Returned by GET /cars as array items.

    avg_rating and total_likes are computed by store functions
    get_avg_rating() / get_total_likes(). The route returns store rows as-is;
    this model documents their usual shape in OpenAPI.
    """
    car_id: int
    brand: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    price: Optional[Decimal] = None
    fuel_type: Optional[str] = None
    transmission: Optional[str] = None
    seating_capacity: Optional[int] = None
    image_url: Optional[str] = None
    dealer_name: Optional[str] = None
    avg_rating: Optional[Union[Decimal, float]] = None
    total_likes: Optional[int] = None


class MessageResponse(BaseModel):
    """Acknowledgement body for write endpoints, e.g. {"message": "Car liked!"}."""
    message: str


class ErrorResponse(BaseModel):
    """
    Error body for read endpoints: {"error": "<store message>"}.

    Write endpoints answer errors with MessageResponse instead.
    """
    error: str


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

