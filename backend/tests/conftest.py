"""
Car Tinder Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Tests run without MySQL: the store is either driven through a mocked
       AsyncSession or replaced by an in-memory fake.

Fixtures:
    ├── mock_db_session: Mock AsyncSession for CarStore unit tests
    ├── fake_store: In-memory store mimicking the database's like upsert
    │               and duplicate-booking signal
    └── test_client: HTTPX AsyncClient wired to the app, with get_car_store
                     overridden to return fake_store
"""

import os
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any cartinder imports
os.environ["STATIC_DIR"] = str(Path(__file__).resolve().parent.parent / "public")
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["STORE_TIMEOUT"] = "5"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from cartinder.exceptions import DuplicateBookingError, StoreError


class InMemoryCarStore:
    """
    Stand-in for CarStore with the database's observable semantics.

    - likes are unique per (user_id, car_id); a repeat refreshes liked_at
    - bookings are unique per (user_id, car_id, date); a repeat raises
      DuplicateBookingError like the book_test_drive procedure
    - setting `failure` makes every call raise it, simulating an outage
    """

    def __init__(self):
        self.cars = [
            {
                "car_id": 1, "brand": "Toyota", "model": "Corolla", "year": 2022,
                "price": Decimal("21000.00"), "fuel_type": "Petrol",
                "transmission": "Automatic", "seating_capacity": 5,
                "image_url": "https://example.com/corolla.jpg",
                "dealer_name": "City Motors", "avg_rating": Decimal("4.50"),
                "total_likes": 3,
            },
            {
                "car_id": 2, "brand": "Tesla", "model": "Model 3", "year": 2023,
                "price": Decimal("42000.00"), "fuel_type": "Electric",
                "transmission": "Automatic", "seating_capacity": 5,
                "image_url": None, "dealer_name": None, "avg_rating": None,
                "total_likes": 0,
            },
        ]
        self.likes = {}
        self.bookings = set()
        self.dealer_logs = []
        self.calls = []
        self.failure = None

    def _enter(self, name):
        self.calls.append(name)
        if self.failure is not None:
            raise self.failure

    async def list_cars(self):
        self._enter("list_cars")
        return list(self.cars)

    async def like_car(self, user_id, car_id):
        self._enter("like_car")
        self.likes[(str(user_id), str(car_id))] = datetime.now(timezone.utc)

    async def reset_likes(self, user_id):
        self._enter("reset_likes")
        for key in [k for k in self.likes if k[0] == str(user_id)]:
            del self.likes[key]

    async def book_test_drive(self, user_id, car_id, date):
        self._enter("book_test_drive")
        key = (str(user_id), str(car_id), date)
        if key in self.bookings:
            raise DuplicateBookingError(context={"driver_code": 1644})
        self.bookings.add(key)

    async def get_liked_cars(self, user_id):
        self._enter("get_liked_cars")
        liked = {car for user, car in self.likes if user == str(user_id)}
        return [
            {k: car[k] for k in ("car_id", "brand", "model", "image_url")}
            for car in self.cars
            if str(car["car_id"]) in liked
        ]

    async def get_dealer_logs(self):
        self._enter("get_dealer_logs")
        return sorted(self.dealer_logs, key=lambda row: row["logged_at"], reverse=True)

    async def ping(self):
        self._enter("ping")


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value = make_result([{"car_id": 1}])
        rows = await CarStore(mock_db_session).list_cars()
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def make_result():
    """Builds a mock SQLAlchemy Result for a list of row dicts (None = no rows)."""
    def _make(rows=None):
        result = MagicMock()
        result.returns_rows = rows is not None
        result.mappings.return_value.all.return_value = rows or []
        return result
    return _make


@pytest.fixture
def fake_store():
    return InMemoryCarStore()


@pytest.fixture
def store_outage():
    return StoreError(message="Can't connect to MySQL server on 'db'")


@pytest_asyncio.fixture
async def test_client(fake_store):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_cars(test_client):
            response = await test_client.get("/cars")
            assert response.status_code == 200
    """
    from cartinder.main import app
    from cartinder.services.car_store import get_car_store

    app.dependency_overrides[get_car_store] = lambda: fake_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
