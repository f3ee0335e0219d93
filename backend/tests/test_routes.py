"""
Car Tinder Backend — HTTP Endpoint Tests
==========================================

What:  End-to-end request/response tests for every public endpoint.
How:   HTTPX AsyncClient against the ASGI app with the store replaced by
       InMemoryCarStore (see conftest.py), so status codes and bodies are
       checked exactly as a client sees them.
"""

from datetime import datetime

import pytest

from cartinder.exceptions import StoreError


class TestCars:

    @pytest.mark.asyncio
    async def test_list_cars(self, test_client):
        response = await test_client.get("/cars")

        assert response.status_code == 200
        cars = response.json()
        assert [car["car_id"] for car in cars] == [1, 2]
        assert cars[0]["dealer_name"] == "City Motors"
        assert cars[0]["total_likes"] == 3
        assert cars[1]["avg_rating"] is None

    @pytest.mark.asyncio
    async def test_rows_pass_through_as_returned(self, test_client, fake_store):
        fake_store.cars[0]["avg_rating"] = 4.5
        fake_store.cars[0]["body_style"] = "Sedan"

        response = await test_client.get("/cars")

        assert response.status_code == 200
        car = response.json()[0]
        assert car["avg_rating"] == 4.5
        assert car["body_style"] == "Sedan"

    @pytest.mark.asyncio
    async def test_trailing_slash_redirects(self, test_client, fake_store):
        response = await test_client.get("/cars/")

        assert response.status_code == 307
        assert response.headers["location"].endswith("/cars")
        assert fake_store.calls == []

    @pytest.mark.asyncio
    async def test_list_cars_store_error(self, test_client, fake_store, store_outage):
        fake_store.failure = store_outage

        response = await test_client.get("/cars")

        assert response.status_code == 500
        assert response.json() == {"error": "Can't connect to MySQL server on 'db'"}


class TestLike:

    @pytest.mark.asyncio
    async def test_like_car(self, test_client, fake_store):
        response = await test_client.post("/api/like", json={"user_id": 1, "car_id": 2})

        assert response.status_code == 200
        assert response.json() == {"message": "Car liked!"}
        assert ("1", "2") in fake_store.likes

    @pytest.mark.asyncio
    async def test_ids_are_forwarded_without_coercion(self, test_client, fake_store):
        response = await test_client.post("/api/like", json={"user_id": "1", "car_id": 2.5})

        assert response.status_code == 200
        assert ("1", "2.5") in fake_store.likes

    @pytest.mark.asyncio
    async def test_value_rejected_by_store_is_db_error(self, test_client, fake_store):
        fake_store.failure = StoreError(message="Incorrect integer value: '2.5' for column 'car_id'")

        response = await test_client.post("/api/like", json={"user_id": 1, "car_id": 2.5})

        assert response.status_code == 500
        assert response.json() == {"message": "DB error"}

    @pytest.mark.asyncio
    async def test_like_twice_keeps_one_row(self, test_client, fake_store):
        first = await test_client.post("/api/like", json={"user_id": 1, "car_id": 2})
        second = await test_client.post("/api/like", json={"user_id": 1, "car_id": 2})

        assert first.status_code == 200
        assert second.status_code == 200
        assert len(fake_store.likes) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {},
        {"user_id": 1},
        {"car_id": 2},
        {"user_id": None, "car_id": 2},
        {"user_id": "", "car_id": 2},
    ])
    async def test_like_missing_data(self, test_client, fake_store, body):
        response = await test_client.post("/api/like", json=body)

        assert response.status_code == 400
        assert response.json() == {"message": "Missing data"}
        assert fake_store.calls == []

    @pytest.mark.asyncio
    async def test_like_without_body(self, test_client, fake_store):
        response = await test_client.post("/api/like")

        assert response.status_code == 400
        assert response.json() == {"message": "Missing data"}

    @pytest.mark.asyncio
    async def test_like_store_error_is_generic(self, test_client, fake_store, store_outage):
        fake_store.failure = store_outage

        response = await test_client.post("/api/like", json={"user_id": 1, "car_id": 2})

        assert response.status_code == 500
        assert response.json() == {"message": "DB error"}


class TestResetLikes:

    @pytest.mark.asyncio
    async def test_reset_removes_only_that_users_likes(self, test_client, fake_store):
        await test_client.post("/api/like", json={"user_id": 1, "car_id": 1})
        await test_client.post("/api/like", json={"user_id": 1, "car_id": 2})
        await test_client.post("/api/like", json={"user_id": 2, "car_id": 1})

        response = await test_client.request("DELETE", "/api/resetLikes", json={"user_id": 1})

        assert response.status_code == 200
        assert response.json() == {"message": "Likes reset successfully!"}
        assert list(fake_store.likes) == [("2", "1")]

    @pytest.mark.asyncio
    async def test_reset_without_likes_is_noop(self, test_client):
        response = await test_client.request("DELETE", "/api/resetLikes", json={"user_id": 99})

        assert response.status_code == 200
        assert response.json() == {"message": "Likes reset successfully!"}

    @pytest.mark.asyncio
    async def test_reset_store_error(self, test_client, fake_store, store_outage):
        fake_store.failure = store_outage

        response = await test_client.request("DELETE", "/api/resetLikes", json={"user_id": 1})

        assert response.status_code == 500
        assert response.json() == {"message": "DB error"}


class TestTestDrive:

    BOOKING = {"user_id": 1, "car_id": 2, "date": "2025-03-14"}

    @pytest.mark.asyncio
    async def test_book_then_duplicate(self, test_client):
        first = await test_client.post("/testdrive", json=self.BOOKING)
        second = await test_client.post("/testdrive", json=self.BOOKING)

        assert first.status_code == 200
        assert first.json() == {"message": "Test drive booked successfully!"}
        assert second.status_code == 400
        assert second.json() == {"message": "You already booked this car on this date."}

    @pytest.mark.asyncio
    async def test_same_car_other_date_is_allowed(self, test_client):
        await test_client.post("/testdrive", json=self.BOOKING)

        response = await test_client.post(
            "/testdrive", json={**self.BOOKING, "date": "2025-03-15"}
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["user_id", "car_id", "date"])
    async def test_missing_fields_never_reach_store(self, test_client, fake_store, missing):
        body = {k: v for k, v in self.BOOKING.items() if k != missing}

        response = await test_client.post("/testdrive", json=body)

        assert response.status_code == 400
        assert response.json() == {"message": "Missing fields"}
        assert fake_store.calls == []

    @pytest.mark.asyncio
    @pytest.mark.asyncio
    async def test_numeric_date_reaches_store(self, test_client, fake_store):
        response = await test_client.post("/testdrive", json={**self.BOOKING, "date": 20250314})

        assert response.status_code == 200
        assert ("1", "2", 20250314) in fake_store.bookings

    @pytest.mark.asyncio
    async def test_structured_date_fails_as_store_error(self, test_client, fake_store):
        fake_store.failure = StoreError(message="dict can not be used as parameter")

        response = await test_client.post(
            "/testdrive", json={**self.BOOKING, "date": {"day": 14}}
        )

        assert response.status_code == 500
        assert response.json() == {"message": "dict can not be used as parameter"}
        assert fake_store.calls == ["book_test_drive"]

    @pytest.mark.asyncio
    async def test_other_store_error_returns_store_text(self, test_client, fake_store):
        fake_store.failure = StoreError(message="Incorrect date value: 'tomorrow'")

        response = await test_client.post(
            "/testdrive", json={**self.BOOKING, "date": "tomorrow"}
        )

        assert response.status_code == 500
        assert response.json() == {"message": "Incorrect date value: 'tomorrow'"}


class TestLikedCars:

    @pytest.mark.asyncio
    async def test_liked_cars(self, test_client):
        await test_client.post("/api/like", json={"user_id": 5, "car_id": 2})

        response = await test_client.get("/liked/5")

        assert response.status_code == 200
        assert [car["car_id"] for car in response.json()] == [2]

    @pytest.mark.asyncio
    async def test_no_likes_is_empty_list(self, test_client):
        response = await test_client.get("/liked/42")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_liked_cars_store_error(self, test_client, fake_store, store_outage):
        fake_store.failure = store_outage

        response = await test_client.get("/liked/5")

        assert response.status_code == 500
        assert response.json() == {"error": "Can't connect to MySQL server on 'db'"}


class TestDealerLogs:

    @pytest.mark.asyncio
    async def test_logs_newest_first(self, test_client, fake_store):
        fake_store.dealer_logs = [
            {"log_id": 1, "action": "price_update", "logged_at": datetime(2025, 1, 1, 9, 0)},
            {"log_id": 2, "action": "new_listing", "logged_at": datetime(2025, 1, 2, 9, 0)},
        ]

        response = await test_client.get("/dealer/logs")

        assert response.status_code == 200
        logs = response.json()
        assert [row["log_id"] for row in logs] == [2, 1]
        assert logs[0]["logged_at"].startswith("2025-01-02T09:00:00")

    @pytest.mark.asyncio
    async def test_logs_store_error(self, test_client, fake_store, store_outage):
        fake_store.failure = store_outage

        response = await test_client.get("/dealer/logs")

        assert response.status_code == 500
        assert response.json() == {"error": "Can't connect to MySQL server on 'db'"}


class TestServiceEndpoints:

    @pytest.mark.asyncio
    async def test_health_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_unhealthy(self, test_client, fake_store, store_outage):
        fake_store.failure = store_outage

        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_landing_page(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert "Car Tinder" in response.text

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/cars", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_static_asset_is_served(self, test_client):
        response = await test_client.get("/index.html")

        assert response.status_code == 200
        assert "Car Tinder" in response.text

    @pytest.mark.asyncio
    async def test_unknown_path_is_404(self, test_client):
        response = await test_client.get("/no-such-page.html")

        assert response.status_code == 404
