"""
Freshrack Backend — HTTP API Tests
====================================

What:  End-to-end behaviour of the routes: status codes, envelopes, route
       ordering, and error bodies.
How:   HTTPX AsyncClient over ASGITransport; the database dependency is
       overridden with a per-test SQLite session and the clock is pinned.

What we test:
    ✅ GET / liveness text and GET /health
    ✅ 201 + {success, insertedId} on create
    ✅ static segments (/stats, /expired, ...) are not read as Ids
    ✅ 404 vs 500 envelopes for unknown vs malformed Ids
    ✅ merge-patch and delete-twice through HTTP
    ✅ non-string values under typed keys, regular-expression search
    ✅ notes endpoints
"""

import uuid
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from freshrack.database import get_db_session
from freshrack.services.expiry import to_iso


async def _post_food(client, **fields):
    response = await client.post("/api/foods", json=fields)
    assert response.status_code == 201
    return response.json()["insertedId"]


class TestLiveness:

    @pytest.mark.asyncio
    async def test_root_text(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert response.text == "Freshrack server is running"

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"


class TestFoodsApi:

    @pytest.mark.asyncio
    async def test_create_returns_envelope(self, test_client, fixed_now):
        response = await test_client.post(
            "/api/foods",
            json={"foodTitle": "Milk", "_id": "mine", "addedDate": "1999-01-01"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        uuid.UUID(body["insertedId"])

        food = (await test_client.get(f"/api/foods/{body['insertedId']}")).json()
        assert food["_id"] == body["insertedId"]
        assert food["addedDate"] == to_iso(fixed_now)

    @pytest.mark.asyncio
    async def test_create_without_body(self, test_client):
        response = await test_client.post("/api/foods")
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_non_object_body_is_500(self, test_client):
        response = await test_client.post("/api/foods", json=["not", "an", "object"])
        assert response.status_code == 500
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_list_with_query_filters(self, test_client):
        await _post_food(test_client, foodTitle="Apple", category="Fruit")
        await _post_food(test_client, foodTitle="Milk", category="Dairy")

        everything = await test_client.get("/api/foods", params={"category": "All"})
        assert len(everything.json()) == 2

        fruit = await test_client.get("/api/foods", params={"category": "Fruit"})
        assert [food["foodTitle"] for food in fruit.json()] == ["Apple"]

        searched = await test_client.get("/api/foods", params={"search": "APP"})
        assert [food["foodTitle"] for food in searched.json()] == ["Apple"]

    @pytest.mark.asyncio
    async def test_non_string_typed_values_round_trip(self, test_client):
        response = await test_client.post("/api/foods", json={"foodTitle": 5, "category": ["a", "b"]})
        assert response.status_code == 201
        food_id = response.json()["insertedId"]

        food = (await test_client.get(f"/api/foods/{food_id}")).json()
        assert food["foodTitle"] == 5
        assert food["category"] == ["a", "b"]

        patched = await test_client.put(f"/api/foods/{food_id}", json={"foodTitle": None})
        assert patched.json() == {"success": True, "modifiedCount": 1}
        food = (await test_client.get(f"/api/foods/{food_id}")).json()
        assert food["foodTitle"] is None

    @pytest.mark.asyncio
    async def test_search_accepts_regular_expressions(self, test_client):
        await _post_food(test_client, foodTitle="Apple")
        await _post_food(test_client, foodTitle="Pineapple")

        anchored = await test_client.get("/api/foods", params={"search": "^app"})
        assert [food["foodTitle"] for food in anchored.json()] == ["Apple"]

        invalid = await test_client.get("/api/foods", params={"search": "[a-"})
        assert invalid.status_code == 500
        assert invalid.json()["success"] is False

    @pytest.mark.asyncio
    async def test_static_segments_are_not_ids(self, test_client, fixed_now):
        await _post_food(test_client, foodTitle="old", expiryDate=to_iso(fixed_now - timedelta(seconds=1)))
        await _post_food(test_client, foodTitle="soon", expiryDate=to_iso(fixed_now + timedelta(days=2)))
        await _post_food(test_client, foodTitle="later", expiryDate=to_iso(fixed_now + timedelta(days=10)))

        stats = await test_client.get("/api/foods/stats")
        assert stats.status_code == 200
        assert stats.json() == {"total": 3, "expired": 1, "nearlyExpired": 1, "safe": 1}

        expired = await test_client.get("/api/foods/expired")
        assert [food["foodTitle"] for food in expired.json()] == ["old"]

        nearly = await test_client.get("/api/foods/nearly-expired")
        assert [food["foodTitle"] for food in nearly.json()] == ["soon"]

    @pytest.mark.asyncio
    async def test_foods_by_user(self, test_client):
        await _post_food(test_client, foodTitle="Tofu", userEmail="cook@example.com")

        response = await test_client.get("/api/foods/user/cook@example.com")
        assert response.status_code == 200
        assert [food["foodTitle"] for food in response.json()] == ["Tofu"]

        empty = await test_client.get("/api/foods/user/nobody@example.com")
        assert empty.status_code == 200
        assert empty.json() == []

    @pytest.mark.asyncio
    async def test_unknown_id_is_404(self, test_client):
        response = await test_client.get(f"/api/foods/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Food not found"}

    @pytest.mark.asyncio
    async def test_malformed_id_is_500(self, test_client):
        response = await test_client.get("/api/foods/not-a-valid-id")
        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert "badly formed" in body["message"]

    @pytest.mark.asyncio
    async def test_put_merges_fields(self, test_client):
        food_id = await _post_food(test_client, foodTitle="Milk", category="Dairy", quantity=1)

        response = await test_client.put(f"/api/foods/{food_id}", json={"quantity": 2})
        assert response.status_code == 200
        assert response.json() == {"success": True, "modifiedCount": 1}

        food = (await test_client.get(f"/api/foods/{food_id}")).json()
        assert food["quantity"] == 2
        assert food["category"] == "Dairy"

        unchanged = await test_client.put(f"/api/foods/{food_id}", json={"quantity": 2})
        assert unchanged.json() == {"success": True, "modifiedCount": 0}

    @pytest.mark.asyncio
    async def test_put_unknown_id_is_404(self, test_client):
        response = await test_client.put(f"/api/foods/{uuid.uuid4()}", json={"a": 1})
        assert response.status_code == 404
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client):
        food_id = await _post_food(test_client, foodTitle="Milk")

        first = await test_client.delete(f"/api/foods/{food_id}")
        assert first.status_code == 200
        assert first.json() == {"success": True, "deletedCount": 1}

        second = await test_client.delete(f"/api/foods/{food_id}")
        assert second.status_code == 404
        assert second.json() == {"success": False, "message": "Food not found"}

    @pytest.mark.asyncio
    async def test_store_failure_is_500_with_message(self, test_client):
        from freshrack.main import app

        async def broken_session():
            session = AsyncMock()
            session.execute = AsyncMock(side_effect=OSError("connection refused"))
            yield session

        app.dependency_overrides[get_db_session] = broken_session
        response = await test_client.get("/api/foods")
        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "connection refused"}


class TestNotesApi:

    @pytest.mark.asyncio
    async def test_add_and_list_notes(self, test_client, fixed_now):
        food_id = await _post_food(test_client, foodTitle="Milk")

        created = await test_client.post(
            f"/api/foods/{food_id}/notes",
            json={"text": "opened", "foodId": "ignored"},
        )
        assert created.status_code == 201
        assert created.json()["success"] is True

        notes = (await test_client.get(f"/api/foods/{food_id}/notes")).json()
        assert len(notes) == 1
        assert notes[0]["foodId"] == food_id
        assert notes[0]["addedDate"] == to_iso(fixed_now)
        assert notes[0]["text"] == "opened"

    @pytest.mark.asyncio
    async def test_no_notes_is_empty_array(self, test_client):
        response = await test_client.get(f"/api/foods/{uuid.uuid4()}/notes")
        assert response.status_code == 200
        assert response.json() == []
