"""
Kacchi Likhavat Backend — Error Envelope and Middleware Tests
==============================================================

What we test:
    - unknown routes, wrong methods and bad path ids use the error envelope
    - request validation errors name the failing field
    - service failures map to 500 without leaking internals
    - X-Request-ID is generated or echoed
    - the rate limiter answers 429 with Retry-After
    - GET / and GET /health
"""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from likhavat.config import settings
from likhavat.exceptions import DatabaseError
from likhavat.middleware.rate_limit import RateLimitMiddleware
from likhavat.routes import rooms as rooms_routes


class TestErrorEnvelope:

    @pytest.mark.asyncio
    async def test_unknown_route(self, test_client):
        response = await test_client.get("/api/nothing-here")
        assert response.status_code == 404
        body = response.json()
        assert body == {
            "success": False,
            "message": "Route /api/nothing-here not found",
            "error": "not_found",
            "requestId": response.headers["X-Request-ID"],
        }

    @pytest.mark.asyncio
    async def test_method_not_allowed(self, test_client, alice):
        response = await test_client.patch("/api/rooms", json={}, headers=alice.headers)
        assert response.status_code == 405
        assert response.json()["error"] == "method_not_allowed"

    @pytest.mark.asyncio
    async def test_invalid_uuid_in_path(self, test_client, alice):
        response = await test_client.get("/api/rooms/not-a-uuid", headers=alice.headers)
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"].startswith("room_id:")

    @pytest.mark.asyncio
    async def test_missing_body_field(self, test_client, alice):
        response = await test_client.post("/api/notes", json={"title": "orphan"}, headers=alice.headers)
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "roomId: Field required"
        assert body["details"]["fields"][0]["field"] == "roomId"

    @pytest.mark.asyncio
    async def test_custom_validator_message(self, test_client, alice):
        response = await test_client.post(
            "/api/rooms", json={"type": "diary", "title": "x"}, headers=alice.headers
        )
        assert response.status_code == 400
        assert response.json()["message"] == (
            "type: Invalid room type. Choose from: note, journal, story, free"
        )


class TestServerErrors:

    @pytest.mark.asyncio
    async def test_database_error_is_generic(self, test_client, alice, monkeypatch):
        monkeypatch.setattr(
            rooms_routes.room_service,
            "list",
            AsyncMock(side_effect=DatabaseError(context={"sql": "SELECT secret"})),
        )
        response = await test_client.get("/api/rooms", headers=alice.headers)
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "SELECT" not in response.text
        assert body["requestId"]

    @pytest.mark.asyncio
    async def test_unexpected_error(self, database, alice, monkeypatch):
        from likhavat.main import app

        monkeypatch.setattr(
            rooms_routes.room_service, "list", AsyncMock(side_effect=RuntimeError("boom"))
        )
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/rooms", headers=alice.headers)

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "internal_server_error"
        # outside production the raw error is included
        assert body["details"] == {"error": "boom"}

    @pytest.mark.asyncio
    async def test_unexpected_error_hidden_in_production(self, database, alice, monkeypatch):
        from likhavat.main import app

        monkeypatch.setattr(settings, "environment", "production")
        monkeypatch.setattr(
            rooms_routes.room_service, "list", AsyncMock(side_effect=RuntimeError("boom"))
        )
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/rooms", headers=alice.headers)

        assert response.status_code == 500
        assert "details" not in response.json()
        assert "boom" not in response.text


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated(self, test_client):
        response = await test_client.get("/")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_echoed(self, test_client):
        response = await test_client.get("/api/missing", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"
        assert response.json()["requestId"] == "trace-123"


class TestRateLimit:

    @pytest.mark.asyncio
    async def test_limit_exceeded(self, monkeypatch):
        monkeypatch.setattr(settings, "rate_limit_requests", 2)
        app = FastAPI()
        app.add_middleware(RateLimitMiddleware)

        @app.get("/ping")
        async def ping():
            return {"ok": True}

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            assert (await client.get("/ping")).status_code == 200
            assert (await client.get("/ping")).status_code == 200
            limited = await client.get("/ping")

        assert limited.status_code == 429
        assert limited.json()["error"] == "rate_limit_exceeded"
        assert int(limited.headers["Retry-After"]) >= 1

    @pytest.mark.asyncio
    async def test_health_is_never_limited(self, monkeypatch):
        monkeypatch.setattr(settings, "rate_limit_requests", 1)
        app = FastAPI()
        app.add_middleware(RateLimitMiddleware)

        @app.get("/health")
        async def health():
            return {"ok": True}

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            statuses = [(await client.get("/health")).status_code for _ in range(3)]
        assert statuses == [200, 200, 200]


class TestRootAndHealth:

    @pytest.mark.asyncio
    async def test_root(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["docs"] == "/docs"
        assert body["data"]["version"]

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["uptime_seconds"] >= 0

    @pytest.mark.asyncio
    async def test_health_reports_unreachable_database(self, test_client, monkeypatch):
        from likhavat.routes import health as health_routes

        class BrokenEngine:
            def connect(self):
                raise ConnectionError("database is down")

        monkeypatch.setattr(health_routes, "engine", BrokenEngine())
        response = await test_client.get("/health")
        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"
