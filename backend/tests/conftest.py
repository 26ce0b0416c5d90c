"""
Kacchi Likhavat Backend — Test Configuration (conftest.py)
===========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment variables are set before anything from `likhavat` is
       imported, so the settings singleton and the engine point at a
       throwaway SQLite database.

Fixture Hierarchy:
    ├── mock_db_session:  AsyncMock session for service unit tests
    ├── database:         creates all tables before a test, drops them after
    ├── test_client:      HTTPX AsyncClient wired to the app (needs database)
    ├── register_user:    factory that registers an account, returns an ApiUser
    ├── alice / bob:      two registered users for ownership tests
    └── room_id:          a room owned by alice
"""

import os
import tempfile
import uuid
from dataclasses import dataclass
from typing import Dict, Optional
from unittest.mock import AsyncMock, MagicMock

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup (before any likhavat import)
# ══════════════════════════════════════════════════════════════════════════

_db_dir = tempfile.mkdtemp(prefix="likhavat_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET"] = "test-secret-that-is-long-enough-for-hs256-signing"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

import likhavat.models  # noqa: E402,F401
from likhavat.database import Base, engine  # noqa: E402


@dataclass
class ApiUser:
    id: str
    email: str
    token: str

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
        result = await note_service.get(mock_db_session, user_id, note_id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# API fixtures (real app, SQLite database)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # Pooled aiosqlite connections belong to this test's event loop
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient routed straight into the ASGI app (no server).

    Usage:
        response = await test_client.get("/health")
    """
    from likhavat.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_user(test_client):
    async def _register(email: Optional[str] = None, password: str = "secret123", name: str = "Tester") -> ApiUser:
        email = email or f"user-{uuid.uuid4().hex[:8]}@example.com"
        response = await test_client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return ApiUser(id=data["user"]["id"], email=email, token=data["token"])
    return _register


@pytest_asyncio.fixture
async def alice(register_user) -> ApiUser:
    return await register_user(email="alice@example.com", name="Alice")


@pytest_asyncio.fixture
async def bob(register_user) -> ApiUser:
    return await register_user(email="bob@example.com", name="Bob")


@pytest_asyncio.fixture
async def room_id(test_client, alice) -> str:
    response = await test_client.post(
        "/api/rooms",
        json={"type": "note", "title": "Workspace"},
        headers=alice.headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["id"]
