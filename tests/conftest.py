"""Shared test fixtures.

Each test gets its own SQLite file so no PostgreSQL or Redis is needed.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from soundtrek.config import Settings
from soundtrek.database import close_db, get_engine, get_session, init_db
from soundtrek.db import models  # noqa: F401
from soundtrek.db.base import Base
from soundtrek.main import create_app

TEST_PASSWORD = "CorrectHorse9"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite database, Redis disabled."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'soundtrek_test.db'}",
        redis_url="",
        jwt_secret="test-secret-that-is-long-enough-for-hs256",
        log_format="console",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database(settings: Settings) -> AsyncGenerator[None, None]:
    """Initialise the engine and create the schema."""
    await init_db(settings.database_url)
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await close_db()


@pytest_asyncio.fixture
async def client(settings: Settings, database: None) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to a fresh app."""
    app = create_app(settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def db_session(database: None) -> AsyncGenerator[AsyncSession, None]:
    """A direct database session for service-level tests. Do not combine with ``client``."""
    sessions = get_session()
    session = await sessions.__anext__()
    yield session
    await sessions.aclose()


async def register(
    client: AsyncClient,
    username: str = "alice",
    email: str = "alice@example.com",
    password: str = TEST_PASSWORD,
) -> dict:
    """Register a user over HTTP and return the response body."""
    response = await client.post("/register", json={
        "username": username,
        "password": password,
        "email": email,
    })
    assert response.status_code == 201, response.text
    return response.json()


@pytest_asyncio.fixture
async def registered_user(client: AsyncClient) -> dict:
    """Register alice. Returns ``{"token": ..., "userId": ...}``."""
    return await register(client)


@pytest_asyncio.fixture
async def authed_client(client: AsyncClient, registered_user: dict) -> AsyncClient:
    """Client sending alice's bearer token."""
    client.headers["Authorization"] = f"Bearer {registered_user['token']}"
    return client
