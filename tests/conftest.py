"""Shared test fixtures.

Tests run against a throwaway SQLite database (aiosqlite) per test; the
upsert statements compile for SQLite as well as PostgreSQL.
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from oracle.catalog.seed import seed_catalog
from oracle.config import get_settings
from oracle.database import close_db, get_engine, get_session, init_db
from oracle.db.base import Base
from oracle.main import create_app

TEST_JWT_SECRET = "oracle-test-secret-0123456789abcdef0123456789abcdef"


@pytest.fixture(autouse=True)
def test_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Point the settings at a per-test SQLite file and a known JWT secret."""
    monkeypatch.setenv("ORACLE_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'oracle.db'}")
    monkeypatch.setenv("ORACLE_JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("ORACLE_LOG_FORMAT", "console")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def database(test_settings) -> AsyncGenerator[None, None]:
    """Create the schema and seed the catalog."""
    await init_db(test_settings.database_url)
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    sessions = get_session()
    session = await sessions.__anext__()
    await seed_catalog(session)
    await sessions.aclose()

    yield

    await close_db()


@pytest_asyncio.fixture
async def db_session(database) -> AsyncGenerator[AsyncSession, None]:
    """Get a direct database session for service calls and assertions."""
    sessions = get_session()
    session = await sessions.__anext__()
    yield session
    await sessions.aclose()


@pytest_asyncio.fixture
async def client(database) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against a fresh app with the database ready."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def bare_client(test_settings) -> AsyncGenerator[AsyncClient, None]:
    """Client whose database was never initialized; any DB access would fail."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def user_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def auth_headers(user_id: str) -> dict[str, str]:
    """Bearer header for ``user_id``, signed like the identity provider does."""
    from oracle.auth.jwt import create_access_token

    token = create_access_token(user_id, email="player@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def authed_client(client: AsyncClient, auth_headers: dict[str, str]) -> AsyncClient:
    client.headers.update(auth_headers)
    return client
