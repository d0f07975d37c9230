"""Shared test fixtures.

Tests run against an in-memory SQLite database (aiosqlite). Redis is left
uninitialized, so rate limiting is off and notification pushes are skipped
unless a test passes a mock client.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from partybank.bank.wallet_service import create_guest
from partybank.config import get_settings
from partybank.database import close_db, create_tables, get_session, init_db
from partybank.db.models import User
from partybank.main import create_app
from partybank.redis_client import close_redis

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[None, None]:
    """Fresh in-memory schema for each test."""
    get_settings.cache_clear()
    await init_db(TEST_DATABASE_URL)
    await create_tables()
    yield
    await close_db()
    await close_redis()


@pytest_asyncio.fixture
async def db_session(database: None) -> AsyncGenerator[AsyncSession, None]:
    """Direct database session for service tests and assertions."""
    async for session in get_session():
        yield session
        break


@pytest_asyncio.fixture
async def client(database: None) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP test client bound to the in-memory database."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def mock_redis() -> AsyncMock:
    """Redis stand-in recording pub/sub publishes."""
    redis = AsyncMock()
    redis.publish = AsyncMock(return_value=1)
    return redis


@pytest_asyncio.fixture
async def guest(db_session: AsyncSession) -> User:
    """A registered guest with the starting balance."""
    user = await create_guest(db_session, "Alice")
    await db_session.commit()
    return user


@pytest.fixture
def set_balance(db_session: AsyncSession):
    """Force a guest's balance and revive flag."""

    async def _set(user: User, balance: int, has_revived: bool = False) -> None:
        user.balance = balance
        user.has_revived = has_revived
        await db_session.commit()

    return _set
