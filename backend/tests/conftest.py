"""Root conftest - shared test configuration and in-memory store fixtures.

Invariants:
    - Every test that asks for the store gets a fresh in-memory SQLite database
    - Environment defaults are set before any vinyl_api settings are read

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for store and route tests
      (PostgreSQL-specific behavior is not exercised here)
"""

import os

# Ensure tests never reach a real database or emit JSON logs into pytest output
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from vinyl_api.db.base import Base  # noqa: E402
import vinyl_api.models  # noqa: E402,F401


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session
