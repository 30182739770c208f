"""API test fixtures - FastAPI test client over the in-memory store.

Invariants:
    - app.state.db_manager points at the test engine, so the real get_db / VinylRepository run
    - dependency_overrides cleared after every test

Design Decisions:
    - db_manager built with __new__: reuses the test engine instead of opening a pool
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from vinyl_api.infrastructure.database import DatabaseSessionManager
from vinyl_api.main import app
from vinyl_api.models import Track, Vinyl


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with the store bound to the test engine."""
    original_manager = getattr(app.state, "db_manager", None)
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.db_manager = original_manager


@pytest.fixture
async def seed_vinyls(test_db):
    """Insert a small collection with distinct creation times.

    Kind of Blue is the newest, Abbey Road the oldest.
    """
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    rows = [
        Vinyl(
            title="Abbey Road", artist="The Beatles", genre="Rock", year=1969,
            created_at=base,
            tracks=[
                Track(side="B", title="Here Comes the Sun", position=1),
                Track(side="A", title="Come Together", position=1),
            ],
        ),
        Vinyl(
            title="Rumours", artist="Fleetwood Mac", genre="Rock", year=1977,
            created_at=base + timedelta(days=1),
        ),
        Vinyl(
            title="Blue Train", artist="John Coltrane", genre="Jazz", year=1957,
            created_at=base + timedelta(days=2),
        ),
        Vinyl(
            title="Kind of Blue", artist="Miles Davis", genre="Jazz", year=1959,
            created_at=base + timedelta(days=3),
        ),
    ]
    test_db.add_all(rows)
    await test_db.commit()
    return {v.title: v.id for v in rows}
