"""Root conftest — shared test configuration and in-memory database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Settings never point at a real PostgreSQL instance during tests

Design Decisions:
    - SQLite in-memory via aiosqlite: fast, no external dependency
    - StaticPool: all sessions share the single in-memory connection
"""

import os
from datetime import datetime, timedelta, timezone

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from user_service.db.base import Base
from user_service.db.session import session_factory_for
from user_service.models.user import UserRow

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return session_factory_for(test_engine)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seed_users(test_db):
    """Five users created one minute apart, inserted out of order."""
    rows = [
        UserRow(
            name=f"user{i}",
            password=f"secret{i}",
            email=f"user{i}@example.com",
            created_at=BASE_TIME + timedelta(minutes=i),
            updated_at=BASE_TIME + timedelta(minutes=i),
        )
        for i in (3, 0, 4, 1, 2)
    ]
    test_db.add_all(rows)
    await test_db.commit()
    return sorted(rows, key=lambda r: r.created_at)
