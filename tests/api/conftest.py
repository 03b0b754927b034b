"""API test fixtures — FastAPI test client wired to the in-memory database.

Invariants:
    - get_db dependency overridden to use the test session factory
    - db_manager patched so the readiness probe sees the test engine
"""

import pytest
from httpx import ASGITransport, AsyncClient

from user_service.infrastructure.database import get_db, DatabaseSessionManager
import user_service.infrastructure.database as db_module
from user_service.main import app


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def create_user(client):
    """POST a user and return the decoded response body."""
    async def _create(name: str, email: str, password: str = "p") -> dict:
        res = await client.post(
            "/users", json={"name": name, "password": password, "email": email},
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _create
