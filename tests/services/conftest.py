"""Service test fixtures — repository over the in-memory DB, use case over a mock.

Design Decisions:
    - Use-case tests mock the repository with AsyncMock: the rules under test
      (timeouts, conflict, existence) do not need SQL
"""

from unittest.mock import AsyncMock

import pytest

from user_service.services.user_repository import SqlUserRepository
from user_service.services.user_usecase import UserUsecase


@pytest.fixture
def repository(test_db):
    return SqlUserRepository(test_db)


@pytest.fixture
def mock_repo():
    return AsyncMock()


@pytest.fixture
def usecase(mock_repo):
    return UserUsecase(mock_repo, timeout_seconds=2.0)
