"""User Use Case — business rules over a mocked repository.

Tests cover:
    - fetch defaults num to 10 and forwards the repository's next cursor
    - signup conflict / success / lookup failure propagation
    - delete existence pre-check
    - update stamps updated_at
    - every call bounded by the configured timeout
"""

import asyncio
from datetime import datetime, timezone

import pytest

from user_service.core.domain_types import Cursor, UserId
from user_service.core.errors import (
    DatabaseError, DeadlineExceededError, EmailConflictError,
    ResourceNotFoundError, UnexpectedAffectedRowsError,
)
from user_service.core.user import User
from user_service.services.user_usecase import UserUsecase


def _user(**overrides) -> User:
    data = {"name": "Name", "password": "p", "email": "name@example.com"}
    data.update(overrides)
    return User(**data)


# ─── fetch ───────────────────────────────────────────────────────

async def test_fetch_zero_num_uses_default_page_size(usecase, mock_repo):
    mock_repo.fetch.return_value = ([], Cursor(""))
    await usecase.fetch("", 0)
    mock_repo.fetch.assert_awaited_once_with("", 10)


async def test_fetch_negative_num_uses_default_page_size(usecase, mock_repo):
    mock_repo.fetch.return_value = ([], Cursor(""))
    await usecase.fetch("", -3)
    mock_repo.fetch.assert_awaited_once_with("", 10)


async def test_fetch_passes_num_and_cursor_through(usecase, mock_repo):
    mock_repo.fetch.return_value = ([_user()], Cursor("next-cursor"))
    users, next_cursor = await usecase.fetch("12", 1)
    mock_repo.fetch.assert_awaited_once_with("12", 1)
    assert len(users) == 1
    assert next_cursor == "next-cursor"


async def test_fetch_propagates_repository_error(usecase, mock_repo):
    mock_repo.fetch.side_effect = DatabaseError("boom", "query")
    with pytest.raises(DatabaseError):
        await usecase.fetch("", 5)


# ─── get_by_id / get_by_email ────────────────────────────────────

async def test_get_by_id_passes_through(usecase, mock_repo):
    mock_repo.get_by_id.return_value = _user(id=UserId(7))
    user = await usecase.get_by_id(UserId(7))
    assert user.id == 7


async def test_get_by_email_propagates_not_found(usecase, mock_repo):
    mock_repo.get_by_email.side_effect = ResourceNotFoundError("User", "x")
    with pytest.raises(ResourceNotFoundError):
        await usecase.get_by_email("x")


# ─── signup ──────────────────────────────────────────────────────

async def test_signup_creates_when_email_is_free(usecase, mock_repo):
    new_user = _user()
    mock_repo.get_by_email.side_effect = ResourceNotFoundError("User", new_user.email)

    async def _create(user):
        user.id = UserId(42)
        return user
    mock_repo.create.side_effect = _create

    created = await usecase.signup(new_user)

    assert created.id == 42
    assert new_user.id == 42
    mock_repo.get_by_email.assert_awaited_once_with("name@example.com")


async def test_signup_rejects_existing_email(usecase, mock_repo):
    mock_repo.get_by_email.return_value = _user(id=UserId(1))
    with pytest.raises(EmailConflictError) as exc_info:
        await usecase.signup(_user())
    assert exc_info.value.http_status == 409
    mock_repo.create.assert_not_awaited()


async def test_signup_propagates_lookup_failure(usecase, mock_repo):
    mock_repo.get_by_email.side_effect = DatabaseError("down", "query")
    with pytest.raises(DatabaseError):
        await usecase.signup(_user())
    mock_repo.create.assert_not_awaited()


# ─── update ──────────────────────────────────────────────────────

async def test_update_stamps_updated_at(usecase, mock_repo):
    user = _user(id=UserId(3))
    mock_repo.update.side_effect = lambda u: u
    before = datetime.now(timezone.utc)

    await usecase.update(user)

    assert user.updated_at is not None
    assert user.updated_at >= before
    mock_repo.update.assert_awaited_once_with(user)


async def test_update_propagates_unexpected_affected_rows(usecase, mock_repo):
    mock_repo.update.side_effect = UnexpectedAffectedRowsError("update", 0)
    with pytest.raises(UnexpectedAffectedRowsError):
        await usecase.update(_user(id=UserId(3)))


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_existing_user(usecase, mock_repo):
    mock_repo.get_by_id.return_value = _user(id=UserId(5))
    await usecase.delete(UserId(5))
    mock_repo.delete.assert_awaited_once_with(5)


async def test_delete_missing_user_is_not_found(usecase, mock_repo):
    mock_repo.get_by_id.side_effect = ResourceNotFoundError("User", "5")
    with pytest.raises(ResourceNotFoundError):
        await usecase.delete(UserId(5))
    mock_repo.delete.assert_not_awaited()


# ─── timeout ─────────────────────────────────────────────────────

async def test_slow_repository_call_exceeds_deadline(mock_repo):
    cancelled = asyncio.Event()

    async def _slow(user_id):
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.set()
            raise
    mock_repo.get_by_id.side_effect = _slow

    usecase = UserUsecase(mock_repo, timeout_seconds=0.01)
    with pytest.raises(DeadlineExceededError) as exc_info:
        await usecase.get_by_id(UserId(1))

    assert cancelled.is_set()
    assert exc_info.value.http_status == 500


async def test_signup_lookup_and_insert_share_one_deadline(mock_repo):
    async def _lookup(email):
        await asyncio.sleep(0.03)
        raise ResourceNotFoundError("User", email)

    async def _create(user):
        await asyncio.sleep(0.03)
        return user

    mock_repo.get_by_email.side_effect = _lookup
    mock_repo.create.side_effect = _create

    usecase = UserUsecase(mock_repo, timeout_seconds=0.05)
    with pytest.raises(DeadlineExceededError):
        await usecase.signup(_user())
