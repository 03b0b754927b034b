"""User Use Case — business rules above the repository, each call bounded by a deadline.

Invariants:
    - Every public operation runs under asyncio.wait_for(timeout_seconds);
      expiry cancels the in-flight repository call and raises DeadlineExceededError
    - fetch with num <= 0 fetches DEFAULT_PAGE_SIZE rows
    - signup rejects an email that already exists (EmailConflictError)
    - delete requires the target to exist (ResourceNotFoundError otherwise)
    - update stamps updated_at with the current UTC time

Design Decisions:
    - Timeout passed to the constructor (from Settings), no module-level constant
    - Email check is read-then-write: two concurrent signups with the same email
      can both succeed; the table carries no unique constraint to stop them
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, TypeVar

from user_service.core.domain_types import DEFAULT_PAGE_SIZE, Cursor, UserId
from user_service.core.errors import (
    DeadlineExceededError, EmailConflictError, ResourceNotFoundError,
)
from user_service.core.repository_protocols import UserRepository
from user_service.core.user import User

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UserUsecase:
    """Application service for user records."""

    def __init__(self, repository: UserRepository, timeout_seconds: float):
        self.repository = repository
        self.timeout_seconds = timeout_seconds

    async def _bounded(self, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(f"User operation exceeded {self.timeout_seconds}s")
            raise DeadlineExceededError(self.timeout_seconds)

    async def fetch(self, cursor: str, num: int) -> tuple[list[User], Cursor]:
        if num <= 0:
            num = DEFAULT_PAGE_SIZE
        return await self._bounded(self.repository.fetch(cursor, num))

    async def get_by_id(self, user_id: UserId) -> User:
        return await self._bounded(self.repository.get_by_id(user_id))

    async def get_by_email(self, email: str) -> User:
        return await self._bounded(self.repository.get_by_email(email))

    async def update(self, user: User) -> User:
        user.updated_at = datetime.now(timezone.utc)
        return await self._bounded(self.repository.update(user))

    async def signup(self, user: User) -> User:
        """Create a user unless the email is already taken."""
        return await self._bounded(self._signup(user))

    async def _signup(self, user: User) -> User:
        if await self._find_by_email(user.email) is not None:
            logger.info("Signup rejected: email already registered")
            raise EmailConflictError(user.email)
        return await self.repository.create(user)

    async def _find_by_email(self, email: str) -> User | None:
        try:
            return await self.repository.get_by_email(email)
        except ResourceNotFoundError:
            return None

    async def delete(self, user_id: UserId) -> None:
        """Delete an existing user; missing targets raise ResourceNotFoundError."""
        await self._bounded(self._delete(user_id))

    async def _delete(self, user_id: UserId) -> None:
        await self.repository.get_by_id(user_id)
        await self.repository.delete(user_id)
