"""User Repository — SQL access to the `user` table behind the UserRepository protocol.

Invariants:
    - Every statement is a SQLAlchemy expression: user input is always a bound parameter
    - fetch orders by created_at ascending, strictly after the cursor bound
    - next cursor is emitted only when the page came back full (len == num)
    - update/delete must touch exactly one row, otherwise UnexpectedAffectedRowsError
    - SQLAlchemy failures leave this module as DatabaseError

Design Decisions:
    - Rows converted to core.user.User at the boundary: callers never see ORM objects
    - Writes commit immediately: one repository call is one unit of work
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.core.cursor import decode_cursor, encode_cursor
from user_service.core.domain_types import NO_CURSOR, Cursor, UserId
from user_service.core.errors import (
    DatabaseError, ResourceNotFoundError, UnexpectedAffectedRowsError,
)
from user_service.core.user import User
from user_service.models.user import UserRow

logger = logging.getLogger(__name__)


def _to_entity(row: UserRow) -> User:
    return User(
        id=UserId(row.id),
        name=row.name,
        password=row.password,
        email=row.email,
        updated_at=row.updated_at,
        created_at=row.created_at,
    )


class SqlUserRepository:
    """UserRepository implementation over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _select(self, query) -> list[User]:
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"User query failed: {e}")
            raise DatabaseError("Query on user table failed", "query")
        return [_to_entity(row) for row in result.scalars().all()]

    async def _write(self, statement, operation: str) -> int:
        try:
            result = await self.db.execute(statement)
            affected = result.rowcount
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"User {operation} failed: {e}")
            raise DatabaseError(f"User {operation} failed", operation)
        return affected

    async def fetch(self, cursor: str, num: int) -> tuple[list[User], Cursor]:
        """One page of users created strictly after the cursor's timestamp."""
        created_after = decode_cursor(cursor)

        query = select(UserRow).order_by(UserRow.created_at).limit(num)
        if created_after is not None:
            query = query.where(UserRow.created_at > created_after)

        users = await self._select(query)

        next_cursor = NO_CURSOR
        if users and len(users) == num:
            next_cursor = encode_cursor(users[-1].created_at)
        return users, next_cursor

    async def get_by_id(self, user_id: UserId) -> User:
        users = await self._select(select(UserRow).where(UserRow.id == user_id))
        if not users:
            raise ResourceNotFoundError("User", str(user_id))
        return users[0]

    async def get_by_email(self, email: str) -> User:
        users = await self._select(select(UserRow).where(UserRow.email == email))
        if not users:
            raise ResourceNotFoundError("User", email)
        return users[0]

    async def create(self, user: User) -> User:
        """Insert the user and write the generated id back onto it."""
        now = datetime.now(timezone.utc)
        row = UserRow(
            name=user.name,
            password=user.password,
            email=user.email,
            created_at=user.created_at or now,
            updated_at=user.updated_at or now,
        )
        self.db.add(row)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"User insert failed: {e}")
            raise DatabaseError("User insert failed", "insert")

        user.id = UserId(row.id)
        user.created_at = row.created_at
        user.updated_at = row.updated_at
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def update(self, user: User) -> User:
        statement = (
            update(UserRow)
            .where(UserRow.id == user.id)
            .values(
                name=user.name,
                password=user.password,
                email=user.email,
                updated_at=user.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        affected = await self._write(statement, "update")
        if affected != 1:
            logger.error(
                f"Update touched {affected} rows",
                extra={"user_id": user.id},
            )
            raise UnexpectedAffectedRowsError("update", affected)
        return user

    async def delete(self, user_id: UserId) -> None:
        statement = (
            delete(UserRow)
            .where(UserRow.id == user_id)
            .execution_options(synchronize_session=False)
        )
        affected = await self._write(statement, "delete")
        if affected != 1:
            logger.error(
                f"Delete touched {affected} rows",
                extra={"user_id": user_id},
            )
            raise UnexpectedAffectedRowsError("delete", affected)
        logger.info("User deleted", extra={"user_id": user_id})
