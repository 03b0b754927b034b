"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Repository and use case are both reached only through these Protocols
    - Absence is reported with ResourceNotFoundError, never a zero-value User

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - fetch returns (users, next_cursor); an empty next_cursor means last page
"""

from typing import Protocol

from user_service.core.domain_types import Cursor, UserId
from user_service.core.user import User


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def fetch(self, cursor: str, num: int) -> tuple[list[User], Cursor]: ...
    async def get_by_id(self, user_id: UserId) -> User: ...
    async def get_by_email(self, email: str) -> User: ...
    async def create(self, user: User) -> User: ...
    async def update(self, user: User) -> User: ...
    async def delete(self, user_id: UserId) -> None: ...


class UserUsecaseLike(Protocol):
    """Contract for the user application service consumed by the API layer."""
    async def fetch(self, cursor: str, num: int) -> tuple[list[User], Cursor]: ...
    async def get_by_id(self, user_id: UserId) -> User: ...
    async def get_by_email(self, email: str) -> User: ...
    async def signup(self, user: User) -> User: ...
    async def update(self, user: User) -> User: ...
    async def delete(self, user_id: UserId) -> None: ...
