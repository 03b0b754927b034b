"""User Entity — the record that flows between repository, use case and API.

Invariants:
    - id is None until the repository has inserted the row
    - password is stored as given (no hashing in this service)
    - email uniqueness is a use-case rule, not a storage constraint

Design Decisions:
    - Plain dataclass, independent of the ORM row: core never imports models/
"""

from dataclasses import dataclass
from datetime import datetime

from user_service.core.domain_types import UserId


@dataclass
class User:
    name: str
    password: str
    email: str
    id: UserId | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
