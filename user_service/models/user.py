"""User ORM — the `user` table row.

Invariants:
    - id is an auto-increment integer primary key
    - email is indexed but NOT unique (uniqueness is a use-case rule)
    - created_at drives keyset pagination, so it is indexed

Design Decisions:
    - Mapped separately from core.user.User: repository converts rows to entities
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from user_service.db.base import Base


class UserRow(Base):
    """Persisted user record."""
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
