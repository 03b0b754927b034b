"""User Schemas — Pydantic models for the /users API boundary.

Invariants:
    - UserCreate binding only checks JSON shape and field types; missing fields
      bind to "" so the required-field check can answer 400 instead of 422
    - UserResponse mirrors every column of the user table

Design Decisions:
    - Binding and required-field validation kept as two steps: a body that is not
      JSON (422) is a different failure than a body that omits a field (400)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from user_service.core.user import User

REQUIRED_FIELDS = ("name", "password", "email")


class UserCreate(BaseModel):
    """Signup body."""
    name: str = ""
    password: str = ""
    email: str = ""

    def missing_fields(self) -> list[str]:
        return [f for f in REQUIRED_FIELDS if not getattr(self, f).strip()]

    def to_entity(self) -> User:
        return User(name=self.name, password=self.password, email=self.email)


class UserResponse(BaseModel):
    """Public user representation."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    password: str
    email: str
    updated_at: datetime | None
    created_at: datetime | None

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls.model_validate(user)
