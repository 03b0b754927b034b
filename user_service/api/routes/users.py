"""User Routes — HTTP delivery for list, get, signup and delete.

Invariants:
    - num query param that is not an ASCII int64 counts as 0 (use case turns it into 10)
    - X-Cursor header is set only when another page exists
    - {user_id} that is not an ASCII int64 answers 404, same as a missing user
    - POST body: unbindable → 422, missing required field → 400, created → 201
    - Routes never contain business logic (delegate to UserUsecase)

Design Decisions:
    - Path id and num parsed by hand instead of typed params: FastAPI would
      answer 422 where this API answers 404 / falls back to the default page
    - Body read from Request so binding and required-field checks stay separate
"""

import logging
import re

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.config import Settings, get_settings
from user_service.core.domain_types import UserId
from user_service.core.errors import (
    InvalidRequestBodyError, RequestValidationFailedError, ResourceNotFoundError,
)
from user_service.core.repository_protocols import UserUsecaseLike
from user_service.infrastructure.database import get_db
from user_service.schemas.user import UserCreate, UserResponse
from user_service.services.user_repository import SqlUserRepository
from user_service.services.user_usecase import UserUsecase

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])

CURSOR_HEADER = "X-Cursor"

# int() also takes whitespace, "_" separators and non-ASCII digits
INT_PATTERN = re.compile(r"[+-]?[0-9]+")
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def get_user_usecase(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> UserUsecaseLike:
    """Per-request use case bound to the request's DB session."""
    return UserUsecase(SqlUserRepository(db), settings.context_timeout_seconds)


def _parse_int64(raw: str | None) -> int | None:
    """Signed ASCII decimal within int64, else None."""
    if raw is None or not INT_PATTERN.fullmatch(raw):
        return None
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def _parse_num(raw: str | None) -> int:
    value = _parse_int64(raw)
    return value if value is not None else 0


def _parse_user_id(raw: str) -> UserId:
    value = _parse_int64(raw)
    if value is None:
        raise ResourceNotFoundError("User", raw)
    return UserId(value)


@router.get("", response_model=list[UserResponse])
async def list_users(
    request: Request,
    response: Response,
    usecase: UserUsecaseLike = Depends(get_user_usecase),
):
    """List users page by page using the X-Cursor keyset token."""
    num = _parse_num(request.query_params.get("num"))
    cursor = request.query_params.get("cursor", "")

    users, next_cursor = await usecase.fetch(cursor, num)

    if next_cursor:
        response.headers[CURSOR_HEADER] = next_cursor
    return [UserResponse.from_entity(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str, usecase: UserUsecaseLike = Depends(get_user_usecase),
):
    user = await usecase.get_by_id(_parse_user_id(user_id))
    return UserResponse.from_entity(user)


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    request: Request, usecase: UserUsecaseLike = Depends(get_user_usecase),
):
    """Sign up a new user."""
    try:
        body = UserCreate.model_validate_json(await request.body())
    except ValidationError as e:
        raise InvalidRequestBodyError(
            "; ".join(err["msg"] for err in e.errors()),
        )

    missing = body.missing_fields()
    if missing:
        raise RequestValidationFailedError(missing)

    user = await usecase.signup(body.to_entity())
    return UserResponse.from_entity(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_user(
    user_id: str, usecase: UserUsecaseLike = Depends(get_user_usecase),
):
    await usecase.delete(_parse_user_id(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
