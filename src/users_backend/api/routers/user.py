"""CRUD endpoints for user records."""

from __future__ import annotations

import logging
from typing import Annotated, Any, TypeVar

from fastapi import APIRouter, Body, Depends, HTTPException, status

from users_backend.api.models import (
    MessageResponse,
    UserMessageResponse,
    UserPayload,
    UserResponse,
)
from users_backend.api.validators import (
    InvalidUserIdError,
    UserValidationError,
    parse_user_id,
    validate_user_payload,
)
from users_backend.database import (
    StoreError,
    StoreErrorKind,
    StoreResult,
    Stored,
    UserRepository,
    get_user_repository,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])

RepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
RawBody = Annotated[Any, Body()]

T = TypeVar("T")

USER_CREATED = "User is Created"
USER_UPDATED = "User updated successfully."
USER_DELETED = "User deleted successfully."
USER_NOT_FOUND = "User not found."
EMAIL_IN_USE = "Email is already in use. Please use a different email."
INTERNAL_ERROR = "Internal server error."


def _user_id(raw: str) -> int:
    try:
        return parse_user_id(raw)
    except InvalidUserIdError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message
        ) from exc


def _payload(data: Any) -> UserPayload:
    try:
        return validate_user_payload(data)
    except UserValidationError as exc:
        logger.warning("Rejected user payload: %s", exc.message)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message
        ) from exc


def _unwrap(result: StoreResult[T]) -> T:
    """Return the stored value or raise the matching HTTP error."""
    match result:
        case Stored(value=value):
            return value
        case StoreError(kind=StoreErrorKind.NOT_FOUND):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND
            )
        case StoreError(kind=StoreErrorKind.CONFLICT):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=EMAIL_IN_USE
            )
        case _:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=INTERNAL_ERROR,
            )


@router.get("", response_model=list[UserResponse])
async def list_users(repository: RepositoryDep) -> list[UserResponse]:
    """Return every stored user."""

    users = _unwrap(await repository.list_all())
    return [UserResponse.model_validate(user) for user in users]


@router.post("", response_model=UserMessageResponse)
async def create_user(
    repository: RepositoryDep, payload: RawBody = None
) -> UserMessageResponse:
    """Create a user from a ``{name, email}`` body."""

    data = _payload(payload)
    user = _unwrap(await repository.create(name=data.name, email=data.email))
    return UserMessageResponse(
        message=USER_CREATED, user=UserResponse.model_validate(user)
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, repository: RepositoryDep) -> UserResponse:
    """Return a single user by id."""

    user = _unwrap(await repository.get_by_id(_user_id(user_id)))
    return UserResponse.model_validate(user)


@router.api_route(
    "/{user_id}", methods=["PUT", "PATCH"], response_model=UserMessageResponse
)
async def update_user(
    user_id: str, repository: RepositoryDep, payload: RawBody = None
) -> UserMessageResponse:
    """Replace name and email of an existing user."""

    target = _user_id(user_id)
    data = _payload(payload)
    user = _unwrap(
        await repository.update_by_id(target, name=data.name, email=data.email)
    )
    return UserMessageResponse(
        message=USER_UPDATED, user=UserResponse.model_validate(user)
    )


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str, repository: RepositoryDep) -> MessageResponse:
    """Permanently remove a user by id."""

    _unwrap(await repository.delete_by_id(_user_id(user_id)))
    return MessageResponse(message=USER_DELETED)
