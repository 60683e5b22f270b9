"""Repository helpers for working with users."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from users_backend.database.repositories.results import (
    StoreError,
    StoreErrorKind,
    StoreResult,
    Stored,
)
from users_backend.database.schemas import UserSchema
from users_backend.database.service import DatabaseService

logger = logging.getLogger(__name__)

# Upper bound of the ``users.id`` INTEGER column.
MAX_USER_ID = 2**31 - 1


class UserRepository:
    """Encapsulates persistence operations for :class:`UserSchema`.

    Every method runs in its own transaction and reports failures as a
    :class:`StoreError` instead of raising.
    """

    def __init__(self, database: DatabaseService) -> None:
        self._database = database

    async def list_all(self) -> StoreResult[list[UserSchema]]:
        """Return all users ordered by id."""
        try:
            async with self._database.session() as session:
                users = await session.scalars(select(UserSchema).order_by(UserSchema.id))
                return Stored(list(users.all()))
        except SQLAlchemyError as exc:
            return _unavailable("list users", exc)

    async def get_by_id(self, user_id: int) -> StoreResult[UserSchema]:
        """Return user entity by user's ID."""
        if not _is_storable_id(user_id):
            return _not_found(user_id)
        try:
            async with self._database.session() as session:
                user = await session.get(UserSchema, user_id)
                if user is None:
                    return _not_found(user_id)
                return Stored(user)
        except SQLAlchemyError as exc:
            return _unavailable("fetch user", exc)

    async def create(self, *, name: str, email: str) -> StoreResult[UserSchema]:
        """Insert a new user and return it with its generated id."""
        try:
            async with self._database.session() as session:
                user = UserSchema(name=name, email=email)
                session.add(user)
                await session.flush()
                return Stored(user)
        except IntegrityError:
            return _conflict(email)
        except SQLAlchemyError as exc:
            return _unavailable("create user", exc)

    async def update_by_id(
        self, user_id: int, *, name: str, email: str
    ) -> StoreResult[UserSchema]:
        """Replace name and email of an existing user."""
        if not _is_storable_id(user_id):
            return _not_found(user_id)
        try:
            async with self._database.session() as session:
                user = await session.get(UserSchema, user_id)
                if user is None:
                    return _not_found(user_id)
                user.name = name
                user.email = email
                await session.flush()
                return Stored(user)
        except IntegrityError:
            return _conflict(email)
        except SQLAlchemyError as exc:
            return _unavailable("update user", exc)

    async def delete_by_id(self, user_id: int) -> StoreResult[UserSchema]:
        """Remove a user and return the deleted row."""
        if not _is_storable_id(user_id):
            return _not_found(user_id)
        try:
            async with self._database.session() as session:
                user = await session.get(UserSchema, user_id)
                if user is None:
                    return _not_found(user_id)
                await session.delete(user)
                await session.flush()
                return Stored(user)
        except SQLAlchemyError as exc:
            return _unavailable("delete user", exc)


def _is_storable_id(user_id: int) -> bool:
    return 0 < user_id <= MAX_USER_ID


def _not_found(user_id: int) -> StoreError:
    return StoreError(StoreErrorKind.NOT_FOUND, f"user {user_id} does not exist")


def _conflict(email: str) -> StoreError:
    return StoreError(StoreErrorKind.CONFLICT, f"email {email!r} is already taken")


def _unavailable(action: str, exc: SQLAlchemyError) -> StoreError:
    logger.error(
        "Failed to %s", action, exc_info=exc, extra={"error_kind": "unavailable"}
    )
    return StoreError(StoreErrorKind.UNAVAILABLE, f"could not {action}")
