"""Database connectivity helpers and repositories."""

from users_backend.database.base import BaseSchema
from users_backend.database.dependencies import get_database, get_user_repository
from users_backend.database.repositories import (
    StoreError,
    StoreErrorKind,
    StoreResult,
    Stored,
    UserRepository,
)
from users_backend.database.schemas import UserSchema
from users_backend.database.service import DatabaseService

__all__ = [
    "BaseSchema",
    "DatabaseService",
    "StoreError",
    "StoreErrorKind",
    "StoreResult",
    "Stored",
    "UserRepository",
    "UserSchema",
    "get_database",
    "get_user_repository",
]
