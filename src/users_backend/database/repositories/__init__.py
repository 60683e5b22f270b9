"""Repositories built on top of :class:`DatabaseService`."""

from users_backend.database.repositories.results import (
    StoreError,
    StoreErrorKind,
    StoreResult,
    Stored,
)
from users_backend.database.repositories.user import MAX_USER_ID, UserRepository

__all__ = [
    "MAX_USER_ID",
    "StoreError",
    "StoreErrorKind",
    "StoreResult",
    "Stored",
    "UserRepository",
]
