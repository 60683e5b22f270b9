"""SQLAlchemy schemas."""

from users_backend.database.schemas.user import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    UserSchema,
)

__all__ = ["EMAIL_MAX_LENGTH", "NAME_MAX_LENGTH", "UserSchema"]
