"""User database schema."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from users_backend.database.base import BaseSchema

NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 320


class UserSchema(BaseSchema):
    """SQLAlchemy model for user records."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH), unique=True, nullable=False, index=True
    )
