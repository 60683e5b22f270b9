"""Pydantic models for user endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from users_backend.database.schemas import NAME_MAX_LENGTH


class UserPayload(BaseModel):
    """Payload accepted when creating or updating a user."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(max_length=NAME_MAX_LENGTH)
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def reject_display_name(cls, value: object) -> object:
        if isinstance(value, str) and ("<" in value or ">" in value):
            raise PydanticCustomError(
                "value_error",
                "value is not a valid email address: display names are not allowed",
            )
        return value

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("blank_name", "must not be empty")
        return value


class UserResponse(BaseModel):
    """Public representation of a stored user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class MessageResponse(BaseModel):
    """Plain acknowledgement or error message."""

    message: str


class UserMessageResponse(BaseModel):
    """Acknowledgement carrying the affected user."""

    message: str
    user: UserResponse


class HealthResponse(BaseModel):
    """Database reachability report."""

    status: str
