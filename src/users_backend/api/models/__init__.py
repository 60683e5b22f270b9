"""Models used for API request and response payloads."""

from users_backend.api.models.user import (
    HealthResponse,
    MessageResponse,
    UserMessageResponse,
    UserPayload,
    UserResponse,
)

__all__ = [
    "HealthResponse",
    "MessageResponse",
    "UserMessageResponse",
    "UserPayload",
    "UserResponse",
]
