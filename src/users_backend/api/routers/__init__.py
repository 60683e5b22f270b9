"""Route definitions for public HTTP endpoints."""

from users_backend.api.routers.health import router as health_router
from users_backend.api.routers.user import router as user_router

__all__ = ["health_router", "user_router"]
