"""API layer: application factory, routers, models and validation."""

from users_backend.api.app import create_api

__all__ = ["create_api"]
