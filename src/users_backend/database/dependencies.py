"""FastAPI dependencies for database access."""

from typing import Annotated

from fastapi import Depends, Request

from users_backend.database.repositories import UserRepository
from users_backend.database.service import DatabaseService


def get_database(request: Request) -> DatabaseService:
    """Return the database service opened by the application lifespan."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        msg = "Database service is not initialized"
        raise RuntimeError(msg)
    return database


def get_user_repository(
    database: Annotated[DatabaseService, Depends(get_database)],
) -> UserRepository:
    """Return a :class:`UserRepository` bound to the shared database service."""
    return UserRepository(database)
