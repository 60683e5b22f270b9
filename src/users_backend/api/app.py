"""Factory for constructing the FastAPI application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from users_backend.api.errors import register_error_handlers
from users_backend.api.routers import health_router, user_router
from users_backend.database import DatabaseService
from users_backend.observability import setup_logging
from users_backend.settings import BackendSettings, get_settings

logger = logging.getLogger(__name__)


def _build_lifespan(settings: BackendSettings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Open the database service for the lifetime of the application."""
        setup_logging(settings.log_level, settings.log_format)
        database = DatabaseService(settings=settings)
        if settings.database_create_schema:
            await database.create_schema()
        app.state.database = database
        logger.info("Database service opened")
        try:
            yield
        finally:
            app.state.database = None
            await database.close()
            logger.info("Database service closed")

    return lifespan


def create_api(settings: BackendSettings | None = None) -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    config = settings or get_settings()
    app = FastAPI(title="Users API", lifespan=_build_lifespan(config))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(user_router)
    app.include_router(health_router)
    return app
