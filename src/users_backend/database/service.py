"""Database engine and session management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from users_backend.database.base import BaseSchema
from users_backend.settings import BackendSettings, get_settings

logger = logging.getLogger(__name__)


class DatabaseService:
    """Wraps the async SQLAlchemy engine and session factory.

    One instance is created per process by the application lifespan and
    disposed with :meth:`close` on shutdown.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        settings: BackendSettings | None = None,
        **engine_options,
    ) -> None:
        config = settings or get_settings()
        engine_options.setdefault("pool_pre_ping", True)
        self._engine = create_async_engine(url or config.database_url, **engine_options)
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            autoflush=False,
            expire_on_commit=False,
            class_=AsyncSession,
        )

    @property
    def engine(self) -> AsyncEngine:
        """Expose the SQLAlchemy engine."""

        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Provide a transactional session scope."""

        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create all tables known to the ORM metadata."""

        async with self._engine.begin() as connection:
            await connection.run_sync(BaseSchema.metadata.create_all)

    async def health_check(self) -> bool:
        """Return whether the database answers a trivial query."""

        try:
            async with self._engine.connect() as connection:
                await connection.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Database health check failed")
            return False
        return True

    async def close(self) -> None:
        """Release all pooled connections."""

        await self._engine.dispose()
