# recipe_api/adapters/outbound/persistence/database.py

"""
Async database session management (SQLAlchemy + asyncpg).

The manager is created once per application and kept on app.state; request
handlers get a session through the get_db dependency.
"""

import contextlib
import logging
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from recipe_api.adapters.outbound.persistence.models.base_model import Base
from recipe_api.domain.exceptions import DatabaseOperationException, ServiceUnavailable

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that are always closed."""

    def __init__(self, url: str, engine_kwargs: Optional[Dict[str, Any]] = None):
        self._engine: Optional[AsyncEngine] = create_async_engine(url, **(engine_kwargs or {}))
        self._sessionmaker: Optional[async_sessionmaker] = async_sessionmaker(
            bind=self._engine, expire_on_commit=False, autoflush=False
        )

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Database engine disposed")

    @contextlib.asynccontextmanager
    async def connect(self) -> AsyncIterator[AsyncConnection]:
        if self._engine is None:
            raise DatabaseOperationException("Database session manager is closed")

        async with self._engine.begin() as connection:
            yield connection

    @contextlib.asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self._sessionmaker is None:
            raise DatabaseOperationException("Database session manager is closed")

        session = self._sessionmaker()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create missing tables (development convenience; no migrations)."""
        # Registra as tabelas no metadata antes do create_all
        from recipe_api.adapters.outbound.persistence.models import user_model  # noqa: F401

        logger.info("Creating database tables (if needed)")
        async with self.connect() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """SELECT 1 round trip."""
        async with self.session() as session:
            await session.execute(text("SELECT 1"))
        return True


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one session per request."""
    manager: Optional[DatabaseSessionManager] = getattr(request.app.state, "db", None)
    if manager is None:
        raise ServiceUnavailable("Database not configured")
    async with manager.session() as session:
        yield session
