"""
Async database engine and session factory.

One ``Database`` is created at start-up and handed to whatever needs a
session factory; there is no module-level engine.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

from ..models.base import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns the async engine and the session factory for one database URL."""

    def __init__(self, database_url: str, echo: bool = False) -> None:
        self.database_url = database_url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_initialized(self) -> bool:
        return self._session_factory is not None

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise RuntimeError("Database not initialized; call init() first")
        return self._session_factory

    def _engine_options(self) -> Dict[str, Any]:
        url = make_url(self.database_url)
        options: Dict[str, Any] = {"echo": self.echo}
        if url.get_backend_name() == "sqlite":
            if url.database in (None, "", ":memory:"):
                # A single shared connection keeps the in-memory DB alive
                options["poolclass"] = StaticPool
            else:
                options["poolclass"] = NullPool
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        else:
            options["pool_pre_ping"] = True
        return options

    async def init(self) -> None:
        """Create the engine, the session factory and all tables."""
        if self.is_initialized:
            return

        logger.info(f"Initializing database: {self.database_url}")
        self._engine = create_async_engine(self.database_url, **self._engine_options())
        self._session_factory = async_sessionmaker(
            self._engine, class_=AsyncSession, expire_on_commit=False
        )

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created/verified")

    async def close(self) -> None:
        """Dispose of the engine."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database connection closed")
        self._engine = None
        self._session_factory = None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session context manager; rolls back and re-raises on error."""
        async with self.session_factory() as session:
            try:
                yield session
            except Exception as e:
                await session.rollback()
                logger.error(f"Database session error: {e}")
                raise

    async def health_check(self) -> bool:
        """Check if database is accessible."""
        try:
            async with self.session() as session:
                result = await session.execute(text("SELECT 1"))
                return result.scalar() == 1
        except Exception as e:
            logger.error(f"Database health check failed: {e}", exc_info=True)
            return False
