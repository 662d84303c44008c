"""Server connection management.

Provides async SQLAlchemy engine management for reading a server's runtime
variables. The tool is single-shot, so connections are never pooled: each
``connect()`` opens a fresh connection and closes it on exit.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from .config import ServerConnectionConfig

logger = logging.getLogger(__name__)


class ServerConnectionManager:
    """Manages the engine and connections for one MySQL server."""

    def __init__(self, config: ServerConnectionConfig | None = None):
        self.config = config or ServerConnectionConfig()
        self._engine: AsyncEngine | None = None

    @property
    def engine(self) -> AsyncEngine:
        """Get or create async database engine."""
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> AsyncEngine:
        """Create async SQLAlchemy engine for a single-shot read."""
        engine = create_async_engine(
            self.config.get_sqlalchemy_url(),
            poolclass=NullPool,
            connect_args=self.config.get_connect_args(),
            echo=self.config.echo_sql,
        )

        self._register_connection_events(engine)

        logger.info(
            "Created database engine",
            extra={"server": self.config.describe()},
        )

        return engine

    def _register_connection_events(self, engine: AsyncEngine) -> None:
        """Register SQLAlchemy events for connection monitoring."""

        @event.listens_for(engine.sync_engine, "connect")
        def on_connect(dbapi_connection: Any, connection_record: Any) -> None:
            """Handle new database connections."""
            logger.debug(
                "New database connection established",
                extra={"server": self.config.describe()},
            )

        @event.listens_for(engine.sync_engine, "invalidate")
        def on_invalidate(
            dbapi_connection: Any, connection_record: Any, exception: Exception | None
        ) -> None:
            """Handle connection invalidation."""
            logger.warning(
                "Database connection invalidated",
                extra={"error": str(exception) if exception else None},
            )

    @asynccontextmanager
    async def connect(self) -> AsyncGenerator[AsyncConnection, None]:
        """Get a connection that is closed on every exit path.

        Usage:
            async with manager.connect() as connection:
                result = await connection.execute(query)
        """
        async with self.engine.connect() as connection:
            yield connection

    async def ping(self) -> bool:
        """Check that the server answers a trivial query.

        Returns:
            bool: True if the server is reachable, False otherwise
        """
        try:
            async with self.connect() as connection:
                result = await connection.execute(text("SELECT 1"))
                return result.scalar() == 1
        except SQLAlchemyError as e:
            logger.error(
                "Database ping failed",
                extra={"server": self.config.describe(), "error": str(e)},
            )
            return False

    async def close(self) -> None:
        """Close database engine and clean up connections."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            logger.info("Database engine disposed")

    async def __aenter__(self) -> "ServerConnectionManager":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
