"""Unit tests for server connection management."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from mysql_config_diff.database import ServerConnectionConfig, ServerConnectionManager


@pytest.fixture
def connection_config() -> ServerConnectionConfig:
    """Connection settings pointing at a server that is never contacted."""
    return ServerConnectionConfig(host="db1", user="audit", password="pw")


@pytest.mark.usefixtures("clean_env")
class TestServerConnectionManager:
    """Tests for engine lifecycle, ping and cleanup."""

    def test_engine_created_lazily(self, connection_config) -> None:
        """
        Why: Building the manager must not touch the network
        What: Tests the engine is created once, on first access
        How: Patches create_async_engine and reads the property twice
        """
        manager = ServerConnectionManager(connection_config)

        with patch(
            "mysql_config_diff.database.connection.create_async_engine"
        ) as mock_create, patch.object(manager, "_register_connection_events"):
            first = manager.engine
            second = manager.engine

        assert first is second
        mock_create.assert_called_once()
        args, kwargs = mock_create.call_args
        assert args[0] == connection_config.get_sqlalchemy_url()
        assert kwargs["connect_args"] == {"connect_timeout": 10}

    @pytest.mark.asyncio
    async def test_ping_success(self, connection_config) -> None:
        """
        Why: The live reader checks reachability before querying
        What: Tests ping returns True when SELECT 1 answers 1
        How: Substitutes connect() with a mocked connection
        """
        manager = ServerConnectionManager(connection_config)
        result = MagicMock()
        result.scalar.return_value = 1
        connection = AsyncMock()
        connection.execute.return_value = result

        @asynccontextmanager
        async def connect():
            yield connection

        with patch.object(manager, "connect", connect):
            assert await manager.ping() is True

    @pytest.mark.asyncio
    async def test_ping_failure(self, connection_config) -> None:
        """
        Why: Connection errors are reported by the reader, not raised by ping
        What: Tests ping returns False on SQLAlchemy errors
        How: Makes connect() raise OperationalError
        """
        manager = ServerConnectionManager(connection_config)

        @asynccontextmanager
        async def connect():
            raise OperationalError("SELECT 1", {}, Exception("refused"))
            yield  # pragma: no cover

        with patch.object(manager, "connect", connect):
            assert await manager.ping() is False

    @pytest.mark.asyncio
    async def test_close_disposes_engine(self, connection_config) -> None:
        """
        Why: Engines hold driver resources that must be released
        What: Tests close() disposes the engine and forgets it
        How: Injects a mock engine and closes the manager via async with
        """
        engine = AsyncMock()

        async with ServerConnectionManager(connection_config) as manager:
            manager._engine = engine

        engine.dispose.assert_awaited_once()
        assert manager._engine is None

    @pytest.mark.asyncio
    async def test_close_without_engine(self, connection_config) -> None:
        """Closing an unused manager is a no-op."""
        manager = ServerConnectionManager(connection_config)

        await manager.close()

        assert manager._engine is None
