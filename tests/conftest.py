"""
Test configuration and fixtures for mysql-config-diff tests.

Provides fixture file locations, ready-made configuration snapshots and
mocks for the live server connection layer.
"""

import os
from collections.abc import Generator
from contextlib import asynccontextmanager
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from mysql_config_diff.models import CanonicalConfig, SourceKind

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """
    Directory holding option files, defaults listings and settings files.

    Why: Reader tests need realistic on-disk inputs
    What: Provides the path of tests/fixtures
    How: Resolves the directory relative to this conftest module
    """
    return FIXTURES_DIR


@pytest.fixture
def cnf_path(fixtures_dir: Path) -> Path:
    """Path of the sample my.cnf fixture."""
    return fixtures_dir / "mysqld.cnf"


@pytest.fixture
def defaults_path(fixtures_dir: Path) -> Path:
    """Path of the sample 'mysqld --verbose --help' fixture."""
    return fixtures_dir / "defaults.txt"


@pytest.fixture
def file_config() -> CanonicalConfig:
    """
    Option-file snapshot used across diff tests.

    Why: Diff tests compare the same base against different source kinds
    What: Provides a file-kind snapshot with a string, an int and a bool value
    How: Builds a CanonicalConfig directly, without touching the filesystem
    """
    return CanonicalConfig(
        SourceKind.FILE, {"key1": "value1", "key2": 2, "key3": True}
    )


@pytest.fixture
def other_entries() -> dict:
    """Entries that differ from file_config on key2, key3 and key4."""
    return {"key1": "value1", "key2": 3, "key4": True}


@pytest.fixture
def mock_connection_manager() -> MagicMock:
    """
    Mock server connection manager for live reader tests.

    Why: Isolates reader tests from a real MySQL server
    What: Provides a manager whose connect() yields an AsyncMock connection
    How: Wraps the mock connection in an async context manager and exposes it
         as manager.connection for per-test result setup
    """
    connection = AsyncMock()

    @asynccontextmanager
    async def connect():
        yield connection

    manager = MagicMock()
    manager.config.describe.return_value = "root@127.0.0.1:3306"
    manager.ping = AsyncMock(return_value=True)
    manager.connect = connect
    manager.connection = connection
    return manager


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """
    Environment without tool or connection variables.

    Why: Settings read CONFIG_DIFF_* and MYSQL_* variables from the environment
    What: Removes those variables for the duration of a test
    How: Uses patch.dict with clear=True over a filtered copy of os.environ
    """
    kept = {
        key: value
        for key, value in os.environ.items()
        if not key.upper().startswith(("CONFIG_DIFF_", "MYSQL_"))
    }
    with patch.dict(os.environ, kept, clear=True):
        yield
