"""
Unit tests for server connection configuration.

Available fixtures from conftest.py:
- clean_env: Removes CONFIG_DIFF_* and MYSQL_* variables for the test
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from mysql_config_diff.database import ServerConnectionConfig, parse_dsn


@pytest.mark.usefixtures("clean_env")
class TestServerConnectionConfig:
    """Tests for connection settings."""

    def test_defaults(self) -> None:
        """
        Why: A DSN may omit most fields
        What: Tests the default connection settings
        How: Builds a config without arguments in a clean environment
        """
        config = ServerConnectionConfig()

        assert config.host == "127.0.0.1"
        assert config.port == 3306
        assert config.user == "root"
        assert config.password is None
        assert config.connect_timeout == 10

    def test_environment_variables(self) -> None:
        """
        Why: Credentials are often provided through the environment
        What: Tests MYSQL_* variables populate the settings
        How: Patches the environment and builds a config
        """
        env = {"MYSQL_HOST": "db2", "MYSQL_PASSWORD": "pw", "MYSQL_PORT": "3310"}
        with patch.dict(os.environ, env):
            config = ServerConnectionConfig()

        assert config.host == "db2"
        assert config.password == "pw"
        assert config.port == 3310

    def test_from_dsn_overrides_environment(self) -> None:
        """
        Why: Explicit command-line DSNs must win over ambient settings
        What: Tests DSN fields override env while empty fields fall back
        How: Sets MYSQL_* variables and builds from a partial DSN
        """
        env = {"MYSQL_HOST": "db2", "MYSQL_PASSWORD": "from-env"}
        with patch.dict(os.environ, env):
            config = ServerConnectionConfig.from_dsn(
                parse_dsn("h=db1,u=audit"), connect_timeout=3
            )

        assert config.host == "db1"
        assert config.user == "audit"
        assert config.password == "from-env"
        assert config.connect_timeout == 3

    def test_sqlalchemy_url(self) -> None:
        """
        Why: The engine needs a URL for the async MySQL driver
        What: Tests URL components and password quoting
        How: Builds a URL for a password with reserved characters
        """
        config = ServerConnectionConfig.from_dsn(
            parse_dsn("h=db1,P=3307,u=audit,p=p@ss/word,D=mysql,A=utf8mb4")
        )

        url = config.get_sqlalchemy_url()

        assert url.drivername == "mysql+aiomysql"
        assert url.host == "db1"
        assert url.port == 3307
        assert url.username == "audit"
        assert url.password == "p@ss/word"
        assert url.database == "mysql"
        assert url.query == {"charset": "utf8mb4"}
        assert "p@ss/word" not in str(url)

    def test_socket_connection(self) -> None:
        """
        Why: localhost connections go through the unix socket
        What: Tests socket settings reach the driver and drop the port
        How: Builds a config from a localhost DSN with a socket path
        """
        config = ServerConnectionConfig.from_dsn(
            parse_dsn("h=localhost,u=root,S=/var/run/mysqld/mysqld.sock")
        )

        assert config.uses_socket
        assert config.get_sqlalchemy_url().port is None
        assert config.get_connect_args() == {
            "connect_timeout": 10,
            "unix_socket": "/var/run/mysqld/mysqld.sock",
        }
        assert config.describe() == "root@localhost:/var/run/mysqld/mysqld.sock"

    def test_tcp_connect_args(self) -> None:
        """TCP connections only carry the timeout."""
        config = ServerConnectionConfig(host="db1", connect_timeout=5)

        assert not config.uses_socket
        assert config.get_connect_args() == {"connect_timeout": 5}
        assert config.describe() == "root@db1:3306"

    def test_invalid_timeout(self) -> None:
        """Non-positive timeouts are rejected."""
        with pytest.raises(ValidationError, match="must be positive"):
            ServerConnectionConfig(connect_timeout=0)
