"""Unit tests for DSN parsing."""

import pytest

from mysql_config_diff.database import DEFAULT_PORT, parse_dsn
from mysql_config_diff.exceptions import DSNError


class TestParseDsn:
    """Tests for Percona-toolkit style DSN strings."""

    def test_all_keys(self) -> None:
        """
        Why: Operators pass connection details as a single DSN argument
        What: Tests every supported key is mapped to its field
        How: Parses a DSN using all keys and checks the model
        """
        dsn = parse_dsn(
            "h=db1.example.com,P=3307,u=audit,p=s3cret,D=mysql,"
            "S=/tmp/mysql.sock,t=user,A=utf8mb4"
        )

        assert dsn.host == "db1.example.com"
        assert dsn.port == 3307
        assert dsn.user == "audit"
        assert dsn.password == "s3cret"
        assert dsn.database == "mysql"
        assert dsn.socket == "/tmp/mysql.sock"
        assert dsn.charset == "utf8mb4"
        assert dsn.protocol == "tcp"
        assert "table" not in dsn.model_dump()

    def test_tcp_default_port(self) -> None:
        """TCP connections without a port use 3306."""
        dsn = parse_dsn("h=127.0.0.1,u=root")

        assert dsn.port == DEFAULT_PORT
        assert dsn.protocol == "tcp"

    def test_localhost_uses_socket(self) -> None:
        """
        Why: MySQL clients connect to localhost through the unix socket
        What: Tests localhost selects the unix protocol and keeps port unset
        How: Parses a localhost DSN without a port
        """
        dsn = parse_dsn("h=localhost,u=root,S=/var/run/mysqld/mysqld.sock")

        assert dsn.protocol == "unix"
        assert dsn.port == 0
        assert str(dsn) == "root@localhost:/var/run/mysqld/mysqld.sock"

    def test_empty_parts_and_values(self) -> None:
        """Empty parts are skipped and empty values are allowed."""
        dsn = parse_dsn("h=db1,,p=,u=root,")

        assert dsn.host == "db1"
        assert dsn.password == ""
        assert dsn.user == "root"

    def test_value_may_contain_equals(self) -> None:
        """Only the first '=' separates key and value."""
        assert parse_dsn("h=db1,p=a=b").password == "a=b"

    def test_str_hides_password(self) -> None:
        """
        Why: DSNs end up in logs and error messages
        What: Tests that the string form never includes the password
        How: Formats a DSN with a password
        """
        dsn = parse_dsn("h=db1,P=3306,u=audit,p=s3cret,D=app")

        assert str(dsn) == "audit@db1:3306/app"
        assert "s3cret" not in str(dsn)

    @pytest.mark.parametrize(
        ("value", "message"),
        [
            ("h=db1,P=abc", "port must be an integer"),
            ("h=db1,x=1", "Unknown DSN key 'x'"),
            ("h=db1,root", "not in key=value form"),
        ],
    )
    def test_invalid(self, value: str, message: str) -> None:
        """
        Why: A malformed DSN must fail before any connection attempt
        What: Tests DSNError for bad ports, unknown keys and bare words
        How: Parses each malformed DSN
        """
        with pytest.raises(DSNError, match=message):
            parse_dsn(value)
