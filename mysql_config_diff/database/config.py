"""Server connection configuration module.

Provides type-safe connection settings for the live-variables reader with
environment variable support. Values parsed from a DSN override whatever the
environment provides.
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from .dsn import DEFAULT_PORT, DSN

DRIVER_NAME = "mysql+aiomysql"


class ServerConnectionConfig(BaseSettings):
    """Connection settings for a MySQL server.

    Environment variables:
    - MYSQL_HOST: Server host (default: 127.0.0.1)
    - MYSQL_PORT: Server port (default: 3306)
    - MYSQL_USER: Login user (default: root)
    - MYSQL_PASSWORD: Login password
    - MYSQL_DATABASE: Default database
    - MYSQL_UNIX_SOCKET: Unix socket path, used when host is localhost
    - MYSQL_CHARSET: Connection character set
    - MYSQL_CONNECT_TIMEOUT: Connection timeout in seconds (default: 10)
    - MYSQL_ECHO_SQL: Log issued SQL (default: false)
    """

    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=DEFAULT_PORT, description="Server port")
    user: str = Field(default="root", description="Login user")
    password: str | None = Field(default=None, description="Login password")
    database: str | None = Field(default=None, description="Default database")
    unix_socket: str | None = Field(
        default=None, description="Unix socket path for localhost connections"
    )
    charset: str | None = Field(default=None, description="Character set")
    connect_timeout: int = Field(
        default=10, description="Connection timeout in seconds"
    )
    echo_sql: bool = Field(default=False, description="Enable SQL query logging")

    model_config = SettingsConfigDict(
        env_prefix="MYSQL_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("connect_timeout")
    @classmethod
    def validate_connect_timeout(cls, v: int) -> int:
        """Validate connection timeout is positive."""
        if v <= 0:
            raise ValueError("Connection timeout must be positive")
        return v

    @classmethod
    def from_dsn(cls, dsn: DSN, **overrides: Any) -> "ServerConnectionConfig":
        """Build connection settings from a parsed DSN.

        Empty DSN fields fall back to environment variables and defaults.
        """
        values: dict[str, Any] = {}
        if dsn.host:
            values["host"] = dsn.host
        if dsn.port:
            values["port"] = dsn.port
        if dsn.user:
            values["user"] = dsn.user
        if dsn.password:
            values["password"] = dsn.password
        if dsn.database:
            values["database"] = dsn.database
        if dsn.socket:
            values["unix_socket"] = dsn.socket
        if dsn.charset:
            values["charset"] = dsn.charset
        values.update(overrides)
        return cls(**values)

    @property
    def uses_socket(self) -> bool:
        """Check whether the connection goes through a unix socket."""
        return self.host == "localhost" and bool(self.unix_socket)

    def get_sqlalchemy_url(self) -> URL:
        """Get SQLAlchemy URL for the async MySQL driver."""
        query = {"charset": self.charset} if self.charset else {}
        return URL.create(
            DRIVER_NAME,
            username=self.user,
            password=self.password,
            host=self.host,
            port=None if self.uses_socket else self.port,
            database=self.database,
            query=query,
        )

    def get_connect_args(self) -> dict[str, Any]:
        """Get driver-level connection arguments."""
        connect_args: dict[str, Any] = {"connect_timeout": self.connect_timeout}
        if self.uses_socket:
            connect_args["unix_socket"] = self.unix_socket
        return connect_args

    def describe(self) -> str:
        """Server label without credentials."""
        if self.uses_socket:
            return f"{self.user}@{self.host}:{self.unix_socket}"
        return f"{self.user}@{self.host}:{self.port}"
