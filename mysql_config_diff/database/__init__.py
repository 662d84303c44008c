"""Server connection infrastructure.

Provides DSN parsing, connection configuration and async engine management
for reading the runtime variables of a live MySQL server.
"""

from .config import ServerConnectionConfig
from .connection import ServerConnectionManager
from .dsn import DEFAULT_PORT, DSN, parse_dsn

__all__ = [
    "DEFAULT_PORT",
    "DSN",
    "ServerConnectionConfig",
    "ServerConnectionManager",
    "parse_dsn",
]
