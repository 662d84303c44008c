"""Percona-toolkit style DSN parsing.

A DSN is a comma-separated list of ``key=value`` pairs, for example
``h=db1.example.com,P=3307,u=audit,p=secret``. Keys are single letters:

- ``h``: host
- ``P``: port
- ``u``: user
- ``p``: password
- ``D``: database
- ``S``: unix socket path
- ``A``: charset

Percona tools also accept ``t`` (table). It names no connection parameter
and is ignored.
"""

from pydantic import BaseModel, Field

from ..exceptions import DSNError

DEFAULT_PORT = 3306

_FIELDS = {
    "h": "host",
    "P": "port",
    "u": "user",
    "p": "password",
    "D": "database",
    "S": "socket",
    "A": "charset",
}

_IGNORED_KEYS = frozenset({"t"})


class DSN(BaseModel):
    """Connection parameters parsed from a DSN string."""

    host: str = Field(default="", description="Server host name")
    port: int = Field(default=0, description="Server TCP port")
    user: str = Field(default="", description="Login user")
    password: str = Field(default="", description="Login password")
    database: str = Field(default="", description="Default database")
    socket: str = Field(default="", description="Unix socket path")
    charset: str = Field(default="", description="Connection character set")

    @property
    def protocol(self) -> str:
        """Transport implied by the host: ``unix`` for localhost."""
        return "unix" if self.host == "localhost" else "tcp"

    def __str__(self) -> str:
        user = f"{self.user}@" if self.user else ""
        if self.protocol == "unix" and self.socket:
            location = f"{self.host}:{self.socket}"
        else:
            location = f"{self.host}:{self.port}"
        database = f"/{self.database}" if self.database else ""
        return f"{user}{location}{database}"


def parse_dsn(value: str) -> DSN:
    """Parse a DSN string.

    Args:
        value: DSN such as ``h=127.0.0.1,P=3306,u=root``

    Returns:
        Parsed DSN; TCP connections without a port get 3306

    Raises:
        DSNError: If a part has no ``=``, uses an unknown key, or the port
                  is not an integer
    """
    fields: dict[str, str | int] = {}

    for part in value.split(","):
        part = part.strip()
        if not part:
            continue

        key, sep, raw = part.partition("=")
        if not sep:
            raise DSNError(f"DSN part '{key}' is not in key=value form", dsn=key)
        if key in _IGNORED_KEYS:
            continue
        if key not in _FIELDS:
            valid = ", ".join(sorted(_FIELDS.keys() | _IGNORED_KEYS))
            raise DSNError(
                f"Unknown DSN key '{key}', expected one of: {valid}", dsn=key
            )

        if key == "P":
            try:
                fields["port"] = int(raw)
            except ValueError:
                raise DSNError(
                    f"DSN port must be an integer, got '{raw}'", dsn=part
                ) from None
        else:
            fields[_FIELDS[key]] = raw

    dsn = DSN(**fields)
    if dsn.protocol == "tcp" and dsn.port == 0:
        dsn = dsn.model_copy(update={"port": DEFAULT_PORT})
    return dsn
