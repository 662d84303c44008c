"""Live server variables reader.

Takes a snapshot of ``SHOW GLOBAL VARIABLES``. A running server reports every
variable it knows, including ones nobody set, so this source is of kind
``live``.
"""

import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ..database import ServerConnectionManager
from ..exceptions import LiveServerError
from ..models import CanonicalConfig, SourceKind

logger = logging.getLogger(__name__)

SHOW_VARIABLES_QUERY = "SHOW GLOBAL VARIABLES"


async def read_live(manager: ServerConnectionManager) -> CanonicalConfig:
    """Read the global variables of a running server.

    Args:
        manager: Connection manager for the server

    Returns:
        Snapshot of kind ``live``

    Raises:
        LiveServerError: If the server cannot be reached or queried
    """
    server = manager.config.describe()

    if not await manager.ping():
        raise LiveServerError(f"Cannot connect to the server {server}", source=server)

    entries: dict[str, Any] = {}
    try:
        async with manager.connect() as connection:
            result = await connection.execute(text(SHOW_VARIABLES_QUERY))
            for row in result:
                name, value = row[0], row[1]
                if name is None:
                    continue
                entries[str(name)] = value
    except SQLAlchemyError as e:
        raise LiveServerError(
            f"Cannot read the config variables from {server}: {e}", source=server
        ) from e

    logger.info(
        "Read server variables",
        extra={"server": server, "entries": len(entries)},
    )
    return CanonicalConfig(SourceKind.LIVE, entries, source=server)
