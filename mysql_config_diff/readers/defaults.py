"""Compiled-in defaults listing reader.

Parses the variables table printed by ``mysqld --verbose --help``. To produce
a listing that is not influenced by any option file::

    touch /tmp/empty.cnf
    mysqld --defaults-file=/tmp/empty.cnf --verbose --help > defaults.txt

The table starts after a dashed ruler line and ends at the first blank line.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from ..exceptions import DefaultsFileError
from ..models import CanonicalConfig, SourceKind

logger = logging.getLogger(__name__)

RULER_PREFIX = "-----"
NO_DEFAULT = "(No default value)"


def parse_defaults(lines: Iterable[str], source: str | None = None) -> CanonicalConfig:
    """Parse a defaults listing.

    Args:
        lines: Lines of ``mysqld --verbose --help`` output
        source: Optional label for the snapshot

    Returns:
        Snapshot of kind ``defaults``

    Raises:
        DefaultsFileError: If the listing holds no variables
    """
    entries: dict[str, str] = {}
    in_header = True

    for line in lines:
        line = line.rstrip("\r\n")
        if in_header:
            if line.startswith(RULER_PREFIX):
                in_header = False
            continue
        if not line.strip():
            break

        name, _, value = line.partition(" ")
        name = name.strip().replace("-", "_")
        value = value.strip()
        if value == NO_DEFAULT:
            value = ""
        entries[name] = value

    if not entries:
        raise DefaultsFileError(
            "Invalid defaults file. There are no entries to parse", source=source
        )

    return CanonicalConfig(SourceKind.DEFAULTS, entries, source=source)


def read_defaults(path: str | Path) -> CanonicalConfig:
    """Read a defaults listing from a file.

    Raises:
        DefaultsFileError: If the file cannot be read or holds no variables
    """
    defaults_path = Path(path).expanduser()

    try:
        with open(defaults_path, encoding="utf-8") as f:
            config = parse_defaults(f, source=str(defaults_path))
    except (OSError, UnicodeDecodeError) as e:
        raise DefaultsFileError(
            f"Cannot read defaults file {defaults_path}: {e}",
            source=str(defaults_path),
        ) from e

    logger.info(
        "Read defaults listing",
        extra={"file": str(defaults_path), "entries": len(config)},
    )
    return config
