"""MySQL option file (my.cnf) reader.

Reads the options of one section (``[mysqld]`` by default) into a ``file``
kind snapshot. Only explicitly set options are present, so the diff engine
treats this source as enumerating a restricted key universe.
"""

import configparser
import logging
from pathlib import Path

from ..exceptions import ConfigFileError
from ..models import CanonicalConfig, SourceKind

logger = logging.getLogger(__name__)

DEFAULT_SECTION = "mysqld"

# Value of an option written without "=", e.g. skip-name-resolve
BOOLEAN_OPTION_VALUE = "true"


def read_cnf(
    path: str | Path,
    section: str = DEFAULT_SECTION,
    fold_dashes: bool = False,
) -> CanonicalConfig:
    """Read one section of a MySQL option file.

    Args:
        path: Option file path, ``~`` is expanded
        section: Section whose options are read
        fold_dashes: Rewrite ``-`` to ``_`` in option names so they line up
                     with server variable names

    Returns:
        Snapshot of kind ``file``

    Raises:
        ConfigFileError: If the file cannot be read or parsed
    """
    cnf_path = Path(path).expanduser()

    if not cnf_path.is_file():
        raise ConfigFileError(
            f"Option file not found: {cnf_path}", source=str(cnf_path)
        )

    try:
        with open(cnf_path, encoding="utf-8") as f:
            lines = [_prepare_line(line) for line in f]
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigFileError(
            f"Failed to read option file {cnf_path}: {e}", source=str(cnf_path)
        ) from e

    parser = _create_parser()
    try:
        parser.read_string("".join(lines), source=str(cnf_path))
    except configparser.Error as e:
        raise ConfigFileError(
            f"Failed to parse option file {cnf_path}: {e}", source=str(cnf_path)
        ) from e

    entries: dict[str, str] = {}
    if parser.has_section(section):
        for name, value in parser.items(section, raw=True):
            if fold_dashes:
                name = name.replace("-", "_")
            entries[name] = _clean_value(value)
    else:
        logger.warning(
            "Option file has no such section",
            extra={"file": str(cnf_path), "section": section},
        )

    logger.info(
        "Read option file",
        extra={"file": str(cnf_path), "section": section, "entries": len(entries)},
    )
    return CanonicalConfig(SourceKind.FILE, entries, source=str(cnf_path))


def _create_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        allow_no_value=True,
        delimiters=("=",),
        comment_prefixes=("#", ";"),
        strict=False,
        interpolation=None,
    )
    # Option names are case-sensitive
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser


def _prepare_line(line: str) -> str:
    # Leading whitespace never continues a value in option files
    line = line.lstrip()
    if line.startswith("!"):
        return ""
    return _strip_inline_comment(line).rstrip() + "\n"


def _strip_inline_comment(value: str) -> str:
    """Cut a trailing "#" comment that is not inside a quoted string."""
    quote = None
    for i, char in enumerate(value):
        if quote:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char == "#":
            return value[:i]
    return value


def _clean_value(value: str | None) -> str:
    if value is None:
        return BOOLEAN_OPTION_VALUE
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        return value[1:-1]
    return value
