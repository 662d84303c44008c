"""Readers that build configuration snapshots from their sources."""

from .cnf import DEFAULT_SECTION, read_cnf
from .defaults import parse_defaults, read_defaults
from .live import SHOW_VARIABLES_QUERY, read_live

__all__ = [
    "DEFAULT_SECTION",
    "SHOW_VARIABLES_QUERY",
    "parse_defaults",
    "read_cnf",
    "read_defaults",
    "read_live",
]
