"""Semantic diffs between MySQL option files, live servers and defaults.

Example usage:
    from mysql_config_diff import CanonicalConfig, SourceKind, compare

    cnf = CanonicalConfig(SourceKind.FILE, {"max_allowed_packet": "64M"})
    live = CanonicalConfig(SourceKind.LIVE, {"max_allowed_packet": "67108864"})
    compare([cnf, live])  # {}
"""

from .diff import DiffEngine, SkipPolicy, compare
from .exceptions import (
    ConfigDiffError,
    ConfigFileError,
    DefaultsFileError,
    DSNError,
    LiveServerError,
    OutputFormatError,
    SettingsError,
    SourceError,
)
from .models import MISSING, CanonicalConfig, ConfigSource, DiffReport, SourceKind
from .normalizer import DEFAULT_STAGES, NormalizerPipeline, normalize
from .output import OutputFormat, format_report, get_formatter

__all__ = [
    "DEFAULT_STAGES",
    "MISSING",
    "CanonicalConfig",
    "ConfigDiffError",
    "ConfigFileError",
    "ConfigSource",
    "DSNError",
    "DefaultsFileError",
    "DiffEngine",
    "DiffReport",
    "LiveServerError",
    "NormalizerPipeline",
    "OutputFormat",
    "OutputFormatError",
    "SettingsError",
    "SkipPolicy",
    "SourceError",
    "SourceKind",
    "compare",
    "format_report",
    "get_formatter",
    "normalize",
]
