"""Exceptions raised while acquiring and rendering configuration sources.

The comparison engine itself never raises: it is handed already-built
snapshots and degrades malformed values to pass-through. Everything in this
module belongs to the collaborators around it (readers, DSN parsing,
settings and output).
"""

from typing import Any


class ConfigDiffError(Exception):
    """Base exception for all mysql-config-diff errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize error.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.details = details or {}


class SourceError(ConfigDiffError):
    """Exception raised when a configuration source cannot be built."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize source error.

        Args:
            message: Human-readable error message
            source: Label of the failing source (file path or server)
            details: Optional dictionary with additional error details
        """
        super().__init__(message, details)
        self.source = source


class ConfigFileError(SourceError):
    """Exception raised when an option file cannot be read or parsed."""


class DefaultsFileError(SourceError):
    """Exception raised when a defaults listing cannot be read or is empty."""


class LiveServerError(SourceError):
    """Exception raised when a live server cannot be queried."""


class DSNError(ConfigDiffError):
    """Exception raised when a DSN string cannot be parsed."""

    def __init__(
        self,
        message: str,
        dsn: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize DSN error.

        Args:
            message: Human-readable error message
            dsn: The offending DSN part (never the full string, it may
                 carry a password)
            details: Optional dictionary with additional error details
        """
        super().__init__(message, details)
        self.dsn = dsn


class OutputFormatError(ConfigDiffError):
    """Exception raised when an unknown output format is requested."""


class SettingsError(ConfigDiffError):
    """Exception raised when tool settings cannot be loaded."""
