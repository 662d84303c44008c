"""Tool settings.

Settings are resolved in this order, later sources winning:

1. Default values from the model
2. Settings file (YAML)
3. Environment variables (``CONFIG_DIFF_`` prefix)
4. Command-line flags, applied by the CLI
"""

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .exceptions import SettingsError
from .output import OutputFormat
from .readers.cnf import DEFAULT_SECTION


class LogLevel(str, Enum):
    """Supported logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AppSettings(BaseSettings):
    """Settings for a mysql-config-diff run.

    Environment variables:
    - CONFIG_DIFF_OUTPUT_FORMAT: json, prettyJson or plain (default: plain)
    - CONFIG_DIFF_LOG_LEVEL: Logging level (default: WARNING)
    - CONFIG_DIFF_CNF_SECTION: Option file section to read (default: mysqld)
    - CONFIG_DIFF_FOLD_DASHES: Treat - and _ in option names alike
    - CONFIG_DIFF_REPORT_LIKE_KINDS: Report one-sided keys between two live
      servers or two defaults listings (default: true)
    - CONFIG_DIFF_CONNECT_TIMEOUT: Server connection timeout in seconds
    """

    output_format: OutputFormat = Field(
        default=OutputFormat.PLAIN, description="Report output format"
    )
    log_level: LogLevel = Field(
        default=LogLevel.WARNING, description="Logging level"
    )
    cnf_section: str = Field(
        default=DEFAULT_SECTION, description="Option file section to read"
    )
    fold_dashes: bool = Field(
        default=False,
        description="Rewrite - to _ in option file names",
    )
    report_like_kinds: bool = Field(
        default=True,
        description="Report one-sided keys between sources of the same kind",
    )
    connect_timeout: int = Field(
        default=10, description="Server connection timeout in seconds"
    )

    model_config = SettingsConfigDict(
        env_prefix="CONFIG_DIFF_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> Any:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("cnf_section")
    @classmethod
    def validate_cnf_section(cls, v: str) -> str:
        """Validate the section name is not blank."""
        if not v.strip():
            raise ValueError("Option file section cannot be empty")
        return v.strip()

    @field_validator("connect_timeout")
    @classmethod
    def validate_connect_timeout(cls, v: int) -> int:
        """Validate connection timeout is positive."""
        if v <= 0:
            raise ValueError("Connection timeout must be positive")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Settings file values arrive as init kwargs; environment wins over them
        return env_settings, init_settings


def load_settings(path: str | Path | None = None) -> AppSettings:
    """Load settings from defaults, an optional YAML file and the environment.

    Args:
        path: Optional YAML settings file

    Returns:
        Resolved settings

    Raises:
        SettingsError: If the file cannot be read or holds invalid values
    """
    data: dict[str, Any] = {}

    if path is not None:
        settings_path = Path(path).expanduser()
        if not settings_path.is_file():
            raise SettingsError(f"Settings file not found: {settings_path}")

        try:
            with open(settings_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SettingsError(f"Failed to parse YAML settings: {e}") from e
        except OSError as e:
            raise SettingsError(f"Failed to read settings file: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise SettingsError(
                f"Settings file must contain a mapping, got {type(loaded).__name__}",
                details={"file": str(settings_path)},
            )
        data = loaded

    try:
        return AppSettings(**data)
    except ValidationError as e:
        raise SettingsError(
            f"Invalid settings: {e}", details={"errors": e.errors()}
        ) from e
