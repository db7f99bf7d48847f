"""User settings for lsi.

Settings are read from ~/.config/lsi/config.toml. Every key is optional;
a missing file means defaults. Command-line options override settings.

Example config.toml:

    indent_width = 4
    max_depth = 20
    timeout_seconds = 30
    long_format = true
    follow_links = true
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lsi.core.paths import get_settings_path
from lsi.walker.models import DEFAULT_INDENT_WIDTH, DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Configuration for path analysis and output.

    Attributes:
        indent_width: Spaces of indentation per followed symlink.
        max_depth: Maximum number of nested symlinks to follow.
        timeout_seconds: Traversal deadline per run (0 = unlimited).
        long_format: Show the long format columns by default.
        follow_links: Follow symlinks by default.
    """

    model_config = ConfigDict(extra="forbid")

    indent_width: Annotated[
        int,
        Field(ge=0, le=16, description="Indentation per symlink level (0-16)"),
    ] = DEFAULT_INDENT_WIDTH
    max_depth: Annotated[
        int,
        Field(ge=1, le=255, description="Symlink follow ceiling (1-255)"),
    ] = DEFAULT_MAX_DEPTH
    timeout_seconds: Annotated[
        float,
        Field(ge=0, description="Traversal timeout in seconds (0 = unlimited)"),
    ] = 0
    long_format: Annotated[
        bool,
        Field(description="Use long format (-p -u -g -s -m) by default"),
    ] = False
    follow_links: Annotated[
        bool,
        Field(description="Follow symlinks by default"),
    ] = True


class ConfigError(Exception):
    """Base exception for settings errors."""


class ConfigParseError(ConfigError):
    """Raised when the settings file is not valid TOML."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings; defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or its content doesn't
            match the schema.
    """
    config_path = path or get_settings_path()

    if not config_path.exists():
        logger.debug("No settings file at %s, using defaults", config_path)
        return Settings()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid settings in {config_path}: {e}") from e
