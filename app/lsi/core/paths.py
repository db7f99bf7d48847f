"""Locations of the lsi configuration files.

lsi only reads configuration and keeps no state between runs, so the
config directory (``$XDG_CONFIG_HOME/lsi``, by default ``~/.config/lsi``)
is the only location it needs.
"""

import os
from pathlib import Path

APP_NAME = "lsi"


def get_config_dir() -> Path:
    """Get the lsi configuration directory.

    An unset or empty ``XDG_CONFIG_HOME`` falls back to ``~/.config``.
    The directory is not created; lsi never writes to it.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(config_home) / APP_NAME


def get_settings_path() -> Path:
    """Path of the settings file, ``config.toml``."""
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Path of the user's color overrides, ``theme.toml``."""
    return get_config_dir() / "theme.toml"
