"""Color theme for lsi output.

The bundled ``data/theme.toml`` defines every color; a user
``theme.toml`` in the config directory may override any subset of them.
Colors are mapped onto the Rich style names used by the record
renderer (``record.mode``, ``record.link``, ...).
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from lsi.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def _check_hex_color(value: str) -> str:
    """Validate a "#RGB" or "#RRGGBB" color and return it stripped."""
    color = value.strip()
    if not color.startswith("#"):
        raise ValueError("color must start with '#'")
    digits = color[1:]
    if len(digits) not in (3, 6):
        raise ValueError("color must be #RGB or #RRGGBB format")
    try:
        int(digits, 16)
    except ValueError:
        raise ValueError(f"invalid hex color '{color}'") from None
    return color


HexColor = Annotated[str, AfterValidator(_check_hex_color)]


class ThemeColors(BaseModel):
    """Colors of the lsi output, as hex codes."""

    model_config = ConfigDict(extra="forbid")

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    # Record columns
    permissions: HexColor = "#0e8ac8"
    owner: HexColor = "#69B9A1"
    size: HexColor = "#0ec1c8"
    inode: HexColor = "#b2bec3"
    mount: HexColor = "#faf870"
    link: HexColor = "#d44ebc"


# Rich style name -> (ThemeColors field, extra style attributes)
_STYLES: dict[str, tuple[str, str]] = {
    "text": ("text", ""),
    "muted": ("muted", ""),
    "header": ("header", "bold"),
    "success": ("success", ""),
    "warning": ("warning", ""),
    "error": ("error", "bold"),
    "info": ("info", ""),
    "record.mode": ("permissions", ""),
    "record.owner": ("owner", ""),
    "record.size": ("size", ""),
    "record.inode": ("inode", ""),
    "record.mount": ("mount", "bold"),
    "record.name": ("text", "bold"),
    "record.link": ("link", ""),
    "record.error": ("error", ""),
}


def get_bundled_theme_path() -> Path:
    """Get the path of the theme shipped with the package."""
    return resources.files("lsi.data").joinpath("theme.toml")  # type: ignore[return-value]


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Non-string entries are skipped.

    Args:
        path: Theme file to read.

    Returns:
        Color names mapped to their values, or None if the file is
        missing, unreadable or not valid TOML.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        logger.warning("Failed to parse theme file %s: %s", path, e)
        return None
    except OSError as e:
        logger.warning("Failed to read theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring non-table 'colors' entry in %s", path)
        return None
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Load the bundled colors with the user's overrides applied.

    An invalid user color discards the whole user theme.

    Returns:
        The merged ThemeColors.
    """
    colors = _load_toml_colors(Path(get_bundled_theme_path()))
    if colors is None:
        logger.error("Bundled theme is missing or broken, using built-in colors")
        colors = {}

    user_path = get_user_theme_path()
    overrides = _load_toml_colors(user_path)
    if overrides:
        logger.debug("Applying theme overrides from %s", user_path)
        colors = {**colors, **overrides}

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for a set of colors.

    Args:
        colors: Colors to use. Loaded with load_theme() if None.

    Returns:
        Rich Theme defining every style lsi prints with.
    """
    colors = colors or load_theme()
    return Theme(
        {
            name: f"{attributes} {getattr(colors, field)}".lstrip()
            for name, (field, attributes) in _STYLES.items()
        }
    )


@cache
def get_theme() -> Theme:
    """Get the Rich theme, loading it on first use."""
    return get_rich_theme()


def reload_theme() -> Theme:
    """Reload the theme from the theme files.

    Returns:
        The newly loaded Rich Theme, also returned by get_theme() from
        now on.
    """
    get_theme.cache_clear()
    return get_theme()
