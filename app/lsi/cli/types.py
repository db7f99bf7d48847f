"""Shared types and parameter parsers for the CLI."""

import math
import re
from enum import Enum

import typer


class OutputFormat(str, Enum):
    """Output format options."""

    TEXT = "text"
    JSON = "json"


_DURATION_UNITS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """Parse a duration such as "30s", "5m", "1h30m" or "250ms".

    A bare number is taken as seconds.

    Args:
        value: Duration string from the command line.

    Returns:
        Duration in seconds.

    Raises:
        typer.BadParameter: If the value is not a valid duration.
    """
    text = value.strip()
    if not text:
        raise typer.BadParameter("empty duration")

    try:
        seconds = float(text)
    except ValueError:
        pos = 0
        seconds = 0.0
        while pos < len(text):
            match = _DURATION_PART.match(text, pos)
            if match is None:
                raise typer.BadParameter(f"invalid duration '{value}'") from None
            seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
            pos = match.end()

    if not math.isfinite(seconds) or seconds < 0:
        raise typer.BadParameter(f"invalid duration '{value}'")
    return seconds
