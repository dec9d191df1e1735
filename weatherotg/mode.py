"""Display modes for the weather page."""

from __future__ import annotations

from enum import Enum

__all__ = ["DisplayMode", "parse_display_mode"]


class DisplayMode(str, Enum):
    """How much weather detail the page shows, from least to most."""

    MINIMAL = "minimal"
    DEFAULT = "default"
    EXTENDED = "extended"

    def label(self) -> str:
        """Human-readable name of the mode."""
        return _LABELS[self]


_LABELS = {
    DisplayMode.MINIMAL: "Minimal",
    DisplayMode.DEFAULT: "Default",
    DisplayMode.EXTENDED: "Extended",
}


def parse_display_mode(value: str) -> DisplayMode:
    """Return the display mode named by ``value``.

    Raises ValueError if ``value`` names no display mode.
    """
    try:
        return DisplayMode(value)
    except ValueError:
        raise ValueError(f"Invalid display mode: {value}") from None