"""Temperature units."""

from __future__ import annotations

from enum import Enum

__all__ = ["TemperatureUnit", "parse_temperature_unit"]


class TemperatureUnit(str, Enum):
    """Unit in which temperatures are shown."""

    CELSIUS = "c"
    FAHRENHEIT = "f"


def parse_temperature_unit(value: str) -> TemperatureUnit:
    """Return the temperature unit named by ``value``.

    Raises ValueError if ``value`` names no unit.
    """
    try:
        return TemperatureUnit(value)
    except ValueError:
        raise ValueError(f"Invalid temperature unit: {value}") from None