"""Work out what the index page was asked to show."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Callable, Mapping

from weatherotg.mode import DisplayMode, parse_display_mode
from weatherotg.unit import TemperatureUnit, parse_temperature_unit

__all__ = ["IndexParams", "client_ip", "resolve_index_params", "status_description"]

FALLBACK_CITY = "Tokyo"
_UNKNOWN_CITY = "Undefined"
_NOT_FOUND_TEXT = "The page you are looking for does not exist."
_GENERIC_ERROR_TEXT = "An error has occurred. Please try again later."


@dataclass(frozen=True)
class IndexParams:
    """Location, display mode and unit for the index page, and which were given."""

    location: str
    is_location_set: bool
    mode: DisplayMode
    is_mode_set: bool
    unit: TemperatureUnit
    is_unit_set: bool


def _get(mapping: Mapping[str, Any], name: str) -> str:
    """First value for ``name``, matching keys case-insensitively."""
    wanted = name.lower()
    for key, value in mapping.items():
        if key.lower() == wanted:
            if isinstance(value, (list, tuple)):
                return str(value[0]) if value else ""
            return "" if value is None else str(value)
    return ""


def _query(query: Mapping[str, Any], name: str) -> str:
    value = query.get(name, "")
    if isinstance(value, (list, tuple)):
        return str(value[0]) if value else ""
    return "" if value is None else str(value)


def client_ip(headers: Mapping[str, Any], remote_addr: str) -> str:
    """Return the client address from proxy headers, else the peer address."""
    ip = _get(headers, "x-forwarded-for").split(", ")[0]
    if not ip:
        ip = _get(headers, "x-real-ip").split(", ")[0]
    if not ip:
        ip = remote_addr.split(":")[0]
    return ip


def resolve_index_params(
    query: Mapping[str, Any],
    headers: Mapping[str, Any],
    remote_addr: str,
    locate: Callable[[str], str],
) -> IndexParams:
    """Read the index page parameters from a request.

    Without a ``location`` query value the city is looked up from the
    client address with ``locate``; a failed or unknown lookup falls back
    to Tokyo. Invalid modes and units fall back to their defaults.
    """
    location = _query(query, "location")
    is_location_set = location != ""
    if not is_location_set:
        try:
            city = locate(client_ip(headers, remote_addr))
        except Exception:
            city = _UNKNOWN_CITY
        location = FALLBACK_CITY if city == _UNKNOWN_CITY else city

    mode_text = _query(query, "mode")
    try:
        mode = parse_display_mode(mode_text)
    except ValueError:
        mode = DisplayMode.DEFAULT

    unit_text = _query(query, "unit")
    try:
        unit = parse_temperature_unit(unit_text)
    except ValueError:
        unit = TemperatureUnit.CELSIUS

    return IndexParams(
        location=location,
        is_location_set=is_location_set,
        mode=mode,
        is_mode_set=mode_text != "",
        unit=unit,
        is_unit_set=unit_text != "",
    )


def status_description(status: int) -> tuple[str, str]:
    """Return the title and explanation shown on an error page for ``status``."""
    try:
        name = HTTPStatus(status).phrase or "Error"
    except ValueError:
        name = "Error"
    text = _NOT_FOUND_TEXT if status == HTTPStatus.NOT_FOUND else _GENERIC_ERROR_TEXT
    return name, text