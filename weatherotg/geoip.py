"""Look up the city a client IP address belongs to."""

from __future__ import annotations

import logging
import urllib.error
import urllib.request

__all__ = ["CityLookupError", "get_city_from_ip"]

logger = logging.getLogger(__name__)

_LOOKUP_URL = "https://ipapi.co/{ip}/city/"
_TIMEOUT = 10


class CityLookupError(Exception):
    """The geolocation service did not answer with a city."""


def get_city_from_ip(ip: str) -> str:
    """Return the city name the geolocation service reports for ``ip``.

    Raises CityLookupError when the service answers with a status other
    than 200; network failures propagate as OSError.
    """
    url = _LOOKUP_URL.format(ip=ip)
    try:
        with urllib.request.urlopen(url, timeout=_TIMEOUT) as response:
            if response.status != 200:
                raise CityLookupError(f"Failed to get city from IP: {ip}")
            body = response.read()
    except urllib.error.HTTPError as exc:
        raise CityLookupError(f"Failed to get city from IP: {ip}") from exc

    city = body.decode("utf-8", errors="replace")
    logger.info("City from IP ip=%s city=%s", ip, city)
    return city