"""Fetch weather reports and shape them for display."""

from __future__ import annotations

import json
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Mapping

__all__ = [
    "WeatherFetchError",
    "CurrentWeatherDetail",
    "ForecastWeatherDetail",
    "NearestArea",
    "Weather",
    "WeatherInfo",
    "FormattedCurrentWeatherInfo",
    "FormattedForecastWeatherInfo",
    "FormattedDailyWeatherInfo",
    "FormattedWeather",
    "parse_weather_info",
    "get_weather_info",
    "weather_icon",
    "wind_speed_ms",
    "format_weather_info",
]

_WEATHER_URL = "https://wttr.in/{city}?format=j1"
_TIMEOUT = 10
_DAYS = 3
_HOURS_PER_DAY = 8
_FORECAST_LENGTH = 4

_ICONS = (
    ("sunny", "mdi:weather-sunny"),
    ("snow", "mdi:weather-snowy"),
    ("rain", "mdi:weather-rainy"),
    ("drizzle", "mdi:weather-rainy"),
    ("cloudy", "mdi:weather-cloudy"),
    ("clear", "mdi:weather-night"),
    ("thunder", "mdi:lightning-bolt-outline"),
    ("overcast", "mdi:weather-partly-cloudy"),
    ("mist", "mdi:weather-fog"),
)
_UNKNOWN_ICON = "mdi:help-rhombus-outline"


class WeatherFetchError(Exception):
    """The weather service did not answer with a report."""


@dataclass(frozen=True)
class CurrentWeatherDetail:
    """Observed conditions at the time of the report."""

    local_obs_date_time: str = ""
    temp_c: str = ""
    temp_f: str = ""
    winddir_16_point: str = ""
    wind_speed_kmph: str = ""
    wind_speed_miles: str = ""
    weather_desc: tuple[str, ...] = ()


@dataclass(frozen=True)
class ForecastWeatherDetail:
    """Forecast conditions for one time slot of a day."""

    time: str = ""
    temp_c: str = ""
    temp_f: str = ""
    winddir_16_point: str = ""
    wind_speed_kmph: str = ""
    wind_speed_miles: str = ""
    weather_desc: tuple[str, ...] = ()
    chance_of_rain: str = ""


@dataclass(frozen=True)
class NearestArea:
    """The area the report was resolved to."""

    area_name: tuple[str, ...] = ()
    region: tuple[str, ...] = ()


@dataclass(frozen=True)
class Weather:
    """Forecast for one day."""

    date: str = ""
    hourly: tuple[ForecastWeatherDetail, ...] = ()


@dataclass(frozen=True)
class WeatherInfo:
    """A full weather report as delivered by the service."""

    current_condition: tuple[CurrentWeatherDetail, ...] = ()
    nearest_area: tuple[NearestArea, ...] = ()
    weather: tuple[Weather, ...] = ()


@dataclass(frozen=True)
class FormattedCurrentWeatherInfo:
    location: str
    detail: CurrentWeatherDetail
    description: str
    wind_speed_ms: float
    icon: str
    timestamp: datetime


@dataclass(frozen=True)
class FormattedForecastWeatherInfo:
    detail: ForecastWeatherDetail
    description: str
    wind_speed_ms: float
    icon: str
    timestamp: datetime


@dataclass(frozen=True)
class FormattedDailyWeatherInfo:
    timestamp: datetime
    hourly: tuple[FormattedForecastWeatherInfo, ...]


@dataclass(frozen=True)
class FormattedWeather:
    current: FormattedCurrentWeatherInfo
    forecast: tuple[FormattedForecastWeatherInfo, ...]
    daily: tuple[FormattedDailyWeatherInfo, ...]


def _values(items: Any) -> tuple[str, ...]:
    return tuple(str(item.get("value", "")) for item in items or ())


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key, "")
    return "" if value is None else str(value)


def _current(data: Mapping[str, Any]) -> CurrentWeatherDetail:
    return CurrentWeatherDetail(
        local_obs_date_time=_str(data, "localObsDateTime"),
        temp_c=_str(data, "temp_C"),
        temp_f=_str(data, "temp_F"),
        winddir_16_point=_str(data, "winddir16Point"),
        wind_speed_kmph=_str(data, "windspeedKmph"),
        wind_speed_miles=_str(data, "windspeedMiles"),
        weather_desc=_values(data.get("weatherDesc")),
    )


def _forecast(data: Mapping[str, Any]) -> ForecastWeatherDetail:
    return ForecastWeatherDetail(
        time=_str(data, "time"),
        temp_c=_str(data, "tempC"),
        temp_f=_str(data, "tempF"),
        winddir_16_point=_str(data, "winddir16Point"),
        wind_speed_kmph=_str(data, "windspeedKmph"),
        wind_speed_miles=_str(data, "windspeedMiles"),
        weather_desc=_values(data.get("weatherDesc")),
        chance_of_rain=_str(data, "chanceofrain"),
    )


def parse_weather_info(data: Mapping[str, Any]) -> WeatherInfo:
    """Build a WeatherInfo from the decoded JSON of a report.

    Missing fields take empty values. Raises ValueError if ``data`` is
    not a JSON object.
    """
    if not isinstance(data, Mapping):
        raise ValueError("weather report must be a JSON object")
    return WeatherInfo(
        current_condition=tuple(_current(c) for c in data.get("current_condition") or ()),
        nearest_area=tuple(
            NearestArea(
                area_name=_values(area.get("areaName")),
                region=_values(area.get("region")),
            )
            for area in data.get("nearest_area") or ()
        ),
        weather=tuple(
            Weather(
                date=_str(day, "date"),
                hourly=tuple(_forecast(h) for h in day.get("hourly") or ()),
            )
            for day in data.get("weather") or ()
        ),
    )


def get_weather_info(city: str) -> WeatherInfo:
    """Fetch the weather report for ``city``.

    Raises WeatherFetchError when the service answers with a status other
    than 200, ValueError when the answer is not a valid report, and
    OSError on network failures.
    """
    path = urllib.parse.quote(city.replace(" ", "+"), safe="+/,~@")
    url = _WEATHER_URL.format(city=path)
    try:
        with urllib.request.urlopen(url, timeout=_TIMEOUT) as response:
            if response.status != 200:
                raise WeatherFetchError(f"Failed to get weather info for city: {city}")
            body = response.read()
    except urllib.error.HTTPError as exc:
        raise WeatherFetchError(f"Failed to get weather info for city: {city}") from exc
    return parse_weather_info(json.loads(body))


def weather_icon(description: str) -> str:
    """Return the icon name that matches a weather description."""
    lowered = description.lower()
    return next((icon for word, icon in _ICONS if word in lowered), _UNKNOWN_ICON)


def wind_speed_ms(speed_kmph: str) -> float:
    """Convert a speed in km/h, given as text, to m/s; unparsable text gives 0."""
    if speed_kmph != speed_kmph.strip() or "_" in speed_kmph:
        return 0.0
    try:
        speed = float(speed_kmph)
    except ValueError:
        return 0.0
    return speed / 3.6


def _whole_hours(clock: str) -> int:
    value = int(clock)
    quotient = abs(value) // 100
    return quotient if value >= 0 else -quotient


def _format_forecast(detail: ForecastWeatherDetail, timestamp: datetime) -> FormattedForecastWeatherInfo:
    description = detail.weather_desc[0]
    return FormattedForecastWeatherInfo(
        detail=detail,
        description=description,
        wind_speed_ms=wind_speed_ms(detail.wind_speed_kmph),
        icon=weather_icon(description),
        timestamp=timestamp,
    )


def _format_current(info: WeatherInfo) -> FormattedCurrentWeatherInfo:
    detail = info.current_condition[0]
    area = info.nearest_area[0]
    description = detail.weather_desc[0]
    return FormattedCurrentWeatherInfo(
        location=f"{area.area_name[0]}, {area.region[0]}",
        detail=detail,
        description=description,
        wind_speed_ms=wind_speed_ms(detail.wind_speed_kmph),
        icon=weather_icon(description),
        timestamp=datetime.strptime(detail.local_obs_date_time, "%Y-%m-%d %I:%M %p"),
    )


def _format_day(day: Weather) -> FormattedDailyWeatherInfo:
    date = datetime.strptime(day.date, "%Y-%m-%d")
    hourly = tuple(
        _format_forecast(detail, date + timedelta(hours=_whole_hours(detail.time)))
        for detail in day.hourly[:_HOURS_PER_DAY]
    )
    if len(hourly) < _HOURS_PER_DAY:
        raise IndexError("too few hourly forecasts")
    return FormattedDailyWeatherInfo(timestamp=date, hourly=hourly)


def format_weather_info(info: WeatherInfo) -> FormattedWeather:
    """Shape a report into current conditions, a short forecast and three days.

    Raises ValueError if a timestamp cannot be parsed or the report lacks
    required entries.
    """
    try:
        current = _format_current(info)
        if len(info.weather) < _DAYS:
            raise IndexError("too few forecast days")
        daily = tuple(_format_day(day) for day in info.weather[:_DAYS])
    except IndexError as exc:
        raise ValueError(f"incomplete weather info: {exc}") from exc

    combined = [slot for day in daily for slot in day.hourly]
    first = next(
        (i for i, slot in enumerate(combined) if not slot.timestamp < current.timestamp),
        0,
    )
    forecast = tuple(combined[first:first + _FORECAST_LENGTH])
    return FormattedWeather(current=current, forecast=forecast, daily=daily)