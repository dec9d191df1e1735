import io
import json
from datetime import datetime, timedelta
from unittest import mock

import pytest

from weatherotg.weather import (
    CurrentWeatherDetail,
    WeatherFetchError,
    WeatherInfo,
    format_weather_info,
    get_weather_info,
    parse_weather_info,
    weather_icon,
    wind_speed_ms,
)

HOURS = ["0", "300", "600", "900", "1200", "1500", "1800", "2100"]
DATES = ["2024-03-20", "2024-03-21", "2024-03-22"]


def _hour(time, desc="Sunny"):
    return {
        "time": time,
        "tempC": "12",
        "tempF": "54",
        "winddir16Point": "N",
        "windspeedKmph": "18",
        "windspeedMiles": "11",
        "weatherDesc": [{"value": desc}],
        "chanceofrain": "40",
    }


def _payload(obs="2024-03-20 1:30 PM"):
    return {
        "current_condition": [
            {
                "localObsDateTime": obs,
                "temp_C": "12",
                "temp_F": "54",
                "winddir16Point": "NW",
                "windspeedKmph": "18",
                "windspeedMiles": "11",
                "weatherDesc": [{"value": "Light rain"}],
            }
        ],
        "nearest_area": [
            {"areaName": [{"value": "Shibuya"}], "region": [{"value": "Tokyo"}]}
        ],
        "weather": [
            {"date": d, "hourly": [_hour(t) for t in HOURS]} for d in DATES
        ],
    }


class _FakeResponse(io.BytesIO):
    def __init__(self, body, status=200):
        super().__init__(body)
        self.status = status


def test_parse_weather_info_reads_fields():
    info = parse_weather_info(_payload())
    assert info.current_condition[0].temp_c == "12"
    assert info.current_condition[0].weather_desc == ("Light rain",)
    assert info.nearest_area[0].area_name == ("Shibuya",)
    assert [day.date for day in info.weather] == DATES
    assert [h.time for h in info.weather[0].hourly] == HOURS
    assert info.weather[0].hourly[0].chance_of_rain == "40"


def test_parse_weather_info_missing_fields_are_empty():
    info = parse_weather_info({"current_condition": [{}]})
    assert info.current_condition == (CurrentWeatherDetail(),)
    assert info.weather == ()


def test_parse_weather_info_rejects_non_object():
    with pytest.raises(ValueError):
        parse_weather_info([1, 2])


@pytest.mark.parametrize(
    "description, icon",
    [
        ("Sunny", "mdi:weather-sunny"),
        ("Light snow", "mdi:weather-snowy"),
        ("Patchy rain possible", "mdi:weather-rainy"),
        ("Light drizzle", "mdi:weather-rainy"),
        ("Partly cloudy", "mdi:weather-cloudy"),
        ("Clear", "mdi:weather-night"),
        ("Thundery outbreaks", "mdi:lightning-bolt-outline"),
        ("Overcast", "mdi:weather-partly-cloudy"),
        ("Mist", "mdi:weather-fog"),
        ("Sandstorm", "mdi:help-rhombus-outline"),
    ],
)
def test_weather_icon(description, icon):
    assert weather_icon(description) == icon


def test_weather_icon_first_match_wins():
    assert weather_icon("Sunny with rain") == weather_icon("Sunny")


@pytest.mark.parametrize("speed", [0.0, 5.0, 12.5])
def test_wind_speed_round_trip(speed):
    assert wind_speed_ms(repr(speed * 3.6)) == pytest.approx(speed)


@pytest.mark.parametrize("text", ["", "fast", " 10", "1_0"])
def test_wind_speed_unparsable_is_zero(text):
    assert wind_speed_ms(text) == 0


def test_format_current():
    result = format_weather_info(parse_weather_info(_payload()))
    current = result.current
    assert current.location == "Shibuya, Tokyo"
    assert current.description == "Light rain"
    assert current.icon == "mdi:weather-rainy"
    assert current.timestamp == datetime(2024, 3, 20, 13, 30)
    assert current.wind_speed_ms == pytest.approx(wind_speed_ms("18"))


def test_format_daily_timestamps():
    result = format_weather_info(parse_weather_info(_payload()))
    assert len(result.daily) == 3
    for day, date in zip(result.daily, DATES):
        assert day.timestamp == datetime.strptime(date, "%Y-%m-%d")
        assert len(day.hourly) == 8
        diffs = [slot.timestamp - day.timestamp for slot in day.hourly]
        assert diffs == [timedelta(hours=h) for h in range(0, 24, 3)]
        assert all(slot.icon == "mdi:weather-sunny" for slot in day.hourly)


def test_format_forecast_starts_at_first_slot_not_before_now():
    result = format_weather_info(parse_weather_info(_payload()))
    assert [slot.timestamp for slot in result.forecast] == [
        datetime(2024, 3, 20, 15),
        datetime(2024, 3, 20, 18),
        datetime(2024, 3, 20, 21),
        datetime(2024, 3, 21, 0),
    ]


def test_format_forecast_includes_exact_match():
    result = format_weather_info(parse_weather_info(_payload("2024-03-20 6:00 AM")))
    assert result.forecast[0].timestamp == datetime(2024, 3, 20, 6)
    assert len(result.forecast) == 4


@mock.patch("urllib.request.urlopen")
def test_get_weather_info_parses_response(urlopen):
    urlopen.return_value = _FakeResponse(json.dumps(_payload()).encode("utf-8"))
    info = get_weather_info("New York")
    assert isinstance(info, WeatherInfo)
    assert info.nearest_area[0].area_name == ("Shibuya",)
    assert urlopen.call_args.args[0] == "https://wttr.in/New+York?format=j1"


@mock.patch("urllib.request.urlopen")
def test_get_weather_info_non_200_raises(urlopen):
    urlopen.return_value = _FakeResponse(b"", status=204)
    with pytest.raises(WeatherFetchError, match="Tokyo"):
        get_weather_info("Tokyo")