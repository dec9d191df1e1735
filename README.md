# weatherotg

Helpers for a small weather page. The package can:

- look up a city from a client's IP address with ipapi.co,
- fetch a weather report for a city from wttr.in (`?format=j1`),
- turn the report into current conditions, a short forecast of the next four
  time slots, and three days with eight time slots each,
- read the page's location, display mode and temperature unit from a request.

It uses only the Python standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Weather reports (`weatherotg.weather`)

```python
from weatherotg.weather import get_weather_info, format_weather_info

info = get_weather_info("New York")
weather = format_weather_info(info)

print(weather.current.location, weather.current.description, weather.current.icon)
for slot in weather.forecast:
    print(slot.timestamp, slot.detail.temp_c, slot.wind_speed_ms)
for day in weather.daily:
    print(day.timestamp.date(), [slot.icon for slot in day.hourly])
```

`get_weather_info(city)` replaces spaces in the city name with `+` and
requests the report. It raises `WeatherFetchError` when the service answers
with a status other than 200, `ValueError` when the answer is not a valid
report, and `OSError` on network failures.

If you already have the decoded JSON document, `parse_weather_info(data)`
builds the same `WeatherInfo` from it. Missing fields become empty values.
It raises `ValueError` if `data` is not a JSON object.

`format_weather_info(info)` returns a `FormattedWeather` with these fields:

- `current`: a `FormattedCurrentWeatherInfo`. Its `location` is
  `"<area>, <region>"` and its `timestamp` comes from the local observation
  time.
- `daily`: the first three days as `FormattedDailyWeatherInfo`. Each day has
  its first eight `FormattedForecastWeatherInfo` slots. A slot's timestamp is
  the day's date plus the whole hours of its `time` field (`"900"` is 09:00).
- `forecast`: up to four slots, taken from the three days combined. They
  start at the first slot that is not earlier than the current observation.
  If every slot is earlier, they start at the first slot.

It raises `ValueError` when a timestamp cannot be parsed or when the report
lacks entries it needs.

Two helpers are useful on their own:

- `weather_icon(description)` maps a description such as `"Light rain"` to
  an icon name such as `"mdi:weather-rainy"`. An unrecognised description
  gives `"mdi:help-rhombus-outline"`.
- `wind_speed_ms(speed_kmph)` converts a km/h string to metres per second.
  If the text cannot be read, it returns `0.0`.

## City from IP address (`weatherotg.geoip`)

```python
from weatherotg.geoip import get_city_from_ip, CityLookupError

try:
    city = get_city_from_ip("203.0.113.7")
except (CityLookupError, OSError):
    city = "Tokyo"
```

`get_city_from_ip` raises `CityLookupError` when the service answers with a
status other than 200. Network failures propagate as `OSError`.

## Display mode and temperature unit

```python
from weatherotg.mode import DisplayMode, parse_display_mode
from weatherotg.unit import TemperatureUnit, parse_temperature_unit

mode = parse_display_mode("extended")   # DisplayMode.EXTENDED
mode.label()                            # "Extended"
unit = parse_temperature_unit("f")      # TemperatureUnit.FAHRENHEIT
```

The display modes are `minimal`, `default` and `extended`. The units are `c`
and `f`. Any other value raises `ValueError`.

## Request parameters (`weatherotg.params`)

```python
from weatherotg.geoip import get_city_from_ip
from weatherotg.params import resolve_index_params

params = resolve_index_params(
    {"mode": "minimal"},
    {"X-Forwarded-For": "203.0.113.7, 10.0.0.1"},
    "10.0.0.1:51234",
    get_city_from_ip,
)
```

Query and header values may be plain strings or lists of strings. Header
names are matched without regard to case. The result is an `IndexParams` that
holds `location`, `mode` and `unit`, together with `is_location_set`,
`is_mode_set` and `is_unit_set`. Each flag tells whether the value was given
in the query.

- Without a `location` query value, `locate` is called with the client IP.
  The IP is taken from `X-Forwarded-For`, then `X-Real-IP`, then the remote
  address. If the lookup raises or returns `"Undefined"`, the location is
  `"Tokyo"`.
- A missing or invalid `mode` gives `DisplayMode.DEFAULT`.
- A missing or invalid `unit` gives `TemperatureUnit.CELSIUS`.

`client_ip(headers, remote_addr)` returns the client IP on its own.

`status_description(status)` returns the title and explanation for an error
page. The title is the HTTP reason phrase, or `"Error"` for an unknown
status. A 404 gets a "page does not exist" message; any other status gets a
generic one.

## What this package does not do

The package has no web server, no HTML templates and no command to run. It
provides the data and the request handling that a weather page needs.
Serving and rendering the page is left to the application that uses it.