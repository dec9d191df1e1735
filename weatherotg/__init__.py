"""Weather helpers: city lookup by IP, wttr.in reports, forecast formatting and page parameters."""

__version__ = "0.1.0"