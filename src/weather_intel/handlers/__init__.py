"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .weather_handler import WeatherHandler, resolve_weather_query, to_http_exception

__all__ = [
    "WeatherHandler",
    "resolve_weather_query",
    "to_http_exception",
]
