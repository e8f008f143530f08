"""
Shared fixtures and fakes for the test suite.
"""

from typing import Any

import pytest

from weather_intel.exceptions import UpstreamError
from weather_intel.repositories import InMemoryCacheRepository
from weather_intel.services import RateLimiter


class FakeClock:
    """Manually advanced clock for TTL and window tests."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def current_payload(
    name: str = "London",
    temp_c: float = 18.0,
    humidity: float = 60,
    wind_kph: float = 10.0,
    cloud: float = 40,
    vis_km: float = 10.0,
    uv: float = 4.0,
    condition: str = "Partly cloudy",
) -> dict[str, Any]:
    """Build a WeatherAPI ``current.json`` style payload."""
    return {
        "location": {
            "name": name,
            "region": "City of London, Greater London",
            "country": "United Kingdom",
            "lat": 51.52,
            "lon": -0.11,
            "tz_id": "Europe/London",
            "localtime": "2026-10-19 12:00",
        },
        "current": {
            "last_updated_epoch": 1_760_871_600,
            "temp_c": temp_c,
            "temp_f": temp_c * 9 / 5 + 32,
            "is_day": 1,
            "condition": {"text": condition, "icon": "//cdn.weatherapi.com/116.png", "code": 1003},
            "wind_kph": wind_kph,
            "wind_degree": 250,
            "wind_dir": "WSW",
            "pressure_mb": 1015.0,
            "humidity": humidity,
            "cloud": cloud,
            "feelslike_c": temp_c - 1,
            "vis_km": vis_km,
            "uv": uv,
            "air_quality": {"co": 230.3, "pm2_5": 4.2, "us-epa-index": 1},
        },
    }


def forecast_payload(days: int = 3) -> dict[str, Any]:
    """Build a WeatherAPI ``forecast.json`` style payload."""
    forecast_days = []
    for i in range(days):
        forecast_days.append(
            {
                "date": f"2026-10-{19 + i}",
                "day": {
                    "maxtemp_c": 20.0 + i,
                    "mintemp_c": 10.0 + i,
                    "avghumidity": 70,
                    "daily_chance_of_rain": 20,
                    "uv": 3.0,
                    "condition": {"text": "Sunny", "icon": "//cdn.weatherapi.com/113.png", "code": 1000},
                },
                "astro": {"sunrise": "07:30 AM", "sunset": "06:00 PM"},
                "hour": [
                    {
                        "time_epoch": 1_760_828_400 + h * 3600,
                        "time": f"2026-10-{19 + i} {h:02d}:00",
                        "temp_c": 12.0 + h / 4,
                        "is_day": 1 if 7 <= h <= 18 else 0,
                        "condition": {"text": "Clear", "icon": "", "code": 1000},
                        "chance_of_rain": 0,
                        "wind_kph": 8.0,
                    }
                    for h in range(24)
                ],
            }
        )
    return {"location": current_payload()["location"], "forecast": {"forecastday": forecast_days}}


class FakeWeatherProvider:
    """In-memory WeatherProvider that records every call."""

    def __init__(
        self,
        current: dict[str, Any] | None = None,
        forecast: dict[str, Any] | None = None,
        search_results: list[dict[str, Any]] | None = None,
    ) -> None:
        self.current = current or current_payload()
        self.forecast = forecast or forecast_payload()
        self.search_results = search_results or []
        self.current_error: Exception | None = None
        self.forecast_error: Exception | None = None
        self.search_error: Exception | None = None
        self.current_calls: list[str] = []
        self.forecast_calls: list[tuple[str, int]] = []
        self.search_calls: list[str] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "fake"

    async def fetch_current(self, query: str) -> dict[str, Any]:
        self.current_calls.append(query)
        if self.current_error:
            raise self.current_error
        return self.current

    async def fetch_forecast(self, query: str, days: int) -> dict[str, Any]:
        self.forecast_calls.append((query, days))
        if self.forecast_error:
            raise self.forecast_error
        return self.forecast

    async def search(self, query: str) -> list[dict[str, Any]]:
        self.search_calls.append(query)
        if self.search_error:
            raise self.search_error
        return self.search_results

    async def close(self) -> None:
        self.closed = True


class FakeSearchProvider:
    """Secondary search provider returning canned results."""

    def __init__(self, results: list[dict[str, Any]] | None = None, fail: bool = False) -> None:
        self.results = results or []
        self.fail = fail
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return "fake-secondary"

    async def search(self, query: str) -> list[dict[str, Any]]:
        self.calls.append(query)
        if self.fail:
            raise UpstreamError("secondary down")
        return self.results

    async def close(self) -> None:
        pass


@pytest.fixture
def clock():
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Create an in-memory cache driven by the fake clock."""
    return InMemoryCacheRepository(default_ttl=900, time_func=clock)


@pytest.fixture
def limiter(clock):
    """Create a 60 requests/minute limiter driven by the fake clock."""
    return RateLimiter(max_requests=60, window_seconds=60, time_func=clock)


@pytest.fixture
def provider():
    """Create a fake upstream provider."""
    return FakeWeatherProvider()
