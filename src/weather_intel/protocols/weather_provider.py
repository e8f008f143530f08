"""Upstream weather and geocoding provider protocols.

The orchestrator only depends on query-by-string input and the raw JSON
shapes documented below, so any provider that produces WeatherAPI.com
compatible payloads can be swapped in.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class WeatherProvider(Protocol):
    """Protocol for the primary weather/geocoding provider."""

    @property
    def name(self) -> str:
        """Short provider identifier used in logs and stats."""
        ...

    async def fetch_current(self, query: str) -> dict[str, Any]:
        """Fetch current conditions for a city name or ``"lat,lon"`` string.

        Returns:
            Raw payload with ``location`` and ``current`` objects

        Raises:
            ConfigurationError: If the provider credential is missing
            NotFoundError: If the location does not resolve
            UpstreamError: On any other failure
        """
        ...

    async def fetch_forecast(self, query: str, days: int) -> dict[str, Any]:
        """Fetch an N-day forecast with per-day and per-hour breakdowns.

        Returns:
            Raw payload with a ``forecast.forecastday`` list
        """
        ...

    async def search(self, query: str) -> list[dict[str, Any]]:
        """Free-text location search.

        Returns:
            List of candidate dicts with id, name, region, country, lat, lon
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...


@runtime_checkable
class LocationSearchProvider(Protocol):
    """Protocol for a secondary geocoder used to enrich sparse search results."""

    @property
    def name(self) -> str:
        ...

    async def search(self, query: str) -> list[dict[str, Any]]:
        """Return candidates in the same shape as ``WeatherProvider.search``."""
        ...

    async def close(self) -> None:
        ...
