"""Nominatim (OpenStreetMap) geocoder.

Used as a secondary search provider when WeatherAPI returns too few
matches, typically for small towns and villages. Nominatim requires an
identifying User-Agent on every request.
"""

import logging
from typing import Any

import httpx

from weather_intel.config import settings
from weather_intel.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class NominatimSearchProvider:
    """Nominatim implementation of the LocationSearchProvider protocol."""

    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        limit: int = 5,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url or settings.nominatim_url
        self._user_agent = user_agent or settings.nominatim_user_agent
        self._timeout = timeout or settings.weather_api_timeout
        self._limit = limit
        self._client = client

    @classmethod
    def create(cls, base_url: str | None = None, user_agent: str | None = None) -> "NominatimSearchProvider":
        return cls(base_url=base_url, user_agent=user_agent)

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    @property
    def name(self) -> str:
        return "nominatim"

    async def search(self, query: str) -> list[dict[str, Any]]:
        """Search Nominatim and map results to the suggestion shape.

        Raises:
            UpstreamError: On network failure, non-2xx status or bad JSON
        """
        params = {"q": query, "format": "json", "limit": self._limit, "addressdetails": 1}
        try:
            response = await self.client.get(
                self._base_url,
                params=params,
                headers={"User-Agent": self._user_agent},
            )
            response.raise_for_status()
            items = response.json()
        except httpx.HTTPError as e:
            raise UpstreamError(f"Nominatim request failed: {e}") from e
        except ValueError as e:
            raise UpstreamError("Nominatim returned invalid JSON") from e

        if not isinstance(items, list):
            raise UpstreamError("Malformed Nominatim payload")

        results = []
        for item in items:
            mapped = self._to_suggestion(item)
            if mapped is not None:
                results.append(mapped)
        return results

    @staticmethod
    def _to_suggestion(item: Any) -> dict[str, Any] | None:
        if not isinstance(item, dict):
            logger.debug("Skipping non-object Nominatim item: %r", item)
            return None
        try:
            address = item.get("address") or {}
            display_name = item.get("display_name") or ""
            name = (
                address.get("city")
                or address.get("town")
                or address.get("village")
                or display_name.split(",")[0].strip()
            )
            if not name:
                logger.debug("Skipping unnamed Nominatim item: %s", item)
                return None
            return {
                "id": int(item["place_id"]),
                "name": name,
                "region": address.get("state") or address.get("county") or "",
                "country": address.get("country", ""),
                "lat": float(item["lat"]),
                "lon": float(item["lon"]),
            }
        except (AttributeError, KeyError, TypeError, ValueError):
            logger.debug("Skipping malformed Nominatim item: %s", item)
            return None

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
