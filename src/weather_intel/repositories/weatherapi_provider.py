"""WeatherAPI.com provider.

Talks to the WeatherAPI.com REST endpoints:

- ``current.json``  current conditions (with air quality)
- ``forecast.json`` N-day forecast with hourly breakdown
- ``search.json``   free-text location autocomplete

Errors are translated into the service taxonomy. WeatherAPI reports an
unresolvable location as HTTP 400 with error code 1006, which becomes
``NotFoundError``; credential problems become ``ConfigurationError``.
"""

import logging
from typing import Any

import httpx

from weather_intel.config import settings
from weather_intel.exceptions import ConfigurationError, NotFoundError, UpstreamError

logger = logging.getLogger(__name__)

# https://www.weatherapi.com/docs/#intro-error-codes
LOCATION_NOT_FOUND_CODE = 1006
CREDENTIAL_ERROR_CODES = frozenset({1002, 2006, 2007, 2008})


class WeatherApiProvider:
    """WeatherAPI.com implementation of the WeatherProvider protocol.

    This class satisfies the WeatherProvider protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        provider = WeatherApiProvider.create(api_key="...")
        current = await provider.fetch_current("London")
        forecast = await provider.fetch_forecast("51.507,-0.128", days=7)
        await provider.close()
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key: WeatherAPI key. Defaults to settings.
            base_url: API base URL. Defaults to settings.
            timeout: Per-request timeout in seconds. Defaults to settings.
            client: Pre-built async client (tests pass one with a mock transport).
        """
        self._api_key = api_key if api_key is not None else settings.weather_api_key
        self._base_url = (base_url or settings.weather_api_base_url).rstrip("/")
        self._timeout = timeout or settings.weather_api_timeout
        self._client = client

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> "WeatherApiProvider":
        """Factory method to create WeatherApiProvider with defaults from settings."""
        return cls(api_key=api_key, base_url=base_url, timeout=timeout)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @property
    def name(self) -> str:
        return "weatherapi"

    async def fetch_current(self, query: str) -> dict[str, Any]:
        data = await self._get("current.json", {"q": query, "aqi": "yes"})
        if not isinstance(data, dict) or "location" not in data or "current" not in data:
            raise UpstreamError("Malformed current conditions payload")
        return data

    async def fetch_forecast(self, query: str, days: int) -> dict[str, Any]:
        data = await self._get(
            "forecast.json",
            {"q": query, "days": days, "aqi": "yes", "alerts": "no"},
        )
        forecast = data.get("forecast") if isinstance(data, dict) else None
        if not isinstance(forecast, dict) or "forecastday" not in forecast:
            raise UpstreamError("Malformed forecast payload")
        return data

    async def search(self, query: str) -> list[dict[str, Any]]:
        data = await self._get("search.json", {"q": query})
        if not isinstance(data, list):
            raise UpstreamError("Malformed search payload")
        return data

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        """Issue a GET request and decode the JSON body.

        Raises:
            ConfigurationError: If no API key is configured or it was rejected
            NotFoundError: If the location does not resolve
            UpstreamError: On network failure, timeout, non-2xx or bad JSON
        """
        if not self._api_key:
            raise ConfigurationError("WEATHER_API_KEY is not configured")

        url = f"{self._base_url}/{path}"
        try:
            response = await self.client.get(url, params={"key": self._api_key, **params})
        except httpx.TimeoutException as e:
            logger.warning("WeatherAPI request to %s timed out", path)
            raise UpstreamError(f"WeatherAPI request timed out: {path}") from e
        except httpx.HTTPError as e:
            logger.warning("WeatherAPI request to %s failed: %s", path, e)
            raise UpstreamError(f"WeatherAPI request failed: {e}") from e

        if response.status_code >= 400:
            self._raise_for_error(path, response)

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"WeatherAPI returned invalid JSON for {path}") from e

    def _raise_for_error(self, path: str, response: httpx.Response) -> None:
        code: int | None = None
        message = f"WeatherAPI returned HTTP {response.status_code}"
        try:
            error = response.json().get("error", {})
            code = error.get("code")
            message = error.get("message") or message
        except (ValueError, AttributeError):
            pass

        logger.warning(
            "WeatherAPI error on %s: status=%s code=%s message=%s",
            path,
            response.status_code,
            code,
            message,
        )
        if code == LOCATION_NOT_FOUND_CODE:
            raise NotFoundError(message)
        if response.status_code in (401, 403) or code in CREDENTIAL_ERROR_CODES:
            raise ConfigurationError(message)
        raise UpstreamError(message)

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
