"""
Tests for the upstream HTTP providers using httpx mock transports.
"""

import asyncio

import httpx
import pytest
from conftest import current_payload, forecast_payload

from weather_intel.exceptions import ConfigurationError, NotFoundError, UpstreamError
from weather_intel.protocols import LocationSearchProvider, WeatherProvider
from weather_intel.repositories import NominatimSearchProvider, WeatherApiProvider


def weatherapi(handler, api_key: str | None = "test-key") -> WeatherApiProvider:
    """Create a WeatherApiProvider whose client is served by ``handler``."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WeatherApiProvider(api_key=api_key, base_url="https://api.example.test/v1", client=client)


def test_satisfies_protocols():
    assert isinstance(WeatherApiProvider(api_key="k"), WeatherProvider)
    assert isinstance(NominatimSearchProvider(), LocationSearchProvider)


def test_fetch_current_sends_key_and_query():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=current_payload())

    data = asyncio.run(weatherapi(handler).fetch_current("51.507,-0.128"))

    assert data["location"]["name"] == "London"
    assert seen["path"] == "/v1/current.json"
    assert seen["params"] == {"key": "test-key", "q": "51.507,-0.128", "aqi": "yes"}


def test_fetch_forecast_requests_days():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=forecast_payload(days=7))

    data = asyncio.run(weatherapi(handler).fetch_forecast("London", days=7))

    assert len(data["forecast"]["forecastday"]) == 7
    assert seen["params"]["days"] == "7"


def test_missing_api_key_is_configuration_error():
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - never called
        raise AssertionError("no request expected")

    with pytest.raises(ConfigurationError):
        asyncio.run(weatherapi(handler, api_key="").fetch_current("London"))


def test_location_not_found():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"code": 1006, "message": "No matching location found."}})

    with pytest.raises(NotFoundError, match="No matching location"):
        asyncio.run(weatherapi(handler).fetch_current("Atlantis"))


def test_rejected_key_is_configuration_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"code": 2006, "message": "API key is invalid."}})

    with pytest.raises(ConfigurationError):
        asyncio.run(weatherapi(handler).fetch_current("London"))


def test_server_error_is_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="maintenance")

    with pytest.raises(UpstreamError, match="HTTP 503"):
        asyncio.run(weatherapi(handler).fetch_forecast("London", days=3))


def test_timeout_is_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(UpstreamError, match="timed out"):
        asyncio.run(weatherapi(handler).fetch_current("London"))


def test_invalid_json_is_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    with pytest.raises(UpstreamError):
        asyncio.run(weatherapi(handler).fetch_current("London"))


def test_malformed_shape_is_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"unexpected": True})

    with pytest.raises(UpstreamError):
        asyncio.run(weatherapi(handler).fetch_current("London"))


def test_null_forecast_is_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"location": {}, "forecast": None})

    with pytest.raises(UpstreamError, match="Malformed forecast"):
        asyncio.run(weatherapi(handler).fetch_forecast("London", days=3))


def test_search_returns_list():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"id": 1, "name": "London", "lat": 51.52, "lon": -0.11}])

    results = asyncio.run(weatherapi(handler).search("Lon"))

    assert results[0]["name"] == "London"


def test_nominatim_maps_results_and_sends_user_agent():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["user_agent"] = request.headers["user-agent"]
        seen["params"] = dict(request.url.params)
        return httpx.Response(
            200,
            json=[
                {
                    "place_id": "12345",
                    "lat": "52.861",
                    "lon": "0.904",
                    "display_name": "Little Snoring, North Norfolk, England",
                    "address": {"village": "Little Snoring", "county": "Norfolk", "country": "United Kingdom"},
                },
                {"place_id": "bad"},
            ],
        )

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    provider = NominatimSearchProvider(user_agent="weather-intel-tests", client=client)

    results = asyncio.run(provider.search("Little Snoring"))

    assert results == [
        {
            "id": 12345,
            "name": "Little Snoring",
            "region": "Norfolk",
            "country": "United Kingdom",
            "lat": 52.861,
            "lon": 0.904,
        }
    ]
    assert seen["user_agent"] == "weather-intel-tests"
    assert seen["params"]["format"] == "json"


def test_nominatim_failure_is_upstream_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

    with pytest.raises(UpstreamError):
        asyncio.run(NominatimSearchProvider(client=client).search("x"))
