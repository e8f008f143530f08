"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class WeatherRequest(BaseModel):
    """Query parameters for the weather endpoint.

    Coordinates are kept as raw strings so the handler can report malformed
    values as a 400 rather than a framework-level 422.
    """

    city: str | None = Field(None, description="City or place name")
    lat: str | None = Field(None, description="Latitude in degrees (-90 to 90)")
    lon: str | None = Field(None, description="Longitude in degrees (-180 to 180)")


class SearchRequest(BaseModel):
    """Query parameters for the location search endpoint."""

    q: str = Field("", description="Free-text location query (at least 2 characters)")
