"""Coordinate validation and query normalization.

Normalized queries double as cache keys, so nearby globe clicks that round
to the same coordinate share one cache entry. The precision is configurable
via ``COORDINATE_PRECISION`` (1 decimal ~ 11 km buckets, 3 decimals ~ 111 m).
"""

import math
import re
from numbers import Real

from weather_intel.config import settings
from weather_intel.entities import NormalizedQuery, QueryKind
from weather_intel.exceptions import ValidationError

EARTH_RADIUS_KM = 6371.0
MAX_CITY_NAME_LENGTH = 100

_DISALLOWED_CITY_CHARS = re.compile(r"[^A-Za-z0-9 ,._-]")
_COORDINATE_PAIR = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)\s*,\s*([+-]?\d+(?:\.\d+)?)\s*$")


def validate_coordinates(lat: float, lon: float) -> bool:
    """Check that a latitude/longitude pair is usable.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees

    Returns:
        True iff both are finite numbers within [-90, 90] and [-180, 180]
    """
    for value in (lat, lon):
        if isinstance(value, bool) or not isinstance(value, Real):
            return False
        if not math.isfinite(value):
            return False
    return -90 <= lat <= 90 and -180 <= lon <= 180


def normalize_coordinates(lat: float, lon: float, precision: int | None = None) -> str:
    """Round a validated coordinate pair into a canonical ``"lat,lon"`` string.

    Call only after ``validate_coordinates`` returned True. Re-normalizing the
    output is a no-op.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees
        precision: Decimal places to keep. Defaults to settings.

    Returns:
        The canonical coordinate string, e.g. ``"51.507,-0.128"``
    """
    places = settings.coordinate_precision if precision is None else precision
    # + 0.0 turns -0.0 into 0.0 so both sides of the meridian share a key
    norm_lat = round(float(lat), places) + 0.0
    norm_lon = round(float(lon), places) + 0.0
    return f"{norm_lat:.{places}f},{norm_lon:.{places}f}"


def sanitize_city_name(text: str) -> str:
    """Make a free-text location safe for a URL query parameter.

    Trims whitespace, strips characters outside ``[A-Za-z0-9 ,._-]`` and
    truncates to 100 characters.
    """
    return _DISALLOWED_CITY_CHARS.sub("", text.strip())[:MAX_CITY_NAME_LENGTH]


def normalize_query(text: str, precision: int | None = None) -> NormalizedQuery:
    """Classify a raw location query and put it in canonical form.

    ``"lat,lon"`` strings become coordinate queries; anything else is
    treated as a city name.

    Raises:
        ValidationError: If the query is empty after sanitizing, or looks
            like coordinates but is out of range
    """
    match = _COORDINATE_PAIR.match(text or "")
    if match:
        lat, lon = float(match.group(1)), float(match.group(2))
        if not validate_coordinates(lat, lon):
            raise ValidationError("Invalid coordinates provided")
        return NormalizedQuery(QueryKind.COORDINATES, normalize_coordinates(lat, lon, precision))

    city = sanitize_city_name(text or "")
    if not city.strip():
        raise ValidationError("Missing search parameters (city or lat/lon required)")
    return NormalizedQuery(QueryKind.CITY, city)


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres (haversine formula)."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def timezone_offset(lon: float) -> int:
    """Rough UTC offset in hours: 15 degrees of longitude per hour."""
    return round(lon / 15)
