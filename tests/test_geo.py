"""
Tests for coordinate validation and query normalization.
"""

import math

import pytest

from weather_intel.entities import QueryKind
from weather_intel.exceptions import ValidationError
from weather_intel.geo import (
    calculate_distance,
    normalize_coordinates,
    normalize_query,
    sanitize_city_name,
    timezone_offset,
    validate_coordinates,
)


@pytest.mark.parametrize(
    "lat, lon, expected",
    [
        (90, 180, True),
        (-90, -180, True),
        (0, 0, True),
        (90.0001, 0, False),
        (0, 180.0001, False),
        (-90.0001, 0, False),
        (math.nan, 0, False),
        (0, math.inf, False),
        (True, 0, False),
        ("51.5", "0.1", False),
        (None, 0, False),
    ],
)
def test_validate_coordinates(lat, lon, expected):
    assert validate_coordinates(lat, lon) is expected


def test_normalize_coordinates_three_decimals():
    assert normalize_coordinates(51.50735, -0.12776, precision=3) == "51.507,-0.128"


def test_normalize_coordinates_one_decimal():
    assert normalize_coordinates(51.50735, -0.12776, precision=1) == "51.5,-0.1"


def test_normalize_coordinates_negative_zero():
    """Values rounding to zero from below share the zero key."""
    assert normalize_coordinates(-0.0001, -0.0004, precision=3) == "0.000,0.000"


@pytest.mark.parametrize("lat, lon", [(51.50735, -0.12776), (-33.86882, 151.20929), (89.99999, -179.9999)])
def test_normalize_coordinates_idempotent(lat, lon):
    """Re-normalizing a normalized coordinate is a no-op."""
    once = normalize_coordinates(lat, lon, precision=3)
    again_lat, again_lon = (float(part) for part in once.split(","))
    assert normalize_coordinates(again_lat, again_lon, precision=3) == once


def test_sanitize_city_name_strips_and_trims():
    assert sanitize_city_name("  São Paulo <script>  ") == "So Paulo script"
    assert sanitize_city_name("St. John's, NL") == "St. Johns, NL"
    assert sanitize_city_name("new_york-city") == "new_york-city"


def test_sanitize_city_name_truncates():
    assert len(sanitize_city_name("a" * 250)) == 100


def test_normalize_query_coordinates():
    query = normalize_query(" 51.50735 , -0.12776 ", precision=3)
    assert query.kind is QueryKind.COORDINATES
    assert query.value == "51.507,-0.128"
    assert query.cache_key == "weather:51.507,-0.128"


def test_normalize_query_city_is_case_insensitive_key():
    assert normalize_query("London").cache_key == normalize_query("  LONDON ").cache_key


def test_normalize_query_out_of_range_coordinates():
    with pytest.raises(ValidationError):
        normalize_query("91,0")


def test_normalize_query_empty():
    with pytest.raises(ValidationError):
        normalize_query("  <>  ")


def test_calculate_distance_london_paris():
    distance = calculate_distance(51.5074, -0.1278, 48.8566, 2.3522)
    assert 340 < distance < 345


def test_timezone_offset():
    assert timezone_offset(0) == 0
    assert timezone_offset(139.69) == 9
    assert timezone_offset(-74.0) == -5
