"""Normalized location query entity."""

from dataclasses import dataclass
from enum import Enum


class QueryKind(str, Enum):
    COORDINATES = "coordinates"
    CITY = "city"


@dataclass(frozen=True)
class NormalizedQuery:
    """Canonical form of a user location query.

    Attributes:
        kind: Whether the query names coordinates or a place
        value: Upstream query parameter ("lat,lon" or sanitized city name)
    """

    kind: QueryKind
    value: str

    @property
    def cache_key(self) -> str:
        return f"weather:{self.value.lower()}"
