"""Location search with a best-effort secondary provider.

The primary provider's results always come first. When it returns fewer
than ``fallback_threshold`` matches the secondary geocoder is queried and
its results are merged in, skipping any whose coordinates (rounded to two
decimals) are already present. A failing secondary provider is logged and
ignored; a failing primary provider propagates.
"""

import logging
from typing import Any

from weather_intel.config import settings
from weather_intel.dto import LocationSuggestion
from weather_intel.exceptions import UpstreamError
from weather_intel.protocols import CacheStore, LocationSearchProvider, WeatherProvider

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
FALLBACK_THRESHOLD = 3
MAX_RESULTS = 10


def _coordinate_key(item: LocationSuggestion) -> str:
    return f"{item.lat:.2f},{item.lon:.2f}"


class SearchService:
    """Location autocomplete backed by a primary and an optional secondary provider."""

    def __init__(
        self,
        primary: WeatherProvider,
        cache: CacheStore,
        secondary: LocationSearchProvider | None = None,
        ttl: int | None = None,
        max_results: int = MAX_RESULTS,
        fallback_threshold: int = FALLBACK_THRESHOLD,
    ) -> None:
        self._primary = primary
        self._secondary = secondary
        self._cache = cache
        self._ttl = settings.search_cache_ttl if ttl is None else ttl
        self._max_results = max_results
        self._fallback_threshold = fallback_threshold

    @classmethod
    def create(
        cls,
        primary: WeatherProvider,
        cache: CacheStore,
        secondary: LocationSearchProvider | None = None,
    ) -> "SearchService":
        return cls(primary=primary, cache=cache, secondary=secondary)

    async def search(self, query: str) -> list[LocationSuggestion]:
        """Return up to ``max_results`` location suggestions.

        Args:
            query: Free-text location query

        Returns:
            Merged, de-duplicated suggestions (empty for queries under 2 characters)

        Raises:
            ConfigurationError: If the primary provider credential is missing
            UpstreamError: If the primary provider fails
        """
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        cache_key = f"search:{query.lower()}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        results = self._parse(await self._primary.search(query), self._primary.name)

        if len(results) < self._fallback_threshold and self._secondary is not None:
            results = self._merge(results, await self._secondary_results(query))

        results = results[: self._max_results]
        self._cache.set(cache_key, results, self._ttl)
        return results

    async def _secondary_results(self, query: str) -> list[LocationSuggestion]:
        try:
            raw = await self._secondary.search(query)
        except UpstreamError as e:
            logger.warning("Secondary search via %s failed: %s", self._secondary.name, e)
            return []
        except Exception:
            logger.exception("Unexpected error from secondary search via %s", self._secondary.name)
            return []
        if not isinstance(raw, list):
            logger.warning("Secondary search via %s returned %s", self._secondary.name, type(raw).__name__)
            return []
        return self._parse(raw, self._secondary.name)

    @staticmethod
    def _parse(raw: list[dict[str, Any]], source: str) -> list[LocationSuggestion]:
        parsed = []
        for item in raw:
            try:
                parsed.append(LocationSuggestion.model_validate(item))
            except ValueError:
                logger.debug("Skipping malformed %s result: %s", source, item)
        return parsed

    @staticmethod
    def _merge(
        primary: list[LocationSuggestion],
        secondary: list[LocationSuggestion],
    ) -> list[LocationSuggestion]:
        merged = list(primary)
        seen = {_coordinate_key(item) for item in primary}
        for item in secondary:
            key = _coordinate_key(item)
            if key not in seen:
                merged.append(item)
                seen.add(key)
        return merged

    async def close(self) -> None:
        if self._secondary is not None:
            await self._secondary.close()
