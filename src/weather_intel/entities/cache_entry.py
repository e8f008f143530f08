"""Cache entry domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntryEntity:
    """A value held by the TTL cache.

    Attributes:
        value: The cached payload
        stored_at: Unix timestamp when the entry was written
        ttl: Time-to-live in seconds
    """

    value: Any
    stored_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        """Check whether the entry is stale at ``now``.

        An entry is still valid at exactly ``stored_at + ttl``.
        """
        return now - self.stored_at > self.ttl
