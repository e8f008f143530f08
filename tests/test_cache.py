"""
Tests for the in-memory TTL cache.
"""

import threading

from weather_intel.protocols import CacheStore
from weather_intel.repositories import InMemoryCacheRepository


def test_satisfies_protocol(cache):
    """The in-memory repository satisfies CacheStore structurally."""
    assert isinstance(cache, CacheStore)


def test_set_then_get_returns_value(cache):
    """A fresh entry is returned."""
    cache.set("weather:london", {"temp": 18}, ttl=60)
    assert cache.get("weather:london") == {"temp": 18}


def test_missing_key_returns_none(cache):
    """Unknown keys are absent."""
    assert cache.get("weather:nowhere") is None


def test_entry_expires_after_ttl(cache, clock):
    """An entry is valid at exactly ttl and absent right after."""
    cache.set("k", "v", ttl=60)

    clock.advance(60)
    assert cache.get("k") == "v"

    clock.advance(0.001)
    assert cache.get("k") is None
    # stale entry removed on detection
    assert cache.count_all() == 0


def test_default_ttl_is_used(cache, clock):
    """Entries without an explicit ttl use the 900s default."""
    cache.set("k", "v")
    clock.advance(899)
    assert cache.get("k") == "v"
    clock.advance(2)
    assert cache.get("k") is None


def test_overwrite_replaces_value_and_restarts_ttl(cache, clock):
    """A second set wins and gets a fresh timestamp."""
    cache.set("k", "v1", ttl=60)
    clock.advance(50)
    cache.set("k", "v2", ttl=60)
    clock.advance(50)

    assert cache.get("k") == "v2"


def test_delete_and_clear(cache):
    """Explicit removal never raises."""
    cache.set("a", 1)
    cache.set("b", 2)

    assert cache.delete("a") is True
    assert cache.delete("a") is False
    assert cache.get("a") is None

    assert cache.clear() == 1
    assert cache.count_all() == 0


def test_cleanup_sweeps_only_expired(cache, clock):
    """cleanup removes expired entries and keeps live ones."""
    cache.set("short", 1, ttl=10)
    cache.set("long", 2, ttl=1000)
    clock.advance(11)

    assert cache.cleanup() == 1
    assert cache.get_stats()["keys"] == ["long"]


def test_stats(cache):
    """Stats report size, keys and default TTL."""
    cache.set("a", 1)
    stats = cache.get_stats()

    assert stats["size"] == 1
    assert stats["keys"] == ["a"]
    assert stats["default_ttl"] == 900
    assert cache.health_check() is True


def test_concurrent_writers_do_not_lose_keys():
    """Concurrent sets from many threads all land."""
    cache = InMemoryCacheRepository(default_ttl=60)

    def writer(offset: int) -> None:
        for i in range(200):
            cache.set(f"key-{offset}-{i}", i)

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert cache.count_all() == 8 * 200


def test_zero_ttl_is_honoured(cache, clock):
    """An explicit ttl of 0 does not fall back to the default."""
    cache.set("k", "v", ttl=0)
    assert cache.get("k") == "v"

    clock.advance(1)
    assert cache.get("k") is None


def test_zero_default_ttl_is_honoured(clock):
    cache = InMemoryCacheRepository(default_ttl=0, time_func=clock)
    cache.set("k", "v")

    clock.advance(0.5)
    assert cache.get("k") is None
    assert cache.default_ttl == 0
