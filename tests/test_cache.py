"""Tests for the in-memory TTL cache."""

import threading

import pytest

from brawlstars.api.cache import CacheEntry, CacheLookup, TTLCache
from brawlstars.config import CacheOptions
from conftest import FakeClock


@pytest.fixture()
def cache(clock) -> TTLCache:
    return TTLCache(CacheOptions(check_period=0), clock=clock)


# ------------------------------------------------------------------ #
# Core get/set behaviour
# ------------------------------------------------------------------ #


class TestGetSet:
    def test_set_and_get(self, cache: TTLCache) -> None:
        cache.set("k", {"name": "Shelly"}, 60)
        assert cache.get("k") == {"name": "Shelly"}

    def test_miss_returns_default(self, cache: TTLCache) -> None:
        assert cache.get("missing") is None
        assert cache.get("missing", "fallback") == "fallback"

    def test_set_overwrites(self, cache: TTLCache) -> None:
        cache.set("k", 1, 60)
        cache.set("k", 2, 60)
        assert cache.get("k") == 2
        assert len(cache) == 1

    @pytest.mark.parametrize("value", [[], {}, 0, False, ""])
    def test_falsy_values_are_hits(self, cache: TTLCache, value) -> None:
        """A cached empty list is present, not a miss."""
        cache.set("k", value, 60)
        state, stored = cache.lookup("k")
        assert state is CacheLookup.PRESENT
        assert stored == value
        assert "k" in cache


# ------------------------------------------------------------------ #
# Expiry
# ------------------------------------------------------------------ #


class TestExpiry:
    def test_visible_until_deadline(self, cache: TTLCache, clock: FakeClock) -> None:
        cache.set("k", "v", 60)
        clock.advance(59.9)
        assert cache.get("k") == "v"

    def test_absent_at_deadline(self, cache: TTLCache, clock: FakeClock) -> None:
        cache.set("k", "v", 60)
        clock.advance(60)
        assert cache.get("k") is None

    def test_lookup_distinguishes_expired_from_absent(
        self, cache: TTLCache, clock: FakeClock
    ) -> None:
        cache.set("k", "v", 10)
        clock.advance(11)
        assert cache.lookup("k") == (CacheLookup.EXPIRED, None)
        # Removed lazily by the first lookup
        assert cache.lookup("k") == (CacheLookup.ABSENT, None)
        assert len(cache) == 0

    def test_set_after_expiry_wins(self, cache: TTLCache, clock: FakeClock) -> None:
        cache.set("k", "old", 10)
        clock.advance(20)
        cache.set("k", "new", 10)
        assert cache.get("k") == "new"

    def test_entries_expire_independently(
        self, cache: TTLCache, clock: FakeClock
    ) -> None:
        cache.set("short", 1, 5)
        cache.set("long", 2, 50)
        clock.advance(10)
        assert cache.get("short") is None
        assert cache.get("long") == 2

    def test_entry_deadline(self) -> None:
        entry = CacheEntry("k", "v", expires_at=100.0)
        assert not entry.is_expired(99.0)
        assert entry.is_expired(100.0)
        assert entry.expires_in(90.0) == 10.0


# ------------------------------------------------------------------ #
# TTL bounds
# ------------------------------------------------------------------ #


class TestTTLBounds:
    @pytest.mark.parametrize("ttl", [0, -5])
    def test_non_positive_ttl_not_stored(self, cache: TTLCache, ttl: int) -> None:
        cache.set("k", "v", ttl)
        assert len(cache) == 0

    def test_max_ttl_caps_lifetime(self, clock: FakeClock) -> None:
        cache = TTLCache(CacheOptions(check_period=0, max_ttl=30), clock=clock)
        cache.set("k", "v", 3600)
        clock.advance(31)
        assert cache.get("k") is None

    def test_default_ttl_used_without_explicit_ttl(self, clock: FakeClock) -> None:
        cache = TTLCache(CacheOptions(check_period=0, default_ttl=15), clock=clock)
        cache.set("k", "v")
        clock.advance(14)
        assert cache.get("k") == "v"
        clock.advance(1)
        assert cache.get("k") is None

    def test_no_default_ttl_means_not_stored(self, cache: TTLCache) -> None:
        cache.set("k", "v")
        assert len(cache) == 0


# ------------------------------------------------------------------ #
# Invalidation and sweeping
# ------------------------------------------------------------------ #


class TestInvalidation:
    def test_delete(self, cache: TTLCache) -> None:
        cache.set("k", "v", 60)
        assert cache.delete("k") is True
        assert cache.delete("k") is False
        assert cache.get("k") is None

    def test_clear(self, cache: TTLCache) -> None:
        cache.set("a", 1, 60)
        cache.set("b", 2, 60)
        assert cache.clear() == 2
        assert len(cache) == 0

    def test_prune_expired(self, cache: TTLCache, clock: FakeClock) -> None:
        cache.set("a", 1, 5)
        cache.set("b", 2, 50)
        clock.advance(10)
        assert cache.prune_expired() == 1
        assert len(cache) == 1

    def test_periodic_sweep_on_access(self, clock: FakeClock) -> None:
        cache = TTLCache(CacheOptions(check_period=30), clock=clock)
        cache.set("stale", 1, 5)
        cache.set("fresh", 2, 500)
        clock.advance(31)
        cache.get("fresh")
        assert len(cache) == 1

    def test_no_sweep_before_period(self, clock: FakeClock) -> None:
        cache = TTLCache(CacheOptions(check_period=30), clock=clock)
        cache.set("stale", 1, 5)
        clock.advance(10)
        cache.get("other")
        assert len(cache) == 1

    def test_stats(self, cache: TTLCache, clock: FakeClock) -> None:
        cache.set("a", 1, 5)
        cache.set("b", 2, 50)
        cache.get("b")
        cache.get("missing")
        clock.advance(10)

        stats = cache.stats()
        assert stats["total_entries"] == 2
        assert stats["expired_entries"] == 1
        assert stats["valid_entries"] == 1
        assert stats["hits"] == 1
        assert stats["misses"] == 1


def test_concurrent_writers_do_not_corrupt_store() -> None:
    cache = TTLCache(CacheOptions(check_period=0))

    def writer(n: int) -> None:
        for i in range(200):
            cache.set(f"k{i % 10}", n, 60)
            cache.get(f"k{i % 10}")

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cache) == 10
    assert all(cache.get(f"k{i}") in range(8) for i in range(10))
