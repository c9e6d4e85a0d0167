"""
API Response Caching Layer.

In-memory cache for Brawl Stars API responses. Every entry carries its own
expiration deadline, normally taken from the server's Cache-Control header.
Expired entries are dropped lazily on read and by an occasional sweep.
"""

import logging
import threading
import time
from collections.abc import Callable
from enum import Enum
from typing import Any

from ..config import CacheOptions

logger = logging.getLogger(__name__)


class CacheLookup(Enum):
    """Result of looking a key up in the cache."""

    ABSENT = "absent"
    EXPIRED = "expired"
    PRESENT = "present"


class CacheEntry:
    """Represents a cached item with its absolute deadline."""

    __slots__ = ("key", "value", "expires_at")

    def __init__(self, key: str, value: Any, expires_at: float):
        self.key = key
        self.value = value
        self.expires_at = expires_at

    def is_expired(self, now: float) -> bool:
        """Check if the entry is stale at time `now`."""
        return now >= self.expires_at

    def expires_in(self, now: float) -> float:
        """Get seconds until expiration (negative if expired)."""
        return self.expires_at - now


class TTLCache:
    """
    Key/value store with a per-entry time-to-live.

    Features:
    - Independent TTL per entry, optionally capped by max_ttl
    - Lazy expiry on read, plus a sweep every check_period seconds
    - A single lock guards the store

    This is not an LRU: there is no capacity bound besides expiry.
    """

    def __init__(
        self,
        options: CacheOptions | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            options: Sweep interval and TTL bounds (defaults if None)
            clock: Monotonic time source, in seconds
        """
        self.options = options or CacheOptions()
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def lookup(self, key: str) -> tuple[CacheLookup, Any]:
        """
        Look up a key, distinguishing absent, expired and present entries.

        An expired entry is removed as a side effect. The value is only
        meaningful when the state is PRESENT.
        """
        with self._lock:
            now = self._clock()
            self._maybe_sweep(now)

            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return CacheLookup.ABSENT, None

            if entry.is_expired(now):
                del self._store[key]
                self._misses += 1
                return CacheLookup.EXPIRED, None

            self._hits += 1
            return CacheLookup.PRESENT, entry.value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get item from cache.

        Args:
            key: Cache key
            default: Returned when the key is absent or expired

        Returns:
            The stored value, even if it is falsy, or `default`
        """
        state, value = self.lookup(key)
        if state is CacheLookup.PRESENT:
            logger.debug(f"Cache hit: {key}")
            return value

        logger.debug(f"Cache {state.value}: {key}")
        return default

    def has(self, key: str) -> bool:
        """Check whether a live entry exists for key."""
        state, _ = self.lookup(key)
        return state is CacheLookup.PRESENT

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """
        Store item in cache, replacing any existing entry.

        Args:
            key: Cache key
            value: Data to cache
            ttl: Lifetime in seconds (falls back to options.default_ttl)
        """
        effective_ttl = ttl if ttl is not None else self.options.default_ttl
        if self.options.max_ttl is not None:
            effective_ttl = min(effective_ttl, self.options.max_ttl)

        if effective_ttl <= 0:
            logger.debug(f"Not caching {key}: non-positive ttl {effective_ttl}")
            return

        with self._lock:
            now = self._clock()
            self._maybe_sweep(now)
            self._store[key] = CacheEntry(key, value, now + effective_ttl)

        logger.debug(f"Cached: {key} (ttl: {effective_ttl}s)")

    def delete(self, key: str) -> bool:
        """
        Invalidate (delete) a cache entry.

        Returns:
            True if an entry was removed, False if not found
        """
        with self._lock:
            removed = self._store.pop(key, None) is not None

        if removed:
            logger.debug(f"Cache invalidated: {key}")
        return removed

    def clear(self) -> int:
        """
        Clear all cache entries.

        Returns:
            Number of entries cleared
        """
        with self._lock:
            count = len(self._store)
            self._store.clear()

        logger.debug(f"Cleared {count} cache entries")
        return count

    def prune_expired(self) -> int:
        """
        Remove every expired entry.

        Returns:
            Number of entries removed
        """
        with self._lock:
            return self._sweep(self._clock())

    def stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            now = self._clock()
            expired = sum(1 for e in self._store.values() if e.is_expired(now))
            total = len(self._store)
            return {
                "total_entries": total,
                "expired_entries": expired,
                "valid_entries": total - expired,
                "hits": self._hits,
                "misses": self._misses,
            }

    # Lock must be held by the caller for both helpers below.

    def _maybe_sweep(self, now: float) -> None:
        period = self.options.check_period
        if period > 0 and now - self._last_sweep >= period:
            self._sweep(now)

    def _sweep(self, now: float) -> int:
        stale = [k for k, e in self._store.items() if e.is_expired(now)]
        for key in stale:
            del self._store[key]
        self._last_sweep = now

        if stale:
            logger.debug(f"Swept {len(stale)} expired cache entries")
        return len(stale)
