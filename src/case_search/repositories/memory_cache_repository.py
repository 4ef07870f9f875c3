"""In-memory implementation of CacheStore.

A process-local key/value store with per-entry TTL and a hard capacity
bound. It is the default implementation and satisfies the CacheStore
protocol.
"""

import logging
import threading
import time
from collections.abc import Callable
from typing import Any

from case_search.config import settings
from case_search.entities import CacheEntryEntity

logger = logging.getLogger(__name__)


class InMemoryCacheRepository:
    """Dict-backed cache with lazy expiry and oldest-insertion eviction.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Entries live in an insertion-ordered dict. Overwriting a key moves it to
    the end, so the first key is always the oldest insertion and eviction is
    O(1). All operations hold a re-entrant lock for their whole (short)
    duration; nothing is awaited while it is held.
    """

    def __init__(
        self,
        max_entries: int | None = None,
        default_ttl: float | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the in-memory cache.

        Args:
            max_entries: Maximum number of entries held. Defaults to settings.
            default_ttl: TTL in seconds used when set() gets none. Defaults to settings.
            clock: Monotonic time source in seconds. Defaults to time.monotonic.
        """
        self._max_entries = settings.cache_max_entries if max_entries is None else max_entries
        self._default_ttl = settings.cache_default_ttl if default_ttl is None else default_ttl
        self._clock = clock or time.monotonic
        self._entries: dict[str, CacheEntryEntity[Any]] = {}
        self._lock = threading.RLock()

        if self._max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        if self._default_ttl <= 0:
            raise ValueError("default_ttl must be greater than 0")

    @classmethod
    def create(
        cls,
        max_entries: int | None = None,
        default_ttl: float | None = None,
    ) -> "InMemoryCacheRepository":
        """Factory method to create InMemoryCacheRepository with defaults.

        Args:
            max_entries: Capacity bound. If None, uses settings.
            default_ttl: Default TTL in seconds. If None, uses settings.

        Returns:
            Configured InMemoryCacheRepository
        """
        return cls(max_entries=max_entries, default_ttl=default_ttl)

    def get(self, key: str) -> Any | None:
        """Return the live value for key, or None on a miss.

        Expired entries are removed on the way out.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if entry.is_expired(self._clock()):
                del self._entries[key]
                return None

            return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store value under key.

        A TTL of zero or less means the value is already expired: any
        existing entry for the key is dropped and nothing is stored.
        Evicts the oldest insertion only when a new key would exceed capacity.
        """
        ttl = self._default_ttl if ttl is None else ttl

        with self._lock:
            # Re-inserting moves the key to the end of the insertion order
            existing = self._entries.pop(key, None)

            if ttl <= 0:
                return

            if existing is None and len(self._entries) >= self._max_entries:
                self._evict_oldest()

            now = self._clock()
            self._entries[key] = CacheEntryEntity(
                value=value,
                created_at=now,
                expires_at=now + ttl,
            )

    def has(self, key: str) -> bool:
        """Check whether a live entry exists for key."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False

            if entry.is_expired(self._clock()):
                del self._entries[key]
                return False

            return True

    def delete(self, key: str) -> None:
        """Remove the entry for key, if any."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()

    def sweep_expired(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with size, capacity and per-entry age / time to expiry
        """
        with self._lock:
            now = self._clock()
            entries = [
                {
                    "key": key,
                    "age": now - entry.created_at,
                    "expires_in": entry.expires_at - now,
                }
                for key, entry in self._entries.items()
            ]
            return {
                "size": len(self._entries),
                "max_size": self._max_entries,
                "default_ttl": self._default_ttl,
                "entries": entries,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _evict_oldest(self) -> None:
        """Evict the entry with the oldest insertion timestamp."""
        oldest_key = next(iter(self._entries), None)
        if oldest_key is not None:
            del self._entries[oldest_key]
            logger.debug("Evicted oldest cache entry: %s", oldest_key)

    @property
    def max_entries(self) -> int:
        """Get the capacity bound."""
        return self._max_entries

    @property
    def default_ttl(self) -> float:
        """Get the default TTL in seconds."""
        return self._default_ttl
