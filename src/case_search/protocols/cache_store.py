"""Cache storage protocol.

Defines the interface for the key/value result cache shared by whole-corpus
caching and paginated-response caching.

Implementations must:
- treat an entry as absent once its TTL has elapsed (lazy expiry)
- hold at most a fixed number of entries, evicting the oldest insertion
- never raise from a lookup; a miss is not a failure
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for TTL-bounded key/value caches.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.

    Example:
        ```python
        from case_search.protocols import CacheStore

        cache: CacheStore = InMemoryCacheRepository.create()
        ```
    """

    def get(self, key: str) -> Any | None:
        """Return the live value for key, or None on a miss.

        Args:
            key: The cache key

        Returns:
            The cached value, or None if absent or expired
        """
        ...

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store value under key, replacing any existing entry.

        Args:
            key: The cache key
            value: The value to cache (must not be mutated afterwards)
            ttl: Time-to-live in seconds. Defaults to the store's default TTL.
        """
        ...

    def has(self, key: str) -> bool:
        """Check whether a live entry exists for key.

        Args:
            key: The cache key

        Returns:
            True if present and not expired
        """
        ...

    def delete(self, key: str) -> None:
        """Remove the entry for key, if any."""
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...

    def sweep_expired(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries removed
        """
        ...

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with stats (implementation-specific)
        """
        ...
