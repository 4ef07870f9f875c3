"""Cache entry domain entity."""

from dataclasses import dataclass
from typing import Generic, TypeVar

V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntryEntity(Generic[V]):
    """A cached value with its expiry bookkeeping.

    Timestamps are readings of the owning cache's clock (seconds).

    Attributes:
        value: The cached value (never mutated after insertion)
        created_at: When the entry was inserted
        expires_at: created_at + ttl
    """

    value: V
    created_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        """An entry is logically absent once now is past expires_at."""
        return now > self.expires_at
