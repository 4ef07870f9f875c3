"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (in-memory -> shared cache, Wikidata -> file, etc.)
- Unit testing with fake implementations
- Clear separation of concerns
"""

from .cache_store import CacheStore
from .record_source import RecordSource

__all__ = [
    "CacheStore",
    "RecordSource",
]
