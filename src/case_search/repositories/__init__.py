"""Repository layer for data access.

This layer abstracts external dependencies (the Wikidata endpoint, cache
storage) behind protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
"""

from case_search.protocols import CacheStore, RecordSource

from .memory_cache_repository import InMemoryCacheRepository
from .wikidata_record_source import WikidataRecordSource

__all__ = [
    "CacheStore",
    "RecordSource",
    "InMemoryCacheRepository",
    "WikidataRecordSource",
]
