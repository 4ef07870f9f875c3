"""Case Search - cached search and filtering over Supreme Court of Ghana cases.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (CacheStore, RecordSource)
    - repositories: Data access implementations (in-memory cache, Wikidata)
    - services: Business logic (matching, pagination, caching, sweeping)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from case_search import InMemoryCacheRepository, QueryService, WikidataRecordSource

    cache = InMemoryCacheRepository.create()
    service = QueryService.create(
        cache=cache,
        record_source=WikidataRecordSource.create(cache=cache),
    )
    page = await service.search("constitution")
    ```

For HTTP API:
    ```python
    from case_search.api.app import app
    ```
"""

from case_search.config import settings
from case_search.dto import FilterRequest, SearchRequest
from case_search.entities import CaseRecord, FilterCriteria, PageRequest, PageResult
from case_search.exceptions import CaseSearchError, UpstreamError, UpstreamErrorKind, ValidationError
from case_search.handlers import CaseHandler
from case_search.protocols import CacheStore, RecordSource
from case_search.repositories import InMemoryCacheRepository, WikidataRecordSource
from case_search.services import CacheSweeper, QueryService

__all__ = [
    # Configuration
    "settings",
    # Protocols (interfaces)
    "CacheStore",
    "RecordSource",
    # Services (business logic)
    "QueryService",
    "CacheSweeper",
    # Handlers (HTTP)
    "CaseHandler",
    # Repositories (data access)
    "InMemoryCacheRepository",
    "WikidataRecordSource",
    # Entities (domain models)
    "CaseRecord",
    "FilterCriteria",
    "PageRequest",
    "PageResult",
    # Errors
    "CaseSearchError",
    "ValidationError",
    "UpstreamError",
    "UpstreamErrorKind",
    # DTOs (API contracts)
    "SearchRequest",
    "FilterRequest",
]
