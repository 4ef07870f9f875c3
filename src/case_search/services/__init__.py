"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from case_search.services import QueryService

    service = QueryService.create(cache=cache, record_source=source)
    page = await service.search("constitution")
    ```
"""

from . import filter_service
from .cache_sweeper import CacheSweeper
from .query_service import QueryService, build_cache_key

__all__ = [
    "CacheSweeper",
    "QueryService",
    "build_cache_key",
    "filter_service",
]
