"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import FilterRequest, SearchRequest
from .responses import (
    AppliedFilters,
    CaseItem,
    CorpusRefreshResponse,
    ErrorResponse,
    FilterResponse,
    HealthCheckResponse,
    PaginationInfo,
    SearchResponse,
)

__all__ = [
    "SearchRequest",
    "FilterRequest",
    "AppliedFilters",
    "CaseItem",
    "CorpusRefreshResponse",
    "ErrorResponse",
    "FilterResponse",
    "HealthCheckResponse",
    "PaginationInfo",
    "SearchResponse",
]
