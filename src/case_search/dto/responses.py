"""Response DTOs for API endpoints.

Field names are serialized in camelCase; they are part of the public
contract consumed by the web client.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that serializes field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CaseItem(CamelModel):
    """Single case in a results array."""

    case_id: str = Field(..., description="Stable case identifier")
    title: str
    description: str
    date: str = Field(..., description="ISO date or 'Date not recorded'")
    citation: str
    court: str
    majority_opinion: str
    source_label: str
    judges: str = Field(..., description="Comma-joined judge names or 'Judges unavailable'")
    article_url: str


class PaginationInfo(CamelModel):
    """Pagination metadata shared by every paged response."""

    current_page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0, description="0 when nothing matched")
    total_items: int = Field(..., ge=0)
    items_per_page: int = Field(..., ge=1)
    has_next_page: bool
    has_previous_page: bool


class SearchResponse(CamelModel):
    """Response DTO for the plain search endpoint."""

    success: bool = True
    results: list[CaseItem] = Field(default_factory=list)
    pagination: PaginationInfo


class AppliedFilters(CamelModel):
    """Echo of the filters applied to a filter request."""

    keyword: str | None = None
    year: str | None = None
    judge: str | None = None
    case_type: str | None = None


class FilterResponse(CamelModel):
    """Response DTO for the advanced filter endpoint."""

    success: bool = True
    results: list[CaseItem] = Field(default_factory=list)
    filters: AppliedFilters
    count: int = Field(..., ge=0, description="Total matches across all pages")
    pagination: PaginationInfo


class CorpusRefreshResponse(CamelModel):
    """Response DTO for a forced corpus refresh."""

    success: bool = True
    record_count: int = Field(..., ge=0)
    message: str


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    success: bool = False
    error: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Machine-readable error code")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy'")
    timestamp: str = Field(..., description="Current server time (ISO 8601)")
    uptime: float = Field(..., description="Seconds since the service started", ge=0.0)
    environment: str
