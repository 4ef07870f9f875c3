"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    """Request DTO for the plain search endpoint.

    The handler will convert this to internal calls to the service layer.
    Page and limit are clamped by the service, not rejected here.
    """

    q: str = Field("", description="Search text (empty returns every case)")
    page: int | None = Field(None, description="Page number, starting at 1")
    limit: int | None = Field(None, description="Results per page (max 50)")


class FilterRequest(BaseModel):
    """Request DTO for the advanced filter endpoint."""

    keyword: str | None = Field(None, description="Text to find in title, description, citation or court")
    year: str | None = Field(None, description="Four-digit decision year")
    judge: str | None = Field(None, description="Part of a judge's name")
    case_type: str | None = Field(
        None,
        alias="type",
        description="Case type (criminal, civil, constitutional, ...) or free text",
    )
    page: int | None = Field(None, description="Page number, starting at 1")
    limit: int | None = Field(None, description="Results per page (max 50)")

    model_config = {"populate_by_name": True}
