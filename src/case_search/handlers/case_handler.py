"""HTTP handlers for case search operations.

Handlers convert between DTOs (API contracts) and service calls.
Domain errors (CaseSearchError) propagate to the exception handlers
registered on the app; anything unexpected becomes a 500.
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import HTTPException, status

from case_search.config import settings
from case_search.dto import (
    AppliedFilters,
    CaseItem,
    CorpusRefreshResponse,
    FilterRequest,
    FilterResponse,
    HealthCheckResponse,
    PaginationInfo,
    SearchRequest,
    SearchResponse,
)
from case_search.entities import CaseRecord, FilterCriteria, PageResult
from case_search.exceptions import CaseSearchError
from case_search.services import QueryService

logger = logging.getLogger(__name__)


def to_case_item(record: CaseRecord) -> CaseItem:
    """Convert a domain record to its API representation."""
    return CaseItem(
        case_id=record.case_id,
        title=record.title,
        description=record.description,
        date=record.date,
        citation=record.citation,
        court=record.court,
        majority_opinion=record.majority_opinion,
        source_label=record.source_label,
        judges=record.judges,
        article_url=record.article_url,
    )


def to_pagination(result: PageResult) -> PaginationInfo:
    """Extract pagination metadata from a page result."""
    return PaginationInfo(
        current_page=result.current_page,
        total_pages=result.total_pages,
        total_items=result.total_items,
        items_per_page=result.items_per_page,
        has_next_page=result.has_next_page,
        has_previous_page=result.has_previous_page,
    )


class CaseHandler:
    """HTTP handlers for case search operations.

    This handler delegates business logic to QueryService
    and handles HTTP-specific concerns like:
    - Converting entities to DTOs
    - Echoing applied filters
    - Wrapping unexpected failures

    Example:
        ```python
        handler = CaseHandler(query_service=service)

        @app.get("/search", response_model=SearchResponse)
        async def search(q: str = ""):
            return await handler.search(SearchRequest(q=q))
        ```
    """

    def __init__(self, query_service: QueryService) -> None:
        """Initialize the case handler.

        Args:
            query_service: The query service for business logic (required).
        """
        self._service = query_service
        self._started_at = time.time()

    async def search(self, request: SearchRequest) -> SearchResponse:
        """Handle GET /search requests.

        Args:
            request: The search request DTO

        Returns:
            SearchResponse with one page of matching cases

        Raises:
            CaseSearchError: Propagated to the registered exception handlers
            HTTPException: If an unexpected error occurs
        """
        try:
            result = await self._service.search(
                query=request.q,
                page=request.page,
                limit=request.limit,
            )
        except CaseSearchError:
            raise
        except Exception as e:
            logger.exception("Search failed")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to search cases: {e}",
            ) from e

        return SearchResponse(
            results=[to_case_item(record) for record in result.items],
            pagination=to_pagination(result),
        )

    async def filter(self, request: FilterRequest) -> FilterResponse:
        """Handle GET /filter requests.

        Args:
            request: The filter request DTO

        Returns:
            FilterResponse with one page of matching cases and the applied filters

        Raises:
            CaseSearchError: Propagated to the registered exception handlers
            HTTPException: If an unexpected error occurs
        """
        criteria = FilterCriteria(
            keyword=request.keyword,
            year=request.year,
            judge=request.judge,
            case_type=request.case_type,
        )

        try:
            result = await self._service.filter(
                criteria,
                page=request.page,
                limit=request.limit,
            )
        except CaseSearchError:
            raise
        except Exception as e:
            logger.exception("Filter failed")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to filter cases: {e}",
            ) from e

        return FilterResponse(
            results=[to_case_item(record) for record in result.items],
            filters=AppliedFilters(
                keyword=criteria.keyword,
                year=criteria.year,
                judge=criteria.judge,
                case_type=criteria.case_type,
            ),
            count=result.total_items,
            pagination=to_pagination(result),
        )

    async def refresh_corpus(self) -> CorpusRefreshResponse:
        """Handle POST /corpus/refresh requests.

        Returns:
            CorpusRefreshResponse with the new corpus size
        """
        count = await self._service.refresh_corpus()
        return CorpusRefreshResponse(
            record_count=count,
            message=f"Corpus refreshed with {count} cases",
        )

    async def get_stats(self) -> dict:
        """Handle GET /cache/stats requests.

        Returns:
            Dict with cache statistics and query metrics
        """
        return self._service.get_stats()

    async def clear_cache(self) -> dict:
        """Handle DELETE /cache requests.

        Returns:
            Dict with clear operation result
        """
        self._service.clear()
        return {
            "success": True,
            "message": "Cache cleared successfully",
        }

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /api/health requests.

        Returns:
            HealthCheckResponse with uptime and environment
        """
        return HealthCheckResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc).isoformat(),
            uptime=time.time() - self._started_at,
            environment=settings.environment,
        )
