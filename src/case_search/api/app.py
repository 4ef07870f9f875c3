from typing import Annotated, Any

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from case_search.api.dependencies import HandlerDep, create_lifespan
from case_search.api.exception_handlers import setup_exception_handlers
from case_search.config import settings
from case_search.dto import (
    CorpusRefreshResponse,
    ErrorResponse,
    FilterRequest,
    FilterResponse,
    HealthCheckResponse,
    SearchRequest,
    SearchResponse,
)
from case_search.protocols import CacheStore, RecordSource

API_NAME = "Supreme Court of Ghana Cases API"
API_VERSION = "1.0.0"

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid filter input"},
    502: {"model": ErrorResponse, "description": "Upstream returned an error or a malformed payload"},
    503: {"model": ErrorResponse, "description": "Upstream unreachable"},
    504: {"model": ErrorResponse, "description": "Upstream timed out"},
}


def create_app(
    record_source: RecordSource | None = None,
    cache: CacheStore | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        record_source: Corpus provider override (tests, offline runs).
        cache: Result cache override.

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title=API_NAME,
        description="Search and filter Supreme Court of Ghana cases sourced from Wikidata",
        version=API_VERSION,
        lifespan=create_lifespan(record_source=record_source, cache=cache),
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "message": API_NAME,
            "version": API_VERSION,
            "description": "API for searching Supreme Court of Ghana cases from Wikidata",
            "endpoints": {
                "health": "GET /api/health",
                "search_all_cases": "GET /search",
                "search_with_query": "GET /search?q={query}&page={page}&limit={limit}",
                "filter_cases": "GET /filter?keyword={keyword}&year={year}&judge={judge}&type={type}",
                "cache_stats": "GET /cache/stats",
                "clear_cache": "DELETE /cache",
                "refresh_corpus": "POST /corpus/refresh",
                "docs": "/docs",
            },
            "examples": [
                "/search?q=human+rights",
                "/filter?keyword=rights&year=2020",
                "/filter?judge=Smith&year=2019",
                "/filter?type=criminal&year=2021",
            ],
        }

    @app.get("/api/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.get("/search", response_model=SearchResponse, responses=ERROR_RESPONSES)
    async def search_cases(
        handler: HandlerDep,
        q: Annotated[str, Query(description="Search text")] = "",
        page: Annotated[int | None, Query(description="Page number")] = None,
        limit: Annotated[int | None, Query(description="Results per page (max 50)")] = None,
    ) -> SearchResponse:
        """Search cases by keyword across title, description, judges, citation and court."""
        return await handler.search(SearchRequest(q=q, page=page, limit=limit))

    @app.get("/filter", response_model=FilterResponse, responses=ERROR_RESPONSES)
    async def filter_cases(
        handler: HandlerDep,
        keyword: Annotated[str | None, Query()] = None,
        year: Annotated[str | None, Query(description="Four-digit year")] = None,
        judge: Annotated[str | None, Query()] = None,
        case_type: Annotated[str | None, Query(alias="type")] = None,
        page: Annotated[int | None, Query()] = None,
        limit: Annotated[int | None, Query()] = None,
    ) -> FilterResponse:
        """Filter cases by keyword, year, judge and case type."""
        request = FilterRequest(
            keyword=keyword,
            year=year,
            judge=judge,
            case_type=case_type,
            page=page,
            limit=limit,
        )
        return await handler.filter(request)

    @app.get("/cache/stats", response_model=dict[str, Any])
    async def cache_stats(handler: HandlerDep) -> dict[str, Any]:
        """Get cache statistics and query metrics."""
        return await handler.get_stats()

    @app.delete("/cache", response_model=dict[str, Any])
    async def clear_cache(handler: HandlerDep) -> dict[str, Any]:
        """Clear all cached corpus and result entries."""
        return await handler.clear_cache()

    @app.post("/corpus/refresh", response_model=CorpusRefreshResponse, responses=ERROR_RESPONSES)
    async def refresh_corpus(handler: HandlerDep) -> CorpusRefreshResponse:
        """Refetch the corpus from Wikidata, bypassing the cache."""
        return await handler.refresh_corpus()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "case_search.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
