"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from case_search.config import settings
from case_search.handlers import CaseHandler
from case_search.protocols import CacheStore, RecordSource
from case_search.repositories import InMemoryCacheRepository, WikidataRecordSource
from case_search.services import CacheSweeper, QueryService

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> CaseHandler:
    """Dependency injection for CaseHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "case_handler", None)
    if handler is None:
        raise RuntimeError("CaseHandler not initialized. Check lifespan setup.")
    return handler


def create_lifespan(
    record_source: RecordSource | None = None,
    cache: CacheStore | None = None,
):
    """Build the lifespan context manager for the app.

    Args:
        record_source: Corpus provider. If None, a WikidataRecordSource is
            created (and closed on shutdown).
        cache: Shared result cache. If None, an InMemoryCacheRepository is created.

    Returns:
        Lifespan context manager for FastAPI(lifespan=...)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize all layers and store them in app.state.

        1. Cache (shared by corpus and page caching)
        2. Record source (data access)
        3. Service (business logic) - app.state.query_service
        4. Handler (HTTP endpoints) - app.state.case_handler
        5. Sweeper (periodic expiry) - app.state.cache_sweeper
        """
        logging.basicConfig(
            level=settings.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        result_cache = cache if cache is not None else InMemoryCacheRepository.create()
        owned_source = None
        source = record_source
        if source is None:
            owned_source = WikidataRecordSource.create(cache=result_cache)
            source = owned_source

        query_service = QueryService.create(cache=result_cache, record_source=source)
        case_handler = CaseHandler(query_service=query_service)
        cache_sweeper = CacheSweeper(cache=result_cache)
        cache_sweeper.start()

        app.state.cache = result_cache
        app.state.record_source = source
        app.state.query_service = query_service
        app.state.case_handler = case_handler
        app.state.cache_sweeper = cache_sweeper

        logger.info("Case search service initialized")
        logger.info("Cache capacity: %d entries", settings.cache_max_entries)
        logger.info(
            "Corpus TTL: %ss, query TTL: %ss, sweep every %ss",
            settings.corpus_cache_ttl,
            settings.query_cache_ttl,
            cache_sweeper.interval,
        )

        yield

        await cache_sweeper.stop()
        if owned_source is not None:
            await owned_source.close()

        del app.state.cache_sweeper
        del app.state.case_handler
        del app.state.query_service
        del app.state.record_source
        del app.state.cache
        logger.info("Case search service shut down")

    return lifespan


# Type alias for cleaner dependency injection
HandlerDep = Annotated[CaseHandler, Depends(get_handler)]
