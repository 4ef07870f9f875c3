"""Query service for core business logic.

This service is the single orchestration point for both request paths
(plain keyword search and advanced filtering). It coordinates the result
cache and the record source, and owns pagination.
"""

import dataclasses
import json
import logging
import time
from collections.abc import Callable

from case_search.config import settings
from case_search.entities import MAX_PAGE_SIZE, CaseRecord, FilterCriteria, PageRequest, PageResult
from case_search.exceptions import UpstreamError
from case_search.models import QueryMetrics
from case_search.protocols import CacheStore, RecordSource

from .filter_service import filter_records, validate_year
from .filter_service import search as search_records

logger = logging.getLogger(__name__)

RecordNarrower = Callable[[list[CaseRecord]], list[CaseRecord]]


def build_cache_key(operation: str, params: dict[str, str | None], page_request: PageRequest) -> str:
    """Build the cache fingerprint for one request shape.

    The key is a JSON array, so parameter text containing separators
    cannot make two different requests collide.
    """
    fingerprint = [operation, sorted(params.items()), page_request.page, page_request.limit]
    return json.dumps(fingerprint, separators=(",", ":"))


class QueryService:
    """Core query orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - CacheStore: the result cache
    - RecordSource: where the corpus comes from (Wikidata, a file, a fake)

    Example:
        ```python
        from case_search.services import QueryService

        service = QueryService.create(
            cache=InMemoryCacheRepository.create(),
            record_source=WikidataRecordSource.create(cache=cache),
        )
        page = await service.search("rights", page=1, limit=20)
        ```
    """

    def __init__(
        self,
        cache: CacheStore,
        record_source: RecordSource,
        query_ttl: float | None = None,
        default_page_size: int | None = None,
        max_page_size: int | None = None,
    ) -> None:
        """Initialize the query service.

        Args:
            cache: Result cache for paginated responses (required).
            record_source: Provider of the full corpus (required).
            query_ttl: TTL in seconds for cached pages. Defaults to settings.
            default_page_size: Page size when none is requested. Defaults to settings.
            max_page_size: Upper bound for the page size. Defaults to settings.
        """
        self._cache = cache
        self._source = record_source
        self._query_ttl = settings.query_cache_ttl if query_ttl is None else query_ttl
        self._default_page_size = (
            settings.default_page_size if default_page_size is None else default_page_size
        )
        self._max_page_size = settings.max_page_size if max_page_size is None else max_page_size
        self._metrics = QueryMetrics()

        if not 1 <= self._max_page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"max_page_size must be between 1 and {MAX_PAGE_SIZE}")
        if not 1 <= self._default_page_size <= self._max_page_size:
            raise ValueError("default_page_size must be between 1 and max_page_size")

    @classmethod
    def create(
        cls,
        cache: CacheStore,
        record_source: RecordSource,
        query_ttl: float | None = None,
    ) -> "QueryService":
        """Factory method to create QueryService with sensible defaults.

        Args:
            cache: Result cache (required).
            record_source: Corpus provider (required).
            query_ttl: TTL for cached pages. If None, uses settings.

        Returns:
            Configured QueryService instance
        """
        return cls(cache=cache, record_source=record_source, query_ttl=query_ttl)

    async def search(
        self,
        query: str | None,
        page: int | None = None,
        limit: int | None = None,
    ) -> PageResult[CaseRecord]:
        """Run a plain keyword search.

        Business logic:
        1. Clamp page and limit
        2. Return the cached page for (query, page, limit) if present
        3. Otherwise fetch the corpus, keep matching records, paginate, cache

        Args:
            query: Search text; empty returns the whole corpus
            page: Page number (clamped to >= 1)
            limit: Page size (clamped to [1, max_page_size])

        Returns:
            The requested page

        Raises:
            UpstreamError: If the corpus cannot be fetched
        """
        normalized = (query or "").strip().lower()
        page_request = self._page_request(page, limit)
        key = build_cache_key("search", {"q": normalized}, page_request)
        return await self._execute(key, lambda records: search_records(records, normalized), page_request)

    async def filter(
        self,
        criteria: FilterCriteria,
        page: int | None = None,
        limit: int | None = None,
    ) -> PageResult[CaseRecord]:
        """Run an advanced multi-criteria filter.

        The year is validated before any cache or source access.

        Args:
            criteria: Filter criteria (absent fields are unconstrained)
            page: Page number (clamped to >= 1)
            limit: Page size (clamped to [1, max_page_size])

        Returns:
            The requested page

        Raises:
            ValidationError: If criteria.year is malformed or out of range
            UpstreamError: If the corpus cannot be fetched
        """
        year = validate_year(criteria.year)
        if year is not None:
            criteria = dataclasses.replace(criteria, year=str(year))

        page_request = self._page_request(page, limit)
        params = {
            "keyword": criteria.keyword,
            "year": criteria.year,
            "judge": criteria.judge,
            "type": criteria.case_type,
        }
        key = build_cache_key("filter", params, page_request)
        return await self._execute(key, lambda records: filter_records(records, criteria), page_request)

    async def _execute(
        self,
        key: str,
        narrow: RecordNarrower,
        page_request: PageRequest,
    ) -> PageResult[CaseRecord]:
        """Cache lookup, then fetch -> narrow -> paginate -> store on a miss."""
        start_time = time.time()

        cached = self._cache_get(key)
        if cached is not None:
            self._metrics.record_hit((time.time() - start_time) * 1000)
            logger.debug("Cache hit: %s", key)
            return cached

        logger.debug("Cache miss: %s", key)
        try:
            records = await self._source.fetch_records()
        except UpstreamError:
            self._metrics.record_upstream_failure()
            raise

        result = PageResult.from_items(narrow(records), page_request)

        self._cache_set(key, result)
        self._metrics.record_miss((time.time() - start_time) * 1000)
        return result

    def _page_request(self, page: int | None, limit: int | None) -> PageRequest:
        return PageRequest.create(
            page=page,
            limit=limit,
            default_limit=self._default_page_size,
            max_limit=self._max_page_size,
        )

    def _cache_get(self, key: str) -> PageResult[CaseRecord] | None:
        try:
            return self._cache.get(key)
        except Exception:
            logger.exception("Result cache lookup failed; treating as a miss")
            return None

    def _cache_set(self, key: str, result: PageResult[CaseRecord]) -> None:
        try:
            self._cache.set(key, result, self._query_ttl)
        except Exception:
            logger.exception("Result cache store failed; returning uncached result")

    async def refresh_corpus(self) -> int:
        """Force a corpus refetch.

        Cached pages are left to expire on their own TTL.

        Returns:
            Number of records in the new corpus
        """
        records = await self._source.fetch_records(force_refresh=True)
        return len(records)

    def clear(self) -> None:
        """Clear the result cache and reset metrics."""
        self._cache.clear()
        self._metrics = QueryMetrics()

    def get_stats(self) -> dict:
        """Get cache and query statistics.

        Returns:
            Dictionary with cache statistics and query metrics
        """
        return {
            "cache": self._cache.get_stats(),
            "queries": self._metrics.to_dict(),
            "query_ttl": self._query_ttl,
        }

    @property
    def metrics(self) -> QueryMetrics:
        """Get the query metrics (for testing)."""
        return self._metrics

    @property
    def cache(self) -> CacheStore:
        """Get the underlying cache (for testing)."""
        return self._cache

    @property
    def record_source(self) -> RecordSource:
        """Get the underlying record source (for testing)."""
        return self._source
