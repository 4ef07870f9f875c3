"""Wikidata-backed record source.

Fetches the Supreme Court of Ghana case corpus from the Wikidata SPARQL
endpoint and caches it as one whole-corpus entry. The corpus changes far
less often than queries arrive, so its TTL is much longer than the
per-query TTL.

Endpoint: https://query.wikidata.org/sparql (no authentication)
"""

import logging
from typing import Any

import httpx

from case_search.config import settings
from case_search.entities import (
    CITATION_UNAVAILABLE,
    COURT_NOT_SPECIFIED,
    DATE_NOT_RECORDED,
    DESCRIPTION_UNAVAILABLE,
    JUDGES_UNAVAILABLE,
    MAJORITY_OPINION_UNAVAILABLE,
    SOURCE_UNAVAILABLE,
    TITLE_UNAVAILABLE,
    CaseRecord,
)
from case_search.exceptions import UpstreamError, UpstreamErrorKind
from case_search.protocols import CacheStore

logger = logging.getLogger(__name__)

CORPUS_CACHE_KEY = "corpus:wikidata"

# Court cases (Q114079647) of Ghana (Q117) decided by the Supreme Court of
# Ghana or a subclass of it (Q1513611), with their judges joined into one string.
SPARQL_QUERY_TEMPLATE = """
SELECT DISTINCT ?item ?itemLabel ?itemDescription ?date ?legal_citation ?courtLabel ?majority_opinionLabel ?sourceLabel (GROUP_CONCAT(DISTINCT ?judge; SEPARATOR = ", ") AS ?judges) WHERE {{
  {{
    SELECT DISTINCT * WHERE {{
      ?item (wdt:P31/(wdt:P279*)) wd:Q114079647;
        (wdt:P17/(wdt:P279*)) wd:Q117;
        (wdt:P1001/(wdt:P279*)) wd:Q117;
        (wdt:P793/(wdt:P279*)) wd:Q7099379;
        wdt:P4884 ?court.
      ?court (wdt:P279*) wd:Q1513611.
    }}
    LIMIT {max_results}
  }}
  ?item wdt:P577 ?date;
    wdt:P1031 ?legal_citation;
    wdt:P1433 ?source;
    wdt:P1594 _:b3.
  _:b3 rdfs:label ?judge.
  FILTER((LANG(?judge)) = "en")
  SERVICE wikibase:label {{ bd:serviceParam wikibase:language "[AUTO_LANGUAGE],mul,en". }}
}}
GROUP BY ?item ?itemLabel ?itemDescription ?date ?legal_citation ?courtLabel ?majority_opinionLabel ?sourceLabel
ORDER BY (?date)
"""


def build_sparql_query(max_results: int) -> str:
    """Build the corpus query with the given inner LIMIT."""
    return SPARQL_QUERY_TEMPLATE.format(max_results=max_results)


def _binding_value(binding: dict[str, Any], name: str) -> str | None:
    """Return the non-empty string value of a SPARQL binding, if any."""
    field = binding.get(name)
    if not isinstance(field, dict):
        return None
    value = field.get("value")
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def parse_binding(binding: dict[str, Any]) -> CaseRecord | None:
    """Convert one SPARQL result row into a CaseRecord.

    Args:
        binding: One entry of ``results.bindings``

    Returns:
        The record, or None when the row has no resolvable identifier
    """
    item_uri = _binding_value(binding, "item")
    if item_uri is None:
        return None

    case_id = item_uri.rstrip("/").rsplit("/", 1)[-1]
    if not case_id:
        return None

    date = _binding_value(binding, "date")

    return CaseRecord(
        case_id=case_id,
        title=_binding_value(binding, "itemLabel") or TITLE_UNAVAILABLE,
        description=_binding_value(binding, "itemDescription") or DESCRIPTION_UNAVAILABLE,
        date=date.split("T", 1)[0] if date else DATE_NOT_RECORDED,
        citation=_binding_value(binding, "legal_citation") or CITATION_UNAVAILABLE,
        court=_binding_value(binding, "courtLabel") or COURT_NOT_SPECIFIED,
        majority_opinion=_binding_value(binding, "majority_opinionLabel") or MAJORITY_OPINION_UNAVAILABLE,
        source_label=_binding_value(binding, "sourceLabel") or SOURCE_UNAVAILABLE,
        judges=_binding_value(binding, "judges") or JUDGES_UNAVAILABLE,
        article_url=item_uri,
    )


def parse_sparql_response(data: Any) -> list[CaseRecord]:
    """Parse a SPARQL JSON results document into records.

    Rows without an identifier, or rows that fail to parse, are dropped
    and logged; they never abort the batch.

    Raises:
        UpstreamError: If the document has no ``results.bindings`` list
    """
    results = data.get("results") if isinstance(data, dict) else None
    bindings = results.get("bindings") if isinstance(results, dict) else None
    if not isinstance(bindings, list):
        raise UpstreamError(
            UpstreamErrorKind.MALFORMED_PAYLOAD,
            "Invalid response format from Wikidata. The service may be experiencing issues.",
        )

    records = []
    for index, binding in enumerate(bindings):
        try:
            record = parse_binding(binding)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning("Dropping malformed case row %d: %s", index, e)
            continue

        if record is None:
            logger.debug("Dropping case row %d without an identifier", index)
            continue
        records.append(record)

    return records


class WikidataRecordSource:
    """Wikidata SPARQL implementation of the RecordSource protocol.

    This class satisfies the RecordSource protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        source = WikidataRecordSource.create(cache=InMemoryCacheRepository.create())
        records = await source.fetch_records()
        ```
    """

    def __init__(
        self,
        cache: CacheStore | None = None,
        client: httpx.AsyncClient | None = None,
        endpoint_url: str | None = None,
        timeout: float | None = None,
        corpus_ttl: float | None = None,
        max_results: int | None = None,
        user_agent: str | None = None,
    ) -> None:
        """Initialize the Wikidata record source.

        Args:
            cache: Cache for the whole corpus. If None, every call fetches.
            client: HTTP client. If None, one is created lazily and owned here.
            endpoint_url: SPARQL endpoint. Defaults to settings.wikidata_sparql_url.
            timeout: Request timeout in seconds. Defaults to settings.upstream_timeout.
            corpus_ttl: TTL for the cached corpus. Defaults to settings.corpus_cache_ttl.
            max_results: Inner LIMIT of the query. Defaults to settings.wikidata_max_results.
            user_agent: User-Agent header. Defaults to settings.wikidata_user_agent.
        """
        self._cache = cache
        self._client = client
        self._owns_client = client is None
        self._endpoint_url = endpoint_url or settings.wikidata_sparql_url
        self._timeout = settings.upstream_timeout if timeout is None else timeout
        self._corpus_ttl = settings.corpus_cache_ttl if corpus_ttl is None else corpus_ttl
        max_results = settings.wikidata_max_results if max_results is None else max_results
        self._query = build_sparql_query(max_results)
        self._user_agent = user_agent or settings.wikidata_user_agent

        if self._timeout <= 0:
            raise ValueError("timeout must be greater than 0")
        if max_results < 1:
            raise ValueError("max_results must be at least 1")

    @classmethod
    def create(
        cls,
        cache: CacheStore | None = None,
        endpoint_url: str | None = None,
    ) -> "WikidataRecordSource":
        """Factory method to create WikidataRecordSource with defaults.

        Args:
            cache: Cache for the whole corpus.
            endpoint_url: SPARQL endpoint. If None, uses settings.

        Returns:
            Configured WikidataRecordSource
        """
        return cls(cache=cache, endpoint_url=endpoint_url)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def fetch_records(self, force_refresh: bool = False) -> list[CaseRecord]:
        """Return the full corpus, from cache when possible.

        Args:
            force_refresh: Skip the cached corpus and fetch again

        Returns:
            List of records (a fresh list; the cached corpus is never exposed)

        Raises:
            UpstreamError: If the fetch fails or the payload cannot be parsed
        """
        if not force_refresh:
            cached = self._cache_get()
            if cached is not None:
                logger.debug("Using cached corpus (%d records)", len(cached))
                return list(cached)

        data = await self._fetch_payload()
        records = parse_sparql_response(data)
        logger.info("Fetched %d cases from Wikidata", len(records))

        self._cache_set(tuple(records))
        return records

    async def _fetch_payload(self) -> Any:
        """Run the SPARQL query and return the decoded JSON body."""
        try:
            response = await self.client.get(
                self._endpoint_url,
                params={"query": self._query, "format": "json"},
                headers={
                    "User-Agent": self._user_agent,
                    "Accept": "application/sparql-results+json",
                },
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error("Wikidata API timeout: %s", e)
            raise UpstreamError(
                UpstreamErrorKind.TIMEOUT,
                "Wikidata API request timed out. The service may be slow. Please try again in a moment.",
            ) from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error("Wikidata API error: HTTP %d", status_code)
            raise UpstreamError(
                UpstreamErrorKind.BAD_RESPONSE,
                f"Wikidata API returned an error ({status_code}). "
                "The service may be temporarily unavailable.",
                details={"status_code": status_code},
            ) from e
        except httpx.TransportError as e:
            logger.error("Cannot reach Wikidata API: %s", e)
            raise UpstreamError(
                UpstreamErrorKind.UNREACHABLE,
                "Cannot reach Wikidata API. Please check your network connection.",
            ) from e

        try:
            return response.json()
        except ValueError as e:
            logger.error("Wikidata API returned a non-JSON body")
            raise UpstreamError(
                UpstreamErrorKind.MALFORMED_PAYLOAD,
                "Invalid response format from Wikidata. The service may be experiencing issues.",
            ) from e

    def _cache_get(self) -> tuple[CaseRecord, ...] | None:
        if self._cache is None:
            return None
        try:
            return self._cache.get(CORPUS_CACHE_KEY)
        except Exception:
            logger.exception("Corpus cache lookup failed; treating as a miss")
            return None

    def _cache_set(self, records: tuple[CaseRecord, ...]) -> None:
        if self._cache is None:
            return
        try:
            self._cache.set(CORPUS_CACHE_KEY, records, self._corpus_ttl)
        except Exception:
            logger.exception("Corpus cache store failed; continuing uncached")

    async def close(self) -> None:
        """Close the HTTP client if this source created it.

        Should be called when shutting down the application.
        """
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
