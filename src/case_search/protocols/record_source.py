"""Record source protocol.

The core does not know how records are obtained (SPARQL, REST, file); it only
relies on this contract.
"""

from typing import Protocol, runtime_checkable

from case_search.entities import CaseRecord


@runtime_checkable
class RecordSource(Protocol):
    """Protocol for providers of the full case corpus."""

    async def fetch_records(self, force_refresh: bool = False) -> list[CaseRecord]:
        """Return the full record corpus.

        Args:
            force_refresh: Bypass any cached corpus and fetch again

        Returns:
            Every well-formed record; an empty list means the source is empty

        Raises:
            UpstreamError: If the corpus cannot be fetched or parsed
        """
        ...
