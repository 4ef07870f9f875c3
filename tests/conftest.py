"""Shared fixtures for case search tests."""

from collections.abc import Callable

import pytest

from case_search.entities import CaseRecord
from case_search.exceptions import UpstreamError
from case_search.repositories import InMemoryCacheRepository


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRecordSource:
    """In-memory RecordSource that counts fetches and can be told to fail."""

    def __init__(self, records: list[CaseRecord]) -> None:
        self.records = records
        self.fetch_count = 0
        self.force_refresh_calls = 0
        self.error: UpstreamError | None = None

    async def fetch_records(self, force_refresh: bool = False) -> list[CaseRecord]:
        self.fetch_count += 1
        if force_refresh:
            self.force_refresh_calls += 1
        if self.error is not None:
            raise self.error
        return list(self.records)


def make_record(case_id: str = "Q1", **overrides) -> CaseRecord:
    """Create a test record with realistic default values."""
    defaults = {
        "title": "Republic v. Mensah",
        "description": "appeal against conviction",
        "date": "2019-03-14",
        "citation": "[2019] GHASC 12",
        "court": "Supreme Court of Ghana",
        "majority_opinion": "Jones Dotse",
        "source_label": "Ghana Law Reports",
        "judges": "Jones Dotse, Sophia Akuffo",
        "article_url": f"http://www.wikidata.org/entity/{case_id}",
    }
    defaults.update(overrides)
    return CaseRecord(case_id=case_id, **defaults)


@pytest.fixture
def record_factory() -> Callable[..., CaseRecord]:
    return make_record


@pytest.fixture
def corpus() -> list[CaseRecord]:
    """Three cases; only the second mentions 'rights' in its description."""
    return [
        make_record(
            "Q101",
            title="Republic v. Mensah",
            description="appeal against a murder conviction",
            date="2019-03-14",
            citation="[2019] GHASC 12",
            majority_opinion="Jones Dotse",
            judges="Jones Dotse, Sophia Akuffo",
        ),
        make_record(
            "Q102",
            title="Ahumah-Ocansey v. Electoral Commission",
            description="challenge on voting rights of citizens abroad",
            date="2010-06-23",
            citation="[2010] GHASC 45",
            majority_opinion="Georgina Wood",
            judges="Georgina Wood, William Atuguba",
        ),
        make_record(
            "Q103",
            title="Tuffuor v. Attorney-General",
            description="dispute over appointment of the chief justice",
            date="Date not recorded",
            citation="[1980] GLR 637",
            majority_opinion="Sowah",
            judges="Judges unavailable",
        ),
    ]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> InMemoryCacheRepository:
    return InMemoryCacheRepository(max_entries=10, default_ttl=60, clock=clock)


@pytest.fixture
def fake_source(corpus) -> FakeRecordSource:
    return FakeRecordSource(corpus)
