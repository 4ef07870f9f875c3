"""
Tests for the case search API.
"""

import pytest
from fastapi.testclient import TestClient

from case_search.api.app import API_NAME, create_app
from case_search.exceptions import UpstreamError, UpstreamErrorKind
from case_search.repositories import InMemoryCacheRepository

from .conftest import FakeRecordSource, make_record


@pytest.fixture
def source(corpus):
    return FakeRecordSource(corpus)


@pytest.fixture
def client(source, clock):
    """Create a test client with the lifespan running."""
    app = create_app(
        record_source=source,
        cache=InMemoryCacheRepository(max_entries=100, default_ttl=300, clock=clock),
    )
    with TestClient(app) as test_client:
        yield test_client


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == API_NAME
    assert "search_all_cases" in data["endpoints"]


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["uptime"] >= 0


def test_search_all_cases(client):
    """An empty query returns the whole corpus."""
    response = client.get("/search")
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert [item["caseId"] for item in data["results"]] == ["Q101", "Q102", "Q103"]
    assert data["pagination"] == {
        "currentPage": 1,
        "totalPages": 1,
        "totalItems": 3,
        "itemsPerPage": 20,
        "hasNextPage": False,
        "hasPreviousPage": False,
    }


def test_search_uses_camel_case_fields(client):
    """Test case items are serialized with camelCase keys."""
    item = client.get("/search", params={"q": "mensah"}).json()["results"][0]
    assert item["caseId"] == "Q101"
    assert item["majorityOpinion"] == "Jones Dotse"
    assert item["sourceLabel"] == "Ghana Law Reports"
    assert item["articleUrl"] == "http://www.wikidata.org/entity/Q101"


def test_search_with_query(client):
    """Test search is case-insensitive."""
    data = client.get("/search", params={"q": "RIGHTS"}).json()
    assert [item["caseId"] for item in data["results"]] == ["Q102"]
    assert data["pagination"]["totalItems"] == 1


def test_search_no_matches(client):
    data = client.get("/search", params={"q": "maritime salvage"}).json()
    assert data["results"] == []
    assert data["pagination"]["totalPages"] == 0
    assert data["pagination"]["hasNextPage"] is False


def test_search_pagination(clock):
    """Test page/limit with a larger corpus."""
    records = [make_record(f"Q{i}", title=f"Case {i}") for i in range(1, 46)]
    app = create_app(
        record_source=FakeRecordSource(records),
        cache=InMemoryCacheRepository(max_entries=100, default_ttl=300, clock=clock),
    )
    with TestClient(app) as client:
        data = client.get("/search", params={"page": 3, "limit": 20}).json()

    assert len(data["results"]) == 5
    assert data["results"][0]["caseId"] == "Q41"
    assert data["pagination"]["totalPages"] == 3
    assert data["pagination"]["hasNextPage"] is False
    assert data["pagination"]["hasPreviousPage"] is True


def test_search_limit_is_clamped(client):
    data = client.get("/search", params={"limit": 500}).json()
    assert data["pagination"]["itemsPerPage"] == 50


def test_search_is_cached(client, source):
    """Test repeated requests do not refetch the corpus."""
    client.get("/search", params={"q": "rights"})
    client.get("/search", params={"q": "rights"})
    assert source.fetch_count == 1


def test_filter_by_type_and_year(client):
    """Test filter endpoint with the `type` query parameter."""
    response = client.get("/filter", params={"type": "Criminal", "year": "2019"})
    assert response.status_code == 200
    data = response.json()
    assert [item["caseId"] for item in data["results"]] == ["Q101"]
    assert data["count"] == 1
    assert data["filters"] == {
        "keyword": None,
        "year": "2019",
        "judge": None,
        "caseType": "criminal",
    }


def test_filter_by_judge(client):
    data = client.get("/filter", params={"judge": "atuguba"}).json()
    assert [item["caseId"] for item in data["results"]] == ["Q102"]


def test_filter_without_criteria_returns_all(client):
    data = client.get("/filter").json()
    assert data["count"] == 3


@pytest.mark.parametrize("year", ["1899", "20", "abcd", "3000"])
def test_filter_invalid_year(client, source, year):
    """Test invalid years are rejected before the corpus is fetched."""
    response = client.get("/filter", params={"year": year})
    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "VALIDATION_ERROR"
    assert "1900" in data["error"]
    assert source.fetch_count == 0


@pytest.mark.parametrize(
    "kind, expected_status",
    [
        (UpstreamErrorKind.TIMEOUT, 504),
        (UpstreamErrorKind.UNREACHABLE, 503),
        (UpstreamErrorKind.BAD_RESPONSE, 502),
        (UpstreamErrorKind.MALFORMED_PAYLOAD, 502),
    ],
)
def test_upstream_errors(client, source, kind, expected_status):
    """Test upstream failures map to gateway status codes."""
    source.error = UpstreamError(kind, "Wikidata is having a bad day")

    response = client.get("/search", params={"q": "rights"})

    assert response.status_code == expected_status
    assert response.json() == {
        "success": False,
        "error": "Wikidata is having a bad day",
        "code": kind.value,
    }


def test_upstream_error_is_not_cached(client, source):
    source.error = UpstreamError(UpstreamErrorKind.TIMEOUT, "slow")
    assert client.get("/search").status_code == 504

    source.error = None
    assert client.get("/search").status_code == 200


def test_cache_stats(client):
    """Test stats endpoint."""
    client.get("/search", params={"q": "rights"})
    client.get("/search", params={"q": "rights"})

    response = client.get("/cache/stats")
    assert response.status_code == 200
    data = response.json()
    assert data["cache"]["size"] == 1
    assert data["cache"]["max_size"] == 100
    assert data["queries"]["cache_hits"] == 1
    assert data["queries"]["cache_misses"] == 1


def test_clear_cache(client, source):
    """Test clear cache endpoint."""
    client.get("/search")

    response = client.delete("/cache")
    assert response.status_code == 200
    assert response.json()["success"] is True

    client.get("/search")
    assert source.fetch_count == 2


def test_refresh_corpus(client, source):
    """Test forced corpus refresh."""
    response = client.post("/corpus/refresh")
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["recordCount"] == 3
    assert source.force_refresh_calls == 1


def test_unknown_route_uses_error_format(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert response.json()["code"] == "HTTP_404"


@pytest.mark.parametrize(
    "path, params, field",
    [
        ("/search", {"page": "abc"}, "page"),
        ("/filter", {"limit": "ten"}, "limit"),
    ],
)
def test_malformed_query_parameter_uses_error_format(client, source, path, params, field):
    """Test non-integer paging parameters are rejected with the standard body."""
    response = client.get(path, params=params)
    assert response.status_code == 400
    data = response.json()
    assert set(data) == {"success", "error", "code"}
    assert data["success"] is False
    assert data["code"] == "VALIDATION_ERROR"
    assert field in data["error"]
    assert source.fetch_count == 0
