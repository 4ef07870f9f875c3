"""Tests for settings validation."""

import pytest

from case_search.config import Settings


def test_defaults_are_valid():
    settings = Settings()
    assert 1 <= settings.default_page_size <= settings.max_page_size <= 50


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_page_size": 51},
        {"max_page_size": 0},
        {"default_page_size": 30, "max_page_size": 25},
        {"cache_max_entries": 0},
        {"query_cache_ttl": 0},
        {"upstream_timeout": 0},
    ],
)
def test_rejects_invalid_values(overrides):
    with pytest.raises(ValueError):
        Settings(**overrides)
