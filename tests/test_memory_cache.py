"""Tests for InMemoryCacheRepository."""

import pytest

from case_search.protocols import CacheStore
from case_search.repositories import InMemoryCacheRepository


def test_satisfies_cache_store_protocol(cache):
    assert isinstance(cache, CacheStore)


def test_get_returns_stored_value(cache):
    cache.set("k", {"a": 1}, ttl=30)
    assert cache.get("k") == {"a": 1}
    assert cache.has("k")


def test_miss_returns_none(cache):
    assert cache.get("missing") is None
    assert not cache.has("missing")


def test_zero_ttl_is_already_expired(cache):
    cache.set("k", "v", ttl=0)
    assert cache.get("k") is None
    assert len(cache) == 0


def test_negative_ttl_drops_existing_entry(cache):
    cache.set("k", "old", ttl=30)
    cache.set("k", "new", ttl=-1)
    assert cache.get("k") is None


def test_entry_expires_after_ttl(cache, clock):
    cache.set("k", "v", ttl=10)
    clock.advance(9)
    assert cache.get("k") == "v"
    clock.advance(2)
    assert cache.get("k") is None


def test_entry_still_live_at_exact_expiry(cache, clock):
    cache.set("k", "v", ttl=10)
    clock.advance(10)
    assert cache.get("k") == "v"
    clock.advance(0.5)
    assert cache.get("k") is None


def test_expired_entry_removed_lazily_on_get(cache, clock):
    cache.set("k", "v", ttl=5)
    clock.advance(6)
    assert len(cache) == 1
    assert cache.get("k") is None
    assert len(cache) == 0


def test_has_removes_expired_entry(cache, clock):
    cache.set("k", "v", ttl=5)
    clock.advance(6)
    assert not cache.has("k")
    assert len(cache) == 0


def test_default_ttl_used_when_not_given(cache, clock):
    cache.set("k", "v")
    clock.advance(60)
    assert cache.has("k")
    clock.advance(1)
    assert not cache.has("k")


def test_set_overwrites_existing_value(cache):
    cache.set("k", "first", ttl=30)
    cache.set("k", "second", ttl=30)
    assert cache.get("k") == "second"
    assert len(cache) == 1


def test_eviction_removes_oldest_insertion(clock):
    cache = InMemoryCacheRepository(max_entries=3, default_ttl=60, clock=clock)
    for key in ("a", "b", "c"):
        cache.set(key, key)
        clock.advance(1)

    cache.set("d", "d")

    assert len(cache) == 3
    assert not cache.has("a")
    assert all(cache.has(key) for key in ("b", "c", "d"))


def test_eviction_removes_exactly_one_entry(clock):
    cache = InMemoryCacheRepository(max_entries=2, default_ttl=60, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)
    cache.set("d", 4)

    assert len(cache) == 2
    assert cache.get("c") == 3
    assert cache.get("d") == 4


def test_overwrite_moves_entry_to_newest(clock):
    cache = InMemoryCacheRepository(max_entries=2, default_ttl=60, clock=clock)
    cache.set("a", 1)
    clock.advance(1)
    cache.set("b", 2)
    clock.advance(1)
    cache.set("a", 10)
    clock.advance(1)

    cache.set("c", 3)

    assert cache.get("a") == 10
    assert not cache.has("b")


def test_overwrite_at_capacity_does_not_evict(clock):
    cache = InMemoryCacheRepository(max_entries=2, default_ttl=60, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)

    cache.set("a", 3)

    assert cache.get("a") == 3
    assert cache.get("b") == 2


def test_delete_and_clear(cache):
    cache.set("a", 1)
    cache.set("b", 2)

    cache.delete("a")
    cache.delete("never-there")
    assert not cache.has("a")
    assert cache.has("b")

    cache.clear()
    assert len(cache) == 0


def test_sweep_expired_removes_only_stale_entries(cache, clock):
    cache.set("short", 1, ttl=5)
    cache.set("also-short", 2, ttl=5)
    cache.set("long", 3, ttl=50)
    clock.advance(10)

    assert cache.sweep_expired() == 2
    assert len(cache) == 1
    assert cache.get("long") == 3
    assert cache.sweep_expired() == 0


def test_get_stats_reports_age_and_expiry(cache, clock):
    cache.set("k", "v", ttl=30)
    clock.advance(10)

    stats = cache.get_stats()

    assert stats["size"] == 1
    assert stats["max_size"] == 10
    assert stats["entries"] == [{"key": "k", "age": 10, "expires_in": 20}]


@pytest.mark.parametrize("max_entries", [0, -1])
def test_rejects_invalid_capacity(max_entries):
    with pytest.raises(ValueError):
        InMemoryCacheRepository(max_entries=max_entries)


@pytest.mark.parametrize("default_ttl", [0, -5])
def test_rejects_non_positive_default_ttl(default_ttl):
    with pytest.raises(ValueError):
        InMemoryCacheRepository(default_ttl=default_ttl)
