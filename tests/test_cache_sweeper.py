"""Tests for the background cache sweeper."""

import asyncio
import logging

import pytest

from case_search.services import CacheSweeper


class ExplodingCache:
    """Cache whose sweep always fails."""

    def __init__(self) -> None:
        self.sweeps = 0

    def sweep_expired(self) -> int:
        self.sweeps += 1
        raise RuntimeError("backend down")


def test_sweep_once_removes_expired_entries(cache, clock):
    cache.set("old", 1, ttl=10)
    cache.set("new", 2, ttl=100)
    clock.advance(50)

    sweeper = CacheSweeper(cache=cache, interval=60)

    assert sweeper.sweep_once() == 1
    assert len(cache) == 1
    assert cache.get("new") == 2


def test_sweep_once_with_nothing_expired(cache):
    cache.set("a", 1)
    assert CacheSweeper(cache=cache, interval=60).sweep_once() == 0


def test_sweep_failure_is_logged_not_raised(caplog):
    sweeper = CacheSweeper(cache=ExplodingCache(), interval=60)

    with caplog.at_level(logging.ERROR):
        assert sweeper.sweep_once() == 0

    assert "Cache sweep failed" in caplog.text


@pytest.mark.asyncio
async def test_background_loop_sweeps_on_interval(cache, clock):
    cache.set("old", 1, ttl=1)
    clock.advance(5)

    sweeper = CacheSweeper(cache=cache, interval=0.01)
    sweeper.start()
    assert sweeper.is_running
    await asyncio.sleep(0.1)
    await sweeper.stop()

    assert not sweeper.is_running
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_loop_survives_failing_sweeps():
    broken = ExplodingCache()
    sweeper = CacheSweeper(cache=broken, interval=0.01)

    sweeper.start()
    await asyncio.sleep(0.1)
    assert sweeper.is_running
    await sweeper.stop()

    assert broken.sweeps >= 2


@pytest.mark.asyncio
async def test_start_twice_keeps_one_task(cache):
    sweeper = CacheSweeper(cache=cache, interval=60)
    sweeper.start()
    first_task = sweeper._task
    sweeper.start()

    assert sweeper._task is first_task
    await sweeper.stop()


@pytest.mark.asyncio
async def test_stop_without_start_is_noop(cache):
    await CacheSweeper(cache=cache, interval=60).stop()


@pytest.mark.parametrize("interval", [0, -1])
def test_rejects_non_positive_interval(cache, interval):
    with pytest.raises(ValueError):
        CacheSweeper(cache=cache, interval=interval)
