"""
Tests for the periodic cleanup sweeper.
"""

import asyncio

import pytest

from weather_intel.services import PeriodicSweeper


class CountingTarget:
    def __init__(self, fail_first: bool = False) -> None:
        self.calls = 0
        self.fail_first = fail_first

    def cleanup(self) -> int:
        self.calls += 1
        if self.fail_first and self.calls == 1:
            raise RuntimeError("sweep failed")
        return 1


def test_sweeper_runs_periodically_and_stops():
    target = CountingTarget()

    async def scenario() -> None:
        sweeper = PeriodicSweeper(target, interval=0.01, name="test")
        sweeper.start()
        assert sweeper.is_running
        await asyncio.sleep(0.1)
        await sweeper.shutdown()
        assert not sweeper.is_running

    asyncio.run(scenario())
    calls = target.calls
    assert calls >= 2


def test_sweeper_survives_failing_cleanup():
    target = CountingTarget(fail_first=True)

    async def scenario() -> None:
        sweeper = PeriodicSweeper(target, interval=0.01)
        sweeper.start()
        await asyncio.sleep(0.1)
        await sweeper.shutdown()

    asyncio.run(scenario())
    assert target.calls >= 2


def test_sweep_once_returns_removed_count():
    assert PeriodicSweeper(CountingTarget(), interval=1).sweep() == 1


def test_shutdown_without_start_is_noop():
    asyncio.run(PeriodicSweeper(CountingTarget(), interval=1).shutdown())


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        PeriodicSweeper(CountingTarget(), interval=0)
