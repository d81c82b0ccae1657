"""Tests for the host schedulers."""
import asyncio

import pytest

from barkeep.config import EngineSettings
from barkeep.engine import MixingEngine
from barkeep.scheduling import AsyncioScheduler, TickScheduler


def test_tick_scheduler_fires_when_due():
    scheduler = TickScheduler()
    fired = []
    scheduler.call_later(1.0, lambda: fired.append("a"))
    assert scheduler.advance(0.5) == 0
    assert fired == []
    assert scheduler.advance(0.5) == 1
    assert fired == ["a"]
    assert scheduler.pending == 0


def test_tick_scheduler_runs_in_due_order():
    scheduler = TickScheduler()
    fired = []
    scheduler.call_later(2.0, lambda: fired.append("late"))
    scheduler.call_later(1.0, lambda: fired.append("early"))
    scheduler.call_later(1.0, lambda: fired.append("early-second"))
    assert scheduler.advance(5.0) == 3
    assert fired == ["early", "early-second", "late"]


def test_tick_scheduler_skips_cancelled_timers():
    scheduler = TickScheduler()
    fired = []
    timer = scheduler.call_later(1.0, lambda: fired.append("x"))
    assert scheduler.pending == 1
    timer.cancel()
    assert timer.cancelled
    assert scheduler.pending == 0
    assert scheduler.advance(2.0) == 0
    assert fired == []
    assert not timer.fired


def test_tick_scheduler_rejects_negative_values():
    scheduler = TickScheduler()
    with pytest.raises(ValueError):
        scheduler.call_later(-1.0, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-1.0)


def test_asyncio_scheduler_runs_callbacks_on_the_loop():
    fired = []

    async def main():
        scheduler = AsyncioScheduler()
        scheduler.call_later(0.01, lambda: fired.append("a"))
        cancelled = scheduler.call_later(0.01, lambda: fired.append("b"))
        cancelled.cancel()
        assert cancelled.cancelled
        await asyncio.sleep(0.05)

    asyncio.run(main())
    assert fired == ["a"]


def test_engine_hides_progress_with_asyncio_scheduler():
    async def main():
        engine = MixingEngine(
            settings=EngineSettings(progress_hide_delay=0.01),
            scheduler=AsyncioScheduler(),
            logger_name="barkeep.test.scheduling",
        )
        engine.register_vessel("glass")
        engine.pour("gin_bottle", "glass", "gin", dt=1.0)
        engine.stop_pour()
        assert engine.pour_progress("gin_bottle") is not None
        await asyncio.sleep(0.05)
        return engine.pour_progress("gin_bottle")

    assert asyncio.run(main()) is None
