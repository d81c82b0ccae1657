"""
Deferred callbacks owned by the host environment.

The engine itself never sleeps or spawns tasks. The few delayed effects it has
(hiding the pour readout after a grace period) go through a ``Scheduler``
supplied by the caller.
"""
from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple


class TimerHandle(Protocol):
    def cancel(self) -> None: ...

    @property
    def cancelled(self) -> bool: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class TickTimer:
    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self._cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class TickScheduler:
    """Timer wheel advanced manually from the host's frame loop."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[Tuple[float, int, TickTimer]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TickTimer:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        timer = TickTimer(self.now + delay, callback)
        heapq.heappush(self._queue, (timer.when, next(self._seq), timer))
        return timer

    def advance(self, dt: float) -> int:
        """
        Move the clock forward and run every timer that became due.

        Returns:
            The number of callbacks fired.
        """
        if dt < 0:
            raise ValueError("dt must be non-negative")
        self.now += dt
        fired = 0
        while self._queue and self._queue[0][0] <= self.now:
            _, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            timer.fired = True
            timer.callback()
            fired += 1
        return fired

    @property
    def pending(self) -> int:
        return sum(1 for _, _, t in self._queue if not t.cancelled)


class AsyncioTimer:
    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> AsyncioTimer:
        loop = self._loop or asyncio.get_running_loop()
        return AsyncioTimer(loop.call_later(delay, callback))
