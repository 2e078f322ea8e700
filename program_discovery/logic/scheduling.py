"""
Scheduling

Cancellable delayed callbacks for the keyword debounce. A session owns at
most one handle at a time and cancels it before scheduling the next.

- AsyncioScheduler: real time, on an asyncio event loop
- ManualScheduler: virtual clock advanced explicitly by the caller
"""

import asyncio
import heapq
import itertools
import logging
from typing import Callable, List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedules callbacks with `loop.call_later` on a given or running loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as e:
                raise RuntimeError(
                    "AsyncioScheduler needs a running event loop; "
                    "pass loop= or use another scheduler outside async code"
                ) from e
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._loop.call_later(delay, callback)


class ManualTimer:
    """Handle returned by ManualScheduler."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Virtual clock scheduler.

    Time only moves when `advance` is called; due callbacks then run in
    due-time order (ties in scheduling order) on the caller's stack.
    """

    def __init__(self):
        self.now = 0.0
        self._queue: List[Tuple[float, int, ManualTimer]] = []
        self._sequence = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (timer.due, next(self._sequence), timer))
        return timer

    def pending(self) -> int:
        """Number of timers scheduled and not cancelled or fired."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward and run every callback that falls due.

        Returns:
            Number of callbacks fired
        """
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            self.now = due
            if timer.cancelled:
                continue
            timer.callback()
            fired += 1
        self.now = target
        return fired
