"""
Deferred callbacks for calcpad.

The engine only needs one timed behavior (leaving the error display after
a short delay), so it talks to a tiny scheduler interface. The HTTP app
schedules on its asyncio event loop; the REPL and the tests poll.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Callable

import structlog

logger = structlog.get_logger()


class ScheduledCall:
    """Handle for a callback that may still be cancelled."""

    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False
        self._timer: asyncio.TimerHandle | None = None

    def cancel(self) -> None:
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()

    def _run(self) -> None:
        if not self.cancelled:
            self.callback()


class Scheduler(ABC):
    """Abstract base class for schedulers."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Run `callback` once, `delay` seconds from now, unless cancelled."""
        pass

    def run_pending(self) -> int:
        """Run callbacks that are due now. Returns how many ran."""
        return 0


class AsyncioScheduler(Scheduler):
    """Schedules callbacks on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self.loop = loop or asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self.loop.time() + delay, callback)
        call._timer = self.loop.call_later(delay, call._run)
        return call


class PollingScheduler(Scheduler):
    """
    Runs due callbacks whenever `run_pending` is called.

    Nothing happens in the background: the owner polls between inputs.
    `clock` defaults to `time.monotonic`; tests pass a fake clock.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._calls: list[ScheduledCall] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self.clock() + delay, callback)
        self._calls.append(call)
        return call

    def run_pending(self) -> int:
        """Run every due, uncancelled callback. Returns how many ran."""
        now = self.clock()
        due = sorted(
            (c for c in self._calls if c.when <= now and not c.cancelled),
            key=lambda c: c.when,
        )
        self._calls = [c for c in self._calls if c.when > now and not c.cancelled]

        for call in due:
            logger.debug("Running scheduled callback", due=call.when, now=now)
            call._run()
        return len(due)

    @property
    def pending(self) -> int:
        return sum(1 for c in self._calls if not c.cancelled)
