"""
Recording Timers
================

The editor's "record" action is a fire-once deferred task. Schedulers hand
back a handle the editor keeps so the task can be cancelled when the
session ends.

Three schedulers are provided:
  - ThreadingScheduler: threading.Timer daemon threads (default)
  - AsyncioScheduler:   an asyncio event loop's call_later
  - ManualScheduler:    fires only when advance() is called (tests, demos)
"""

import logging
import threading
from typing import Callable, List, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class TimerHandle(Protocol):
    """A scheduled callback that can still be cancelled."""

    def cancel(self) -> None:
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Schedules a callback to run once after `delay` seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class ThreadingScheduler:
    """Runs each callback on its own daemon timer thread."""

    def call_later(self, delay, callback):
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class AsyncioScheduler:
    """
    Schedules callbacks on an asyncio event loop.

    asyncio.TimerHandle already has cancel(), so it is returned as is.
    """

    def __init__(self, loop):
        self.loop = loop

    def call_later(self, delay, callback):
        return self.loop.call_later(delay, callback)


class _ManualHandle:
    def __init__(self, due, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """
    Deterministic scheduler driven by advance().

    Usage:
        scheduler = ManualScheduler()
        session = EditorSession(scheduler=scheduler, ...)
        session.record()
        scheduler.advance(2.0)   # fires the recording completion
    """

    def __init__(self):
        self.now = 0.0
        self._handles: List[_ManualHandle] = []

    def call_later(self, delay, callback):
        handle = _ManualHandle(self.now + delay, callback)
        self._handles.append(handle)
        return handle

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks that have neither fired nor been cancelled."""
        return sum(1 for h in self._handles if not h.cancelled and not h.fired)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire everything that came due. Returns the count fired."""
        self.now += seconds
        due = sorted(
            (h for h in self._handles if not h.cancelled and not h.fired and h.due <= self.now),
            key=lambda h: h.due,
        )
        for handle in due:
            handle.fired = True
            handle.callback()
        self._handles = [h for h in self._handles if not h.cancelled and not h.fired]
        return len(due)

    def fire_all(self) -> int:
        """
        Fire every callback that was ever scheduled, cancelled ones included.

        Simulates a timer that could not be stopped in time, which is what
        the editor's stale-session guard has to absorb.
        """
        handles, self._handles = self._handles, []
        for handle in handles:
            handle.fired = True
            handle.callback()
        return len(handles)
