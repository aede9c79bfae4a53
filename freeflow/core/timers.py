"""Host timer facility for FreeFlow.

Everything in a dive runs on one logical thread. The host (Tk mainloop,
a virtual clock in tests, or a blocking real-time loop) owns time and
calls back into the engine when a one-shot timer falls due.

Contract:
    - now() is monotonic seconds
    - call_later(delay, callback) returns a TimerHandle
    - once handle.cancel() returns, the callback never runs

Usage:
    from freeflow.core.timers import VirtualTimerHost

    host = VirtualTimerHost()
    handle = host.call_later(2.0, on_wake)
    host.advance(1.0)   # nothing fires
    handle.cancel()
    host.advance(5.0)   # still nothing
"""

import heapq
import itertools
import math
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from freeflow.core.logging import get_logger

logger = get_logger(__name__)


class TimerHandle:
    """A scheduled one-shot callback.

    Attributes:
        when: Host time the callback is due
    """

    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self._callback: Optional[Callable[[], None]] = callback
        self._cancelled = False
        self._fired = False
        # Set by hosts that must release a native timer on cancel
        self._cancel_hook: Optional[Callable[[], None]] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def active(self) -> bool:
        """True while the callback may still run."""
        return not (self._cancelled or self._fired)

    def cancel(self) -> bool:
        """Cancel the callback.

        Returns True if the handle was live, False if it already fired
        or was cancelled.
        """
        if not self.active:
            return False
        self._cancelled = True
        self._callback = None
        if self._cancel_hook is not None:
            self._cancel_hook()
            self._cancel_hook = None
        return True

    def _run(self) -> bool:
        """Invoke the callback if still live. Returns True if it ran."""
        if not self.active:
            return False
        self._fired = True
        callback, self._callback = self._callback, None
        assert callback is not None
        callback()
        return True


class TimerHost(ABC):
    """Clock plus one-shot scheduling, supplied by the runtime."""

    @abstractmethod
    def now(self) -> float:
        """Current host time in seconds."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule callback after delay seconds."""


class _QueueTimerHost(TimerHost):
    """Shared heap of pending handles ordered by (due time, insertion)."""

    def __init__(self) -> None:
        self._queue: list[tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        delay = float(delay)
        if not math.isfinite(delay):
            raise ValueError(f"Timer delay must be finite, got {delay}")
        delay = max(0.0, delay)
        handle = TimerHandle(self.now() + delay, callback)
        heapq.heappush(self._queue, (handle.when, next(self._counter), handle))
        return handle

    def pending_count(self) -> int:
        """Number of handles that may still fire."""
        return sum(1 for _, _, handle in self._queue if handle.active)

    def next_due(self) -> Optional[float]:
        """Due time of the earliest live handle, or None."""
        while self._queue and not self._queue[0][2].active:
            heapq.heappop(self._queue)
        if not self._queue:
            return None
        return self._queue[0][0]

    def _pop_due(self, now: float) -> Optional[TimerHandle]:
        while self._queue and self._queue[0][0] <= now:
            _, _, handle = heapq.heappop(self._queue)
            if handle.active:
                return handle
        return None


class VirtualTimerHost(_QueueTimerHost):
    """Deterministic virtual clock.

    Time only moves when advance() is called, which makes whole dives
    reproducible in tests and in headless simulation.
    """

    def __init__(self, start: float = 0.0):
        super().__init__()
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing everything that falls due.

        Callbacks scheduled while advancing also fire if they fall due
        inside the window.

        Returns:
            Number of callbacks fired
        """
        if seconds < 0:
            raise ValueError("Cannot advance a clock backwards")
        target = self._now + seconds
        fired = 0
        while True:
            due = self.next_due()
            if due is None or due > target:
                break
            self._now = max(self._now, due)
            handle = self._pop_due(self._now)
            if handle is not None and handle._run():
                fired += 1
        self._now = target
        return fired

    def run_until_idle(self, max_seconds: float = 24 * 3600.0) -> int:
        """Fire callbacks until nothing is pending or max_seconds pass.

        Returns:
            Number of callbacks fired
        """
        deadline = self._now + max_seconds
        fired = 0
        while True:
            due = self.next_due()
            if due is None or due > deadline:
                break
            fired += self.advance(max(0.0, due - self._now))
        return fired


class RealtimeTimerHost(_QueueTimerHost):
    """Blocking real-time runner on time.monotonic().

    run() sleeps until the next handle is due and fires it on the
    calling thread. stop() may be called from a callback or a signal
    handler to return early.
    """

    def __init__(self, time_scale: float = 1.0):
        super().__init__()
        if time_scale <= 0:
            raise ValueError("time_scale must be positive")
        self._time_scale = time_scale
        self._origin = time.monotonic()
        self._stop_event = threading.Event()

    def now(self) -> float:
        return (time.monotonic() - self._origin) * self._time_scale

    def run(self) -> int:
        """Run until no handles remain or stop() is called.

        Returns:
            Number of callbacks fired
        """
        self._stop_event.clear()
        fired = 0
        logger.debug("Realtime host loop started")
        while not self._stop_event.is_set():
            due = self.next_due()
            if due is None:
                break
            wait = (due - self.now()) / self._time_scale
            if wait > 0:
                if self._stop_event.wait(timeout=wait):
                    break
                continue
            handle = self._pop_due(self.now())
            if handle is not None and handle._run():
                fired += 1
        logger.debug("Realtime host loop ended", extra={"context": {"fired": fired}})
        return fired

    def stop(self) -> None:
        """Ask run() to return."""
        self._stop_event.set()
