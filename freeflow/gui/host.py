"""Tk mainloop as a timer host.

Wraps any object with Tk's after()/after_cancel() methods, so the
engine runs on the GUI thread with no extra threads. Kept free of
tkinter imports so it can be exercised without a display.
"""

import time
from typing import Any, Callable

from freeflow.core.timers import TimerHandle, TimerHost


class TkTimerHost(TimerHost):
    """Schedules engine callbacks with root.after()."""

    def __init__(self, root: Any, time_scale: float = 1.0):
        if time_scale <= 0:
            raise ValueError("time_scale must be positive")
        self._root = root
        self._time_scale = time_scale
        self._origin = time.monotonic()

    def now(self) -> float:
        return (time.monotonic() - self._origin) * self._time_scale

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        delay = max(0.0, float(delay))
        handle = TimerHandle(self.now() + delay, callback)
        after_ms = max(1, int(round(delay / self._time_scale * 1000)))
        after_id = self._root.after(after_ms, handle._run)
        handle._cancel_hook = lambda: self._root.after_cancel(after_id)
        return handle
