"""Spawn scheduler - the restart-on-wake loop behind every dive.

Two states:
    IDLE  -> no session, nothing pending
    ARMED -> exactly one wake-up pending on the host

On each wake-up the scheduler either completes the session (elapsed past
the duration) or spawns a bubble, asks its pattern for the next gap and
re-arms. Every bubble is auto-dismissed after its lifetime unless it is
dismissed first.

stop() cancels every handle it owns, so no sink sees another event once
it returns.
"""

from typing import Callable, Optional

from freeflow.core.logging import get_logger
from freeflow.core.timers import TimerHandle, TimerHost
from freeflow.engine.models import DismissReason, SchedulerState, SpawnEvent, Wakeup
from freeflow.engine.spawn import SpawnPattern

logger = get_logger(__name__)

# Seconds a bubble floats before leaving on its own
DEFAULT_BUBBLE_LIFETIME = 5.0


class SpawnScheduler:
    """Schedules spawn events on a host timer facility.

    Sinks are registered with on_spawn(), on_dismiss() and on_complete();
    one callback per slot, matching how the GUI wires them.
    """

    def __init__(
        self,
        host: TimerHost,
        pattern: SpawnPattern,
        session_duration: float,
        bubble_lifetime: float = DEFAULT_BUBBLE_LIFETIME,
    ):
        self._host = host
        self._pattern = pattern
        self._session_duration = session_duration
        self._bubble_lifetime = bubble_lifetime

        self._state = SchedulerState.IDLE
        self._start_time: Optional[float] = None
        self._pending: Optional[TimerHandle] = None
        self._pending_wakeup: Optional[Wakeup] = None
        self._live: list[SpawnEvent] = []
        self._expiry: dict[str, TimerHandle] = {}
        self._spawn_count = 0

        self._spawn_callback: Optional[Callable[[SpawnEvent], None]] = None
        self._dismiss_callback: Optional[Callable[[SpawnEvent, DismissReason], None]] = None
        self._complete_callback: Optional[Callable[[], None]] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Record the start time and arm the first wake-up.

        Returns True if started, False if already armed.
        """
        if self._state is SchedulerState.ARMED:
            logger.warning("Scheduler already armed")
            return False

        self._start_time = self._host.now()
        self._spawn_count = 0
        self._pattern.reset()
        self._state = SchedulerState.ARMED
        self._arm(0.0)

        logger.info(
            "Scheduler started",
            extra={
                "context": {
                    "duration": self._session_duration,
                    "first_delay": self._pending_wakeup.delay if self._pending_wakeup else None,
                }
            },
        )
        return True

    def stop(self) -> bool:
        """Cancel everything pending and drop live events.

        Returns True if the scheduler was armed.
        """
        was_armed = self._state is SchedulerState.ARMED

        if self._pending is not None:
            self._pending.cancel()
        self._pending = None
        self._pending_wakeup = None

        for handle in self._expiry.values():
            handle.cancel()
        self._expiry.clear()
        self._live.clear()

        self._state = SchedulerState.IDLE
        if was_armed:
            logger.info(
                "Scheduler stopped",
                extra={"context": {"elapsed": round(self.elapsed(), 2), "spawns": self._spawn_count}},
            )
        return was_armed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> SchedulerState:
        return self._state

    def is_armed(self) -> bool:
        return self._state is SchedulerState.ARMED

    @property
    def live_events(self) -> list[SpawnEvent]:
        """Bubbles currently on screen, oldest first."""
        return list(self._live)

    @property
    def spawn_count(self) -> int:
        return self._spawn_count

    @property
    def session_duration(self) -> float:
        return self._session_duration

    def elapsed(self) -> float:
        """Seconds since start(), or 0 if never started."""
        if self._start_time is None:
            return 0.0
        return self._host.now() - self._start_time

    def get_event(self, event_id: str) -> Optional[SpawnEvent]:
        for event in self._live:
            if event.id == event_id:
                return event
        return None

    # ------------------------------------------------------------------
    # Dismissal
    # ------------------------------------------------------------------

    def dismiss(self, event_id: str, reason: DismissReason = DismissReason.TAPPED) -> bool:
        """Remove a live event and notify the dismiss sink.

        Returns False for an unknown or already-dismissed id.
        """
        event = self.get_event(event_id)
        if event is None:
            return False

        self._live.remove(event)
        handle = self._expiry.pop(event_id, None)
        if handle is not None:
            handle.cancel()

        logger.debug(
            "Bubble dismissed",
            extra={"context": {"event_id": event_id, "reason": reason.value}},
        )
        if self._dismiss_callback:
            self._dismiss_callback(event, reason)
        return True

    # ------------------------------------------------------------------
    # Sinks
    # ------------------------------------------------------------------

    def on_spawn(self, callback: Callable[[SpawnEvent], None]) -> None:
        """Register callback for new bubbles."""
        self._spawn_callback = callback

    def on_dismiss(self, callback: Callable[[SpawnEvent, DismissReason], None]) -> None:
        """Register callback for bubbles leaving the screen."""
        self._dismiss_callback = callback

    def on_complete(self, callback: Callable[[], None]) -> None:
        """Register callback for the session running its full duration."""
        self._complete_callback = callback

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _arm(self, elapsed: float) -> None:
        wakeup = self._pattern.next_wakeup(elapsed)
        self._pending_wakeup = wakeup
        self._pending = self._host.call_later(wakeup.delay, self._on_wakeup)

    def _on_wakeup(self) -> None:
        if self._state is not SchedulerState.ARMED:
            return

        wakeup = self._pending_wakeup
        self._pending = None
        self._pending_wakeup = None
        assert wakeup is not None

        elapsed = self.elapsed()
        if elapsed >= self._session_duration:
            self._complete()
            return

        self._pattern.on_wakeup(wakeup)
        if wakeup.spawns:
            self._spawn(elapsed)

        # A sink may have stopped us
        if self._state is SchedulerState.ARMED:
            self._arm(elapsed)

    def _spawn(self, elapsed: float) -> None:
        self._spawn_count += 1
        event = SpawnEvent(created_at=elapsed, sequence=self._spawn_count)
        self._live.append(event)
        self._expiry[event.id] = self._host.call_later(
            self._bubble_lifetime,
            lambda: self.dismiss(event.id, DismissReason.EXPIRED),
        )

        logger.debug(
            "Bubble spawned",
            extra={
                "context": {
                    "event_id": event.id,
                    "sequence": event.sequence,
                    "elapsed": round(elapsed, 2),
                    "live": len(self._live),
                }
            },
        )
        if self._spawn_callback:
            self._spawn_callback(event)

    def _complete(self) -> None:
        self.stop()
        logger.info(
            "Scheduler reached session duration",
            extra={"context": {"spawns": self._spawn_count}},
        )
        if self._complete_callback:
            self._complete_callback()
