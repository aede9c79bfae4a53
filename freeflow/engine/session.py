"""Dive session - one timed run from the surface to completion.

The session owns everything a dive needs: the spawn scheduler, the host
tick that drives depth and the clock display, the depth and budget
counters, and the tap count. Nothing is held as ambient view state; the
GUI and the headless runner both drive the same object.

Ending conditions:
    - elapsed reaches the session duration        -> COMPLETED
    - depth reaches max_depth before that         -> BOTTOM_REACHED
    - the last budget unit is spent on a tap      -> BUDGET_EXHAUSTED
    - end() called by the host (screen closed)    -> ABANDONED

Usage:
    from freeflow.core.timers import VirtualTimerHost
    from freeflow.engine.session import DiveSession
    from freeflow.engine.variants import get_variant

    host = VirtualTimerHost()
    session = DiveSession(get_variant("decay"), host)
    session.on_end(print)
    session.start()
    host.run_until_idle()
"""

from typing import Callable, Optional

from freeflow.core.exceptions import SessionError
from freeflow.core.logging import get_logger
from freeflow.core.timers import TimerHandle, TimerHost
from freeflow.engine.budget import BubbleBudget
from freeflow.engine.depth import DepthState
from freeflow.engine.models import (
    DismissReason,
    DiveOutcome,
    DiveSummary,
    SpawnEvent,
    format_elapsed,
)
from freeflow.engine.scheduler import SpawnScheduler
from freeflow.engine.tiers import classify
from freeflow.engine.variants import VariantConfig

logger = get_logger(__name__)


class DiveSession:
    """A single dive, start to finish."""

    def __init__(self, variant: VariantConfig, host: TimerHost):
        self.variant = variant
        self._host = host

        self._scheduler = SpawnScheduler(
            host,
            variant.build_pattern(),
            session_duration=variant.session_duration,
            bubble_lifetime=variant.bubble_lifetime,
        )
        self._scheduler.on_spawn(self._handle_spawn)
        self._scheduler.on_dismiss(self._handle_dismiss)
        self._scheduler.on_complete(self._handle_complete)

        assert variant.max_depth is not None
        self.depth = DepthState(
            max_depth=variant.max_depth,
            penalty=variant.depth_penalty,
            penalty_persists=variant.penalty_persists,
        )
        self.budget: Optional[BubbleBudget] = (
            BubbleBudget(variant.budget_quota) if variant.budget_quota else None
        )

        self._tick_handle: Optional[TimerHandle] = None
        self._started = False
        self._ended = False
        self._outcome: Optional[DiveOutcome] = None
        self._end_elapsed = 0.0
        self._taps = 0

        self._spawn_callback: Optional[Callable[[SpawnEvent], None]] = None
        self._dismiss_callback: Optional[Callable[[SpawnEvent, DismissReason], None]] = None
        self._tick_callback: Optional[Callable[[float, float], None]] = None
        self._end_callback: Optional[Callable[[DiveSummary], None]] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Begin the dive.

        Returns True if started, False if already running.

        Raises:
            SessionError: If the dive already ended
        """
        if self._ended:
            raise SessionError("Dive already finished; create a new session")
        if self._started:
            logger.warning("Dive already in progress")
            return False

        self._started = True
        self._scheduler.start()
        self._schedule_tick()
        logger.info(
            "Dive started",
            extra={
                "context": {
                    "variant": self.variant.name,
                    "duration": self.variant.session_duration,
                    "budget": self.variant.budget_quota,
                }
            },
        )
        return True

    def end(self, outcome: DiveOutcome = DiveOutcome.ABANDONED) -> DiveSummary:
        """Stop the dive and record how it ended.

        Calling end() on a finished dive returns the existing summary.
        """
        if self._ended:
            return self.summary()

        self._end_elapsed = min(self._scheduler.elapsed(), self.variant.session_duration)
        self._ended = True
        self._outcome = outcome

        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
        self._scheduler.stop()

        summary = self.summary()
        logger.info(
            "Dive ended",
            extra={
                "context": {
                    "variant": self.variant.name,
                    "outcome": outcome.value,
                    "elapsed": round(self._end_elapsed, 1),
                    "max_depth": round(summary.max_depth, 2),
                    "taps": self._taps,
                    "tier": summary.tier.name,
                }
            },
        )
        if self._end_callback:
            self._end_callback(summary)
        return summary

    def is_active(self) -> bool:
        return self._started and not self._ended

    def is_ended(self) -> bool:
        return self._ended

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def record_interaction(self, event_id: str) -> bool:
        """Handle a tap on a live bubble.

        Returns True if the tap counted, False if it was ignored (dive not
        running, or the bubble is already gone).
        """
        if not self.is_active():
            logger.debug("Tap ignored, dive not active", extra={"context": {"event_id": event_id}})
            return False
        if not self._scheduler.dismiss(event_id, DismissReason.TAPPED):
            return False

        self._taps += 1
        if self.variant.depth_penalty > 0:
            self.depth.apply_penalty()

        logger.info(
            "Bubble tapped",
            extra={
                "context": {
                    "taps": self._taps,
                    "depth": round(self.depth.current, 2),
                    "budget": self.budget.remaining if self.budget else None,
                }
            },
        )

        if self.budget is not None:
            self.budget.consume()
            if self.budget.exhausted:
                self.end(DiveOutcome.BUDGET_EXHAUSTED)
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def outcome(self) -> Optional[DiveOutcome]:
        return self._outcome

    @property
    def taps(self) -> int:
        return self._taps

    @property
    def spawn_count(self) -> int:
        return self._scheduler.spawn_count

    @property
    def live_events(self) -> list[SpawnEvent]:
        return self._scheduler.live_events

    @property
    def scheduler(self) -> SpawnScheduler:
        return self._scheduler

    def elapsed(self) -> float:
        """Seconds into the dive; frozen once the dive ends."""
        if self._ended:
            return self._end_elapsed
        return self._scheduler.elapsed()

    def elapsed_display(self) -> str:
        return format_elapsed(self.elapsed())

    def summary(self) -> DiveSummary:
        """Final numbers for the completion screen.

        Raises:
            SessionError: If the dive has not ended yet
        """
        if not self._ended or self._outcome is None:
            raise SessionError("Dive still in progress")
        return DiveSummary(
            variant=self.variant.name,
            outcome=self._outcome,
            elapsed_seconds=self._end_elapsed,
            max_depth=self.depth.deepest,
            spawns=self._scheduler.spawn_count,
            taps=self._taps,
            tier=classify(self.depth.deepest),
            budget_remaining=self.budget.remaining if self.budget else None,
            budget_quota=self.budget.quota if self.budget else None,
        )

    # ------------------------------------------------------------------
    # Sinks
    # ------------------------------------------------------------------

    def on_spawn(self, callback: Callable[[SpawnEvent], None]) -> None:
        self._spawn_callback = callback

    def on_dismiss(self, callback: Callable[[SpawnEvent, DismissReason], None]) -> None:
        self._dismiss_callback = callback

    def on_tick(self, callback: Callable[[float, float], None]) -> None:
        """Register callback(elapsed_seconds, current_depth) for each host tick."""
        self._tick_callback = callback

    def on_end(self, callback: Callable[[DiveSummary], None]) -> None:
        self._end_callback = callback

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _schedule_tick(self) -> None:
        self._tick_handle = self._host.call_later(self.variant.tick_interval, self._on_tick)

    def _on_tick(self) -> None:
        self._tick_handle = None
        if not self.is_active():
            return

        elapsed = self._scheduler.elapsed()
        self.depth.update(min(elapsed, self.variant.session_duration))
        if self._tick_callback:
            self._tick_callback(elapsed, self.depth.current)

        # The tick callback may have ended the dive
        if not self.is_active():
            return
        if elapsed >= self.variant.session_duration:
            self.end(DiveOutcome.COMPLETED)
        elif self.depth.reached_bottom:
            self.end(DiveOutcome.BOTTOM_REACHED)
        else:
            self._schedule_tick()

    def _handle_spawn(self, event: SpawnEvent) -> None:
        if self._spawn_callback:
            self._spawn_callback(event)

    def _handle_dismiss(self, event: SpawnEvent, reason: DismissReason) -> None:
        if self._dismiss_callback:
            self._dismiss_callback(event, reason)

    def _handle_complete(self) -> None:
        if self.is_active():
            self.depth.update(self.variant.session_duration)
            self.end(DiveOutcome.COMPLETED)
