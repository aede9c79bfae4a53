"""Spawn cadence: the decay curve and the patterns built on it.

Exponential decay maps session progress to the gap between bubbles:
overwhelming at the surface, peaceful at the bottom. With the reference
constants (40 min, 0.2s -> 120s, k=4):

    0-5 min:   several bubbles per second
    10-20 min: roughly one every half minute to minute
    30-40 min: one every ~2 min

Patterns:
    - DecayPattern: gap follows spawn_interval()
    - FixedPattern: constant gap
    - BurstPattern: N rapid spawns, then one silent pause, repeating

Usage:
    from freeflow.engine.spawn import spawn_interval

    gap = spawn_interval(1200, start_interval=0.2, end_interval=120,
                         decay_constant=4.0, session_duration=2400)
"""

import math
from abc import ABC, abstractmethod
from enum import Enum

from freeflow.engine.models import Wakeup


def spawn_interval(
    elapsed_seconds: float,
    *,
    start_interval: float,
    end_interval: float,
    decay_constant: float,
    session_duration: float,
) -> float:
    """Seconds until the next bubble at a given point in the session.

    interval = start + (end - start) * (1 - e^(-k * t)),
    where t = elapsed / duration clamped to [0, 1].

    Args:
        elapsed_seconds: Session elapsed time
        start_interval: Gap at t=0
        end_interval: Asymptotic gap as t -> 1
        decay_constant: Curve steepness (k)
        session_duration: Full session length in seconds

    Returns:
        Interval in seconds, exactly start_interval at t=0
    """
    t = min(max(elapsed_seconds / session_duration, 0.0), 1.0)
    return start_interval + (end_interval - start_interval) * (1 - math.exp(-decay_constant * t))


class SpawnPattern(ABC):
    """Decides the next wake-up of the scheduler."""

    @abstractmethod
    def next_wakeup(self, elapsed: float) -> Wakeup:
        """Return the wake-up to schedule now."""

    def on_wakeup(self, wakeup: Wakeup) -> None:
        """Advance internal state after a wake-up fires."""

    def reset(self) -> None:
        """Return to the initial state."""


class DecayPattern(SpawnPattern):
    def __init__(
        self,
        start_interval: float,
        end_interval: float,
        decay_constant: float,
        session_duration: float,
    ):
        self.start_interval = start_interval
        self.end_interval = end_interval
        self.decay_constant = decay_constant
        self.session_duration = session_duration

    def next_wakeup(self, elapsed: float) -> Wakeup:
        return Wakeup(
            delay=spawn_interval(
                elapsed,
                start_interval=self.start_interval,
                end_interval=self.end_interval,
                decay_constant=self.decay_constant,
                session_duration=self.session_duration,
            )
        )


class FixedPattern(SpawnPattern):
    def __init__(self, interval: float):
        self.interval = interval

    def next_wakeup(self, elapsed: float) -> Wakeup:
        return Wakeup(delay=self.interval)


class BurstPhase(str, Enum):
    BURSTING = "bursting"
    PAUSING = "pausing"


class BurstPattern(SpawnPattern):
    """Rapid-fire bursts separated by silent pauses.

    BURSTING(count): while count < burst_size, wake every burst_interval
    and spawn. Then PAUSING: one wake-up after pause_interval with no
    spawn, after which count resets and the next burst begins.
    """

    def __init__(self, burst_size: int, burst_interval: float, pause_interval: float):
        self.burst_size = burst_size
        self.burst_interval = burst_interval
        self.pause_interval = pause_interval
        self._count = 0

    @property
    def phase(self) -> BurstPhase:
        if self._count < self.burst_size:
            return BurstPhase.BURSTING
        return BurstPhase.PAUSING

    @property
    def count(self) -> int:
        """Spawns so far in the current burst."""
        return self._count

    def next_wakeup(self, elapsed: float) -> Wakeup:
        if self.phase is BurstPhase.BURSTING:
            return Wakeup(delay=self.burst_interval, spawns=True)
        return Wakeup(delay=self.pause_interval, spawns=False)

    def on_wakeup(self, wakeup: Wakeup) -> None:
        if wakeup.spawns:
            self._count += 1
        else:
            self._count = 0

    def reset(self) -> None:
        self._count = 0
