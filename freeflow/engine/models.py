"""Data models for FreeFlow dives.

Enums:
    - SchedulerState: IDLE / ARMED
    - DismissReason: Why a bubble left the screen
    - DiveOutcome: How a dive ended

Dataclasses:
    - SpawnEvent: One simulated notification
    - Wakeup: Next timer a spawn pattern asks for
    - Tier: Completion band
    - DiveSummary: Final numbers for a dive
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class SchedulerState(str, Enum):
    IDLE = "idle"
    ARMED = "armed"


class DismissReason(str, Enum):
    EXPIRED = "expired"  # Floated off after its lifetime
    TAPPED = "tapped"  # User gave in and checked it


class DiveOutcome(str, Enum):
    COMPLETED = "completed"  # Session duration elapsed
    BOTTOM_REACHED = "bottom_reached"  # Depth hit max_depth
    BUDGET_EXHAUSTED = "budget_exhausted"  # Ran out of tolerated taps
    ABANDONED = "abandoned"  # Screen closed early


def _new_event_id() -> str:
    return uuid.uuid4().hex


@dataclass
class SpawnEvent:
    """A simulated notification bubble.

    Attributes:
        created_at: Session elapsed seconds at spawn
        sequence: 1-based spawn number within the session
        id: Unique token matching the spawn to its dismissal
    """

    created_at: float
    sequence: int
    id: str = field(default_factory=_new_event_id)


@dataclass(frozen=True)
class Wakeup:
    """Next timer requested by a spawn pattern.

    Attributes:
        delay: Seconds until the wake-up
        spawns: Whether a bubble appears when it fires
    """

    delay: float
    spawns: bool = True


@dataclass(frozen=True)
class Tier:
    """Completion classification band."""

    name: str
    label: str
    message: str
    color: str


@dataclass
class DiveSummary:
    """Final numbers for a dive, shown on the completion screen."""

    variant: str
    outcome: DiveOutcome
    elapsed_seconds: float
    max_depth: float
    spawns: int
    taps: int
    tier: Tier
    budget_remaining: Optional[int] = None
    budget_quota: Optional[int] = None

    @property
    def elapsed_display(self) -> str:
        """Elapsed time as MM:SS."""
        return format_elapsed(self.elapsed_seconds)


def format_elapsed(seconds: float) -> str:
    """Format seconds as MM:SS. Negative input shows 00:00."""
    seconds = max(0, int(seconds))
    m, s = divmod(seconds, 60)
    return f"{m:02d}:{s:02d}"
