"""Dive variants - named sets of constants for each prototype rule set.

    decay   40 min, 0.2s -> 120s decay, depth only
    depth   25 min, gentler decay, each tap costs 2 m of depth
    budget  25 min, gentler decay, dive ends after 5 taps
    spam    40 min, bursts of 5 bubbles in 1s then 7s of quiet
    fixed   40 min, one bubble every 3s

Usage:
    from freeflow.engine.variants import get_variant

    variant = get_variant("decay")
    pattern = variant.build_pattern()
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from freeflow.core.exceptions import ConfigurationError, ValidationError
from freeflow.engine.depth import SECONDS_PER_METRE
from freeflow.engine.spawn import BurstPattern, DecayPattern, FixedPattern, SpawnPattern


class PatternKind(str, Enum):
    DECAY = "decay"
    FIXED = "fixed"
    BURST = "burst"


@dataclass(frozen=True)
class VariantConfig:
    """Constants for one dive variant.

    Attributes:
        name: Registry key
        description: One-line blurb for the onboarding screen
        pattern: Which spawn pattern drives the scheduler
        session_duration: Target dive length in seconds
        start_interval: Decay gap at t=0
        end_interval: Decay gap as t -> 1
        decay_constant: Decay steepness
        fixed_interval: Gap for the fixed pattern
        burst_size: Spawns per burst
        burst_interval: Gap between spawns inside a burst
        pause_interval: Quiet gap after each burst
        bubble_lifetime: Seconds before an untouched bubble floats away
        tick_interval: Host tick driving depth and the clock display
        max_depth: Depth cap; defaults to one metre per minute of duration
        depth_penalty: Metres lost per tap
        penalty_persists: Keep penalties across ticks instead of re-ascending
        budget_quota: Taps tolerated before the dive ends (None = unlimited)
    """

    name: str
    description: str
    pattern: PatternKind = PatternKind.DECAY
    session_duration: float = 2400.0
    start_interval: float = 0.2
    end_interval: float = 120.0
    decay_constant: float = 4.0
    fixed_interval: float = 3.0
    burst_size: int = 5
    burst_interval: float = 0.2
    pause_interval: float = 7.0
    bubble_lifetime: float = 5.0
    tick_interval: float = 1.0
    max_depth: Optional[float] = None
    depth_penalty: float = 0.0
    penalty_persists: bool = False
    budget_quota: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_depth is None:
            object.__setattr__(self, "max_depth", self.session_duration / SECONDS_PER_METRE)
        issues = self.validate()
        if issues:
            raise ValidationError(f"Invalid variant '{self.name}': {'; '.join(issues)}")

    def validate(self) -> list[str]:
        """Return a list of problems with the constants (empty if valid)."""
        issues: list[str] = []

        def positive(field_name: str) -> None:
            value = getattr(self, field_name)
            if not (isinstance(value, (int, float)) and math.isfinite(value) and value > 0):
                issues.append(f"{field_name} must be positive, got {value}")

        def non_negative(field_name: str) -> None:
            value = getattr(self, field_name)
            if not (isinstance(value, (int, float)) and math.isfinite(value) and value >= 0):
                issues.append(f"{field_name} must be a finite non-negative number, got {value}")

        for field_name in ("session_duration", "bubble_lifetime", "tick_interval", "max_depth"):
            positive(field_name)

        if self.pattern is PatternKind.DECAY:
            positive("start_interval")
            positive("end_interval")
            non_negative("decay_constant")
            if self.end_interval < self.start_interval:
                issues.append(
                    f"end_interval ({self.end_interval}) cannot be shorter than "
                    f"start_interval ({self.start_interval})"
                )
        elif self.pattern is PatternKind.FIXED:
            positive("fixed_interval")
        elif self.pattern is PatternKind.BURST:
            positive("burst_interval")
            positive("pause_interval")
            if self.burst_size < 1:
                issues.append(f"burst_size must be at least 1, got {self.burst_size}")

        non_negative("depth_penalty")
        if self.budget_quota is not None and self.budget_quota < 1:
            issues.append(f"budget_quota must be at least 1, got {self.budget_quota}")

        return issues

    def build_pattern(self) -> SpawnPattern:
        """Create a fresh spawn pattern for one session."""
        if self.pattern is PatternKind.FIXED:
            return FixedPattern(self.fixed_interval)
        if self.pattern is PatternKind.BURST:
            return BurstPattern(self.burst_size, self.burst_interval, self.pause_interval)
        return DecayPattern(
            start_interval=self.start_interval,
            end_interval=self.end_interval,
            decay_constant=self.decay_constant,
            session_duration=self.session_duration,
        )


VARIANTS: dict[str, VariantConfig] = {
    "decay": VariantConfig(
        name="decay",
        description="40-minute dive, 0m to 40m. Exponential decay bubble spawn.",
        pattern=PatternKind.DECAY,
        session_duration=2400.0,
        start_interval=0.2,
        end_interval=120.0,
        decay_constant=4.0,
        max_depth=40.0,
    ),
    "depth": VariantConfig(
        name="depth",
        description="25-minute dive. Every bubble you check costs 2m of depth.",
        pattern=PatternKind.DECAY,
        session_duration=25 * 60.0,
        start_interval=0.5,
        end_interval=60.0,
        decay_constant=3.0,
        max_depth=25.0,
        depth_penalty=2.0,
    ),
    "budget": VariantConfig(
        name="budget",
        description="25-minute dive. Check five bubbles and you surface.",
        pattern=PatternKind.DECAY,
        session_duration=25 * 60.0,
        start_interval=0.5,
        end_interval=60.0,
        decay_constant=3.0,
        max_depth=25.0,
        budget_quota=5,
    ),
    "spam": VariantConfig(
        name="spam",
        description="Stress test. Five notifications in one second, then seven seconds of quiet.",
        pattern=PatternKind.BURST,
        session_duration=2400.0,
        burst_size=5,
        burst_interval=0.2,
        pause_interval=7.0,
        max_depth=40.0,
    ),
    "fixed": VariantConfig(
        name="fixed",
        description="Steady drip. One notification every three seconds.",
        pattern=PatternKind.FIXED,
        session_duration=2400.0,
        fixed_interval=3.0,
        max_depth=40.0,
    ),
}


def get_variant(name: str) -> VariantConfig:
    """Look up a variant by name.

    Raises:
        ConfigurationError: If no variant has that name
    """
    try:
        return VARIANTS[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown variant: {name}. Available: {', '.join(list_variants())}"
        ) from None


def list_variants() -> list[str]:
    """Registered variant names, sorted."""
    return sorted(VARIANTS)
