"""Dive depth - progress that grows with time and shrinks on taps.

Natural growth is one metre per minute of elapsed time, capped at
max_depth. A tap on a live bubble costs a fixed penalty.

Invariants (after every mutation):
    0 <= current <= max_depth
    deepest == max(deepest, current)

Re-ascend: by default growth is a function of elapsed time only, so the
next tick lifts depth straight back to elapsed/60 and a penalty lasts
one tick at most. With penalty_persists=True the penalties accumulate as
a debt that growth never repays.
"""

from freeflow.core.exceptions import ValidationError
from freeflow.core.logging import get_logger

logger = get_logger(__name__)

SECONDS_PER_METRE = 60.0


class DepthState:
    """Current and deepest depth for one dive."""

    def __init__(self, max_depth: float, penalty: float = 0.0, penalty_persists: bool = False):
        if max_depth <= 0:
            raise ValidationError(f"max_depth must be positive, got {max_depth}")
        if penalty < 0:
            raise ValidationError(f"penalty cannot be negative, got {penalty}")
        self.max_depth = float(max_depth)
        self.penalty = float(penalty)
        self.penalty_persists = penalty_persists
        self._current = 0.0
        self._deepest = 0.0
        self._debt = 0.0

    @property
    def current(self) -> float:
        return self._current

    @property
    def deepest(self) -> float:
        """High-water mark for the dive."""
        return self._deepest

    @property
    def reached_bottom(self) -> bool:
        return self._current >= self.max_depth

    def update(self, elapsed_seconds: float) -> float:
        """Apply natural growth for the elapsed time. Never lowers depth.

        Returns:
            New current depth
        """
        target = elapsed_seconds / SECONDS_PER_METRE
        if self.penalty_persists:
            target -= self._debt
        self._set(max(self._current, target))
        return self._current

    def apply_penalty(self) -> float:
        """Subtract the tap penalty, clamped at the surface.

        Returns:
            New current depth
        """
        before = self._current
        self._set(before - self.penalty)
        self._debt += before - self._current
        logger.debug(
            "Depth penalty applied",
            extra={"context": {"before": round(before, 2), "after": round(self._current, 2)}},
        )
        return self._current

    def _set(self, value: float) -> None:
        clamped = min(max(value, 0.0), self.max_depth)
        if clamped != value:
            logger.debug("Depth clamped", extra={"context": {"value": value, "clamped": clamped}})
        self._current = clamped
        self._deepest = max(self._deepest, clamped)
