"""Bubble budget - a fixed number of tolerated taps per dive.

Each tap on a live bubble spends one unit. At zero the dive ends, and
any further tap is ignored rather than driving the counter negative.
"""

from freeflow.core.exceptions import ValidationError
from freeflow.core.logging import get_logger

logger = get_logger(__name__)


class BubbleBudget:
    """Counts down from quota to zero."""

    def __init__(self, quota: int):
        if quota < 1:
            raise ValidationError(f"Budget quota must be at least 1, got {quota}")
        self.quota = quota
        self._remaining = quota

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def used(self) -> int:
        return self.quota - self._remaining

    @property
    def exhausted(self) -> bool:
        return self._remaining == 0

    def consume(self) -> bool:
        """Spend one unit.

        Returns True if spent, False if the budget was already empty.
        """
        if self._remaining == 0:
            logger.warning("Tap ignored, budget already exhausted")
            return False
        self._remaining -= 1
        logger.debug(
            "Budget consumed",
            extra={"context": {"remaining": self._remaining, "quota": self.quota}},
        )
        return True
