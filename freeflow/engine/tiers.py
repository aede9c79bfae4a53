"""Completion tiers - what the final depth says about the dive.

Bands are half-open, [lower, upper):

    [0, 10)   Shallows
    [10, 20)  Reef
    [20, 30)  Twilight
    [30, inf) Abyss

Positive infinity is Abyss. Anything else (negative, NaN) lands in the
default band, Shallows.
"""

from typing import Optional

from freeflow.engine.models import Tier

SHALLOWS = Tier(
    name="shallows",
    label="Shallow Water",
    message="You got your feet wet. Every dive starts at the surface.",
    color="#7fdbff",
)
REEF = Tier(
    name="reef",
    label="Reef Explorer",
    message="The buzz faded and you kept going. That is the habit shifting.",
    color="#2ecc71",
)
TWILIGHT = Tier(
    name="twilight",
    label="Twilight Diver",
    message="Most notifications never reach this deep. Neither did you check them.",
    color="#3d5afe",
)
ABYSS = Tier(
    name="abyss",
    label="Abyss Master",
    message="Complete calm. Nothing on the surface could pull you back up.",
    color="#8e44ad",
)

# (lower bound inclusive, upper bound exclusive or None for open-ended, tier)
TIER_BANDS: list[tuple[float, Optional[float], Tier]] = [
    (0.0, 10.0, SHALLOWS),
    (10.0, 20.0, REEF),
    (20.0, 30.0, TWILIGHT),
    (30.0, None, ABYSS),
]

DEFAULT_TIER = SHALLOWS


def classify(score: float) -> Tier:
    """Map a final depth (or equivalent score) to its tier."""
    for lower, upper, tier in TIER_BANDS:
        if lower <= score and (upper is None or score < upper):
            return tier
    return DEFAULT_TIER


def all_tiers() -> list[Tier]:
    """Tiers from shallowest to deepest."""
    return [tier for _, _, tier in TIER_BANDS]
