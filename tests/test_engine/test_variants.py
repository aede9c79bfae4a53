"""Tests for variant constants and the registry."""

from dataclasses import FrozenInstanceError, replace

import pytest

from freeflow.core.exceptions import ConfigurationError, ValidationError
from freeflow.engine.spawn import BurstPattern, DecayPattern, FixedPattern
from freeflow.engine.variants import (
    VARIANTS,
    PatternKind,
    VariantConfig,
    get_variant,
    list_variants,
)


class TestRegistry:
    def test_expected_variants(self) -> None:
        assert list_variants() == ["budget", "decay", "depth", "fixed", "spam"]

    def test_registered_variants_are_valid(self) -> None:
        for variant in VARIANTS.values():
            assert variant.validate() == []

    def test_lookup_is_case_insensitive(self) -> None:
        assert get_variant("DECAY") is VARIANTS["decay"]

    def test_unknown_variant_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown variant"):
            get_variant("snorkel")

    def test_reference_constants(self) -> None:
        decay = get_variant("decay")
        assert decay.session_duration == 2400.0
        assert decay.start_interval == 0.2
        assert decay.end_interval == 120.0
        assert decay.decay_constant == 4.0

    def test_budget_variant_quota(self) -> None:
        assert get_variant("budget").budget_quota == 5

    def test_spam_variant_burst(self) -> None:
        spam = get_variant("spam")
        assert (spam.burst_size, spam.burst_interval, spam.pause_interval) == (5, 0.2, 7.0)


class TestVariantConfig:
    def test_max_depth_defaults_to_duration_minutes(self) -> None:
        variant = VariantConfig(name="x", description="", session_duration=900.0)
        assert variant.max_depth == 15.0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"session_duration": 0},
            {"start_interval": -1},
            {"decay_constant": -0.5},
            {"decay_constant": float("nan")},
            {"decay_constant": float("inf")},
            {"start_interval": 10.0, "end_interval": 1.0},
            {"end_interval": float("inf")},
            {"bubble_lifetime": 0},
            {"depth_penalty": -2},
            {"depth_penalty": float("nan")},
            {"depth_penalty": float("inf")},
            {"budget_quota": 0},
            {"pattern": PatternKind.FIXED, "fixed_interval": 0},
            {"pattern": PatternKind.BURST, "burst_size": 0},
        ],
    )
    def test_invalid_constants_raise(self, overrides: dict) -> None:
        with pytest.raises(ValidationError):
            VariantConfig(name="bad", description="", **overrides)

    def test_build_pattern_types(self) -> None:
        assert isinstance(get_variant("decay").build_pattern(), DecayPattern)
        assert isinstance(get_variant("fixed").build_pattern(), FixedPattern)
        assert isinstance(get_variant("spam").build_pattern(), BurstPattern)

    def test_build_pattern_is_fresh(self) -> None:
        spam = get_variant("spam")
        assert spam.build_pattern() is not spam.build_pattern()

    def test_equal_start_and_end_allowed(self) -> None:
        variant = VariantConfig(name="flat", description="", start_interval=2.0, end_interval=2.0)
        assert variant.validate() == []

    def test_registry_entries_are_immutable(self) -> None:
        decay = get_variant("decay")
        with pytest.raises(FrozenInstanceError):
            decay.session_duration = 10.0  # type: ignore[misc]
        assert get_variant("decay").session_duration == 2400.0

    def test_replace_builds_new_variant(self) -> None:
        decay = get_variant("decay")
        shorter = replace(decay, session_duration=600.0, max_depth=None)
        assert shorter.max_depth == 10.0
        assert decay.max_depth == 40.0
