"""Tests for the subscription tier catalog."""

import dataclasses

import pytest

from vibe_monitor.models.tier import (
    RATE_LIMIT_TIER_ALIASES,
    TIERS,
    TierLimits,
    get_tier_limits,
    resolve_tier_name,
)


class TestGetTierLimits:
    @pytest.mark.parametrize("name", ["free", "pro", "max_5x", "max_20x"])
    def test_canonical_names(self, name):
        assert get_tier_limits(name).tier == name

    def test_max_5x_values(self):
        limits = get_tier_limits("max_5x")
        assert limits.cycle_prompts_min == 50
        assert limits.cycle_prompts_max == 200
        assert limits.weekly_primary_max == 280
        assert limits.weekly_secondary_max == 35
        assert limits.total_weekly_max == 315

    @pytest.mark.parametrize("alias", ["max5", "MAX5X", "max_5x", " Max5x "])
    def test_5x_aliases_resolve_identically(self, alias):
        assert get_tier_limits(alias) == TIERS["max_5x"]

    @pytest.mark.parametrize("alias", ["max20", "max20x", "MAX_20X", "default_claude_max_20x"])
    def test_20x_aliases(self, alias):
        assert get_tier_limits(alias) == TIERS["max_20x"]

    def test_billing_codes(self):
        assert get_tier_limits("team").tier == "max_5x"
        assert get_tier_limits("enterprise").tier == "max_20x"

    @pytest.mark.parametrize("name", ["", None, "platinum", "max_100x", "auto"])
    def test_unknown_falls_back_to_pro(self, name):
        assert get_tier_limits(name) == TIERS["pro"]

    def test_every_alias_points_at_a_tier(self):
        for target in RATE_LIMIT_TIER_ALIASES.values():
            assert target in TIERS


class TestTierLimits:
    def test_secondary_access(self):
        assert not get_tier_limits("pro").has_secondary_access
        assert not get_tier_limits("free").has_secondary_access
        assert get_tier_limits("max_5x").has_secondary_access
        assert get_tier_limits("max_20x").has_secondary_access

    def test_total_weekly_max(self):
        assert get_tier_limits("pro").total_weekly_max == 80
        assert get_tier_limits("max_20x").total_weekly_max == 520

    def test_limits_are_immutable(self):
        limits = get_tier_limits("pro")
        with pytest.raises(dataclasses.FrozenInstanceError):
            limits.weekly_primary_max = 1000

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            TIERS["pro"] = TierLimits("pro", 1, 2, 3, 4)


class TestResolveTierName:
    def test_resolves_alias(self):
        assert resolve_tier_name("max20") == "max_20x"

    def test_default(self):
        assert resolve_tier_name("unknown") == "pro"
