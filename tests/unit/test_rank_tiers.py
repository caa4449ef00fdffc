"""Unit tests for rank tier lookup."""
import math

import pytest

from app.services.ranking import RANK_TIERS, next_tier, tier_of


class TestTierOf:
    def test_zero_is_lowest_tier(self):
        assert tier_of(0) == RANK_TIERS[0]

    @pytest.mark.parametrize("points", [-5, -1, math.nan, None, "abc", float("-inf")])
    def test_invalid_input_coerces_to_lowest(self, points):
        assert tier_of(points) == RANK_TIERS[0]

    def test_exact_thresholds(self):
        for tier in RANK_TIERS:
            assert tier_of(tier.threshold) == tier

    def test_just_below_threshold_stays_in_previous_tier(self):
        for lower, upper in zip(RANK_TIERS, RANK_TIERS[1:]):
            assert tier_of(upper.threshold - 1) == lower

    def test_huge_score_is_top_tier(self):
        assert tier_of(10**9) == RANK_TIERS[-1]
        assert tier_of(float("inf")) == RANK_TIERS[-1]
        assert tier_of(10**400) == RANK_TIERS[-1]

    def test_huge_negative_score_is_lowest_tier(self):
        assert tier_of(-(10**400)) == RANK_TIERS[0]

    def test_monotonic_non_decreasing(self):
        order = {tier.name: i for i, tier in enumerate(RANK_TIERS)}
        previous = -1
        for points in range(0, 1500):
            current = order[tier_of(points).name]
            assert current >= previous
            previous = current

    def test_numeric_strings_accepted(self):
        assert tier_of("300").name == "Gold"


class TestNextTier:
    def test_next_from_bronze_is_silver(self):
        assert next_tier(0).name == "Silver"

    def test_top_tier_has_no_next(self):
        assert next_tier(RANK_TIERS[-1].threshold) is None

    def test_thresholds_are_ascending(self):
        thresholds = [t.threshold for t in RANK_TIERS]
        assert thresholds == sorted(thresholds)
