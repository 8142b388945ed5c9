"""Tests for the dividend safety score rubric."""

import pytest

from divtrack.safety import compute_safety_score, rate


class TestComputeSafetyScore:
    def test_safe_dividend(self):
        result = compute_safety_score(2.5, 0.4)
        assert result.score == 100
        assert result.rating == "High"
        assert result.payout_ratio == 0.4

    def test_unknown_payout_penalized(self):
        assert compute_safety_score(2.5, None).score == 90

    @pytest.mark.parametrize("dividend_yield,expected", [
        (4.0, 100), (4.5, 90), (6.5, 75), (9.0, 60),
    ])
    def test_yield_bands(self, dividend_yield, expected):
        assert compute_safety_score(dividend_yield, 0.3).score == expected

    @pytest.mark.parametrize("payout,expected", [
        (0.6, 100), (0.7, 90), (0.9, 75), (1.2, 60),
    ])
    def test_payout_bands(self, payout, expected):
        assert compute_safety_score(1.0, payout).score == expected

    def test_worst_case_is_low(self):
        result = compute_safety_score(12.0, 1.5)
        assert result.score == 20
        assert result.rating == "Low"

    def test_missing_yield_treated_as_zero(self):
        assert compute_safety_score(None, 0.2).score == 100


class TestRate:
    @pytest.mark.parametrize("score,rating", [
        (70, "High"), (69.9, "Medium"), (40, "Medium"), (39, "Low"),
    ])
    def test_thresholds(self, score, rating):
        assert rate(score) == rating
