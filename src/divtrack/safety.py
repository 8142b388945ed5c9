"""Dividend safety score heuristic.

A fixed arithmetic rubric over dividend yield and payout ratio. The
thresholds are product policy, not a fitted model; the score is shown
next to search results and never feeds the timeline.
"""

from __future__ import annotations

from divtrack.models.security import SafetyScore

# (threshold, deduction) pairs, highest threshold first
YIELD_PENALTIES: tuple[tuple[float, float], ...] = ((8.0, 40.0), (6.0, 25.0), (4.0, 10.0))
PAYOUT_PENALTIES: tuple[tuple[float, float], ...] = ((1.0, 40.0), (0.8, 25.0), (0.6, 10.0))
UNKNOWN_PAYOUT_PENALTY = 10.0

HIGH_RATING_MIN = 70.0
MEDIUM_RATING_MIN = 40.0


def _penalty(value: float, bands: tuple[tuple[float, float], ...]) -> float:
    for threshold, deduction in bands:
        if value > threshold:
            return deduction
    return 0.0


def rate(score: float) -> str:
    if score >= HIGH_RATING_MIN:
        return "High"
    if score >= MEDIUM_RATING_MIN:
        return "Medium"
    return "Low"


def compute_safety_score(
    dividend_yield: float | None,
    payout_ratio: float | None,
) -> SafetyScore:
    """Score a dividend from 0 (unsafe) to 100 (safe).

    Args:
        dividend_yield: Annual yield in percent; None is treated as 0.
        payout_ratio: Dividends / earnings as a fraction; None if unknown.
    """
    score = 100.0
    score -= _penalty(dividend_yield or 0.0, YIELD_PENALTIES)
    if payout_ratio is None:
        score -= UNKNOWN_PAYOUT_PENALTY
    else:
        score -= _penalty(payout_ratio, PAYOUT_PENALTIES)
    score = min(max(score, 0.0), 100.0)
    return SafetyScore(score=score, payout_ratio=payout_ratio, rating=rate(score))
