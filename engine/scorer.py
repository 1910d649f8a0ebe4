"""Numerical aggregation shared by every compartment.

Deterministic, no collaborator calls.  Rounding is half-up so ``x.5`` never
depends on the parity of ``x``.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


def mean_score(scores: list[int]) -> int:
    """Rounded arithmetic mean of sub-scores, clamped to 0-100."""
    if not scores:
        raise ValueError("mean_score needs at least one sub-score")
    return int(clamp(round_half_up(sum(scores) / len(scores))))


def compute_overall_score(relatability: int, legitimacy: int, trustworthiness: int) -> int:
    """Overall score = rounded mean of the three compartment scores.

    Relatability      → location, time, event plausibility (+ feed signal)
    Legitimacy        → outlet matches and cross-reference
    Trustworthiness   → language bias, factual consistency, source credibility
    """
    return mean_score([relatability, legitimacy, trustworthiness])
