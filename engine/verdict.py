"""Verdict categorisation."""

from __future__ import annotations

from schemas.response import Verdict


def determine_verdict(score: int) -> Verdict:
    """Map an overall score to a verdict tier.

    75–100 → VERIFIED
    50–74  → SUSPICIOUS
    25–49  → NEEDS_REVIEW
     0–24  → FAKE
    """
    if score >= 75:
        return Verdict.VERIFIED
    elif score >= 50:
        return Verdict.SUSPICIOUS
    elif score >= 25:
        return Verdict.NEEDS_REVIEW
    else:
        return Verdict.FAKE
