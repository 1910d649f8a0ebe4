"""Compartment 3 — Trustworthiness.

Language bias, emotional tone, factual consistency and source credibility.
These use simple keyword / domain matching so the compartment never needs a
network call.
"""

from __future__ import annotations

import logging
import re

from engine.extractors import count_terms
from engine.scorer import mean_score
from engine.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from schemas.response import (
    EmotionalTone,
    FactualConsistency,
    LanguageAnalysis,
    SourceCredibility,
    TrustworthinessScore,
)

logger = logging.getLogger("tricheck.engine.trustworthiness")

_NUMBER: re.Pattern[str] = re.compile(r"\d+")

LARGE_NUMBER = 1_000_000
CONSISTENCY_BASE = 85
CONSISTENCY_PENALTY = 15
CONSISTENCY_FLOOR = 20


def analyze_bias(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> int:
    """15 points per absolutist marker present, capped at 80."""
    return min(80, count_terms(text, vocabulary.bias_markers) * 15)


def detect_emotional_tone(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> EmotionalTone:
    if count_terms(text, vocabulary.tone_sensational) > 0:
        return EmotionalTone.SENSATIONAL

    positive = count_terms(text, vocabulary.tone_positive)
    negative = count_terms(text, vocabulary.tone_negative)
    if positive > negative:
        return EmotionalTone.POSITIVE
    if negative > positive:
        return EmotionalTone.NEGATIVE
    return EmotionalTone.NEUTRAL


def _exceeds_large_number(digits: str) -> bool:
    # compare digit counts first; int() rejects very long digit strings
    significant = digits.lstrip("0")
    limit = str(LARGE_NUMBER)
    if len(significant) != len(limit):
        return len(significant) > len(limit)
    return int(significant) > LARGE_NUMBER


def find_inconsistencies(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> list[str]:
    inconsistencies: list[str] = []

    # case-sensitive on purpose: "Said" in a headline is not an attribution
    attributed = any(t in text for t in vocabulary.attribution_terms)
    contradicted = any(t in text for t in vocabulary.contradiction_terms)
    if attributed and contradicted:
        inconsistencies.append("Contradictory statements detected in the same article.")

    if any(_exceeds_large_number(n) for n in _NUMBER.findall(text)):
        inconsistencies.append("Unusually large numbers that may require verification.")

    return inconsistencies


def factual_consistency(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> FactualConsistency:
    inconsistencies = find_inconsistencies(text, vocabulary)
    score = max(CONSISTENCY_FLOOR, CONSISTENCY_BASE - len(inconsistencies) * CONSISTENCY_PENALTY)
    return FactualConsistency(score=score, inconsistencies=inconsistencies)


def assess_source_credibility(
    source_url: str | None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> SourceCredibility:
    """Score the source URL against the trusted / questionable domain lists.

    90  trusted news organisation
    10  known questionable domain
    50  unknown domain, or no URL at all
    """
    if not source_url:
        return SourceCredibility(
            score=50,
            reputation="Source URL not provided. Credibility assessment limited.",
        )

    url = source_url.lower()
    if any(domain in url for domain in vocabulary.trusted_domains):
        score = 90
    elif any(domain in url for domain in vocabulary.questionable_domains):
        score = 10
    else:
        score = 50

    if any(domain in url for domain in vocabulary.reputable_domains):
        reputation = (
            "Source is from a well-established, reputable news organization "
            "with strong editorial standards."
        )
    elif score == 10:
        reputation = "Source domain is known for publishing unreliable or fabricated content."
    else:
        reputation = (
            "Source credibility requires further investigation. "
            "Domain not recognized as major news outlet."
        )
    return SourceCredibility(score=score, reputation=reputation)


def evaluate_trustworthiness(
    text: str,
    *,
    source_url: str | None = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> TrustworthinessScore:
    bias = analyze_bias(text, vocabulary)
    language = LanguageAnalysis(
        bias=bias,
        emotional_tone=detect_emotional_tone(text, vocabulary),
        credibility_score=100 - bias,
    )
    consistency = factual_consistency(text, vocabulary)
    source = assess_source_credibility(source_url, vocabulary)

    overall = mean_score([100 - bias, consistency.score, source.score])
    logger.info(
        "Trustworthiness %d (bias=%d, consistency=%d, source=%d, tone=%s)",
        overall, bias, consistency.score, source.score, language.emotional_tone.value,
    )

    return TrustworthinessScore(
        language_analysis=language,
        factual_consistency=consistency,
        source_credibility=source,
        overall_score=overall,
    )
