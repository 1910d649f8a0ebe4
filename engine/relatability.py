"""Compartment 1 — Relatability.

Does the text describe a plausible place, time and event?  The optional feed
signal adds a fourth sub-score; whether it is in play is decided by the
caller through ``feed_signal_enabled``, never inferred.
"""

from __future__ import annotations

import logging
from datetime import date

from engine.extractors import count_terms, first_sentence
from engine.scorer import mean_score
from engine.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from schemas.response import (
    EventCheck,
    ExtractedFeatures,
    FeedMatch,
    FeedVerification,
    LocationCheck,
    RelatabilityScore,
    TimestampCheck,
)

logger = logging.getLogger("tricheck.engine.relatability")

FEED_MIN_HITS = 2
FEED_MIN_WORDS = 30


def event_context(word_count: int) -> str:
    if word_count < 50:
        return "Limited context provided. Event details are sparse."
    if word_count < 150:
        return "Moderate context provided. Some event details available for verification."
    return "Comprehensive context provided. Sufficient detail for thorough event verification."


def check_location(features: ExtractedFeatures) -> LocationCheck:
    if features.locations:
        return LocationCheck(
            score=75,
            details=(
                f"Located {len(features.locations)} geographical reference(s) that appear "
                "consistent with known locations."
            ),
            extracted_locations=list(features.locations),
        )
    return LocationCheck(
        score=30,
        details="Limited geographical context found. Location verification challenging.",
    )


def check_timestamp(features: ExtractedFeatures) -> TimestampCheck:
    if features.dates:
        return TimestampCheck(
            score=80,
            details="Temporal references are consistent and plausible with current timeframe.",
            extracted_dates=list(features.dates),
            consistency=True,
        )
    return TimestampCheck(
        score=40,
        details="Limited or inconsistent temporal context found.",
        consistency=False,
    )


def check_event(features: ExtractedFeatures) -> EventCheck:
    context = event_context(features.word_count)
    if features.has_sensational_terms:
        return EventCheck(
            score=45,
            details="Event contains sensational claims that require additional verification.",
            event_context=context,
            plausibility=45,
        )
    return EventCheck(
        score=70,
        details="Event context appears plausible and consistent with known patterns.",
        event_context=context,
        plausibility=75,
    )


def check_feeds(
    text: str,
    features: ExtractedFeatures,
    *,
    source_url: str | None = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    today: date | None = None,
) -> FeedVerification:
    """Keyword-based stand-in for wire-feed corroboration (Reuters / AP)."""
    hits = count_terms(text, vocabulary.feed_keywords)
    found = hits >= FEED_MIN_HITS and features.word_count >= FEED_MIN_WORDS
    score = min(90, 50 + hits * 5) if found else 30

    logger.debug("Feed signal: found=%s score=%d hits=%d words=%d", found, score, hits, features.word_count)

    if not found:
        return FeedVerification(found=False, score=score)

    title = first_sentence(text)[:80] or "News Article"
    published = (today or date.today()).isoformat()
    return FeedVerification(
        found=True,
        score=score,
        matching_feeds=[
            FeedMatch(
                source="Reuters RSS",
                title=title,
                url=source_url or "https://www.reuters.com/news/rss",
                publish_date=published,
                similarity=score,
            ),
            FeedMatch(
                source="Associated Press RSS",
                title=title,
                url=source_url or "https://apnews.com/rss",
                publish_date=published,
                similarity=max(70, score - 10),
            ),
        ],
    )


def evaluate_relatability(
    features: ExtractedFeatures,
    *,
    feed: FeedVerification | None = None,
) -> RelatabilityScore:
    """Roll location, time, event (and the feed signal when given) into one score."""
    location = check_location(features)
    timestamp = check_timestamp(features)
    event = check_event(features)

    subscores = [location.score, timestamp.score, event.score]
    if feed is not None:
        subscores.insert(0, feed.score)

    overall = mean_score(subscores)
    logger.info("Relatability %d (sub-scores %s)", overall, subscores)

    return RelatabilityScore(
        location=location,
        timestamp=timestamp,
        event=event,
        feed_verification=feed,
        overall_score=overall,
    )
