"""Compartment 2 — Legitimacy (outlet match).

Each configured outlet is checked independently.  Signals, highest priority
first:

1. the source URL names the *other* outlet → no match (URL veto)
2. the source URL names this outlet        → confirmed match
3. search results for this outlet           → term overlap with real articles
4. keyword density against the outlet's vocabulary

Each branch of the overall formula weights the cross-reference score
differently.
"""

from __future__ import annotations

import logging
import re
from datetime import date

from engine.extractors import content_terms, count_terms
from engine.scorer import clamp, round_half_up
from engine.vocabulary import DEFAULT_VOCABULARY, OutletProfile, Vocabulary
from schemas.judgment import NarrativeJudgment
from schemas.response import (
    Article,
    CrossReference,
    ExtractedFeatures,
    LegitimacyMethod,
    LegitimacyScore,
    MatchingArticle,
    OutletMatch,
)

logger = logging.getLogger("tricheck.engine.legitimacy")

MIN_KEYWORD_HITS = 3
MIN_WORDS = 20
DENSITY_BOOST_CAP = 30
DEFAULT_ARTICLE_THRESHOLD = 30
MAX_EVIDENCE = 3

_SLUG_STRIP = re.compile(r"[^a-z0-9-]")


# ── Helpers ────────────────────────────────────────────────────────────

def _names_domain(source_url: str | None, domain: str) -> bool:
    return bool(source_url) and domain.lower() in source_url.lower()


def is_trusted_url(source_url: str | None, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> bool:
    """True when the URL names one of the configured outlets."""
    return any(_names_domain(source_url, d) for d in vocabulary.outlet_domains())


def keyword_similarity(hits: int, words: int, profile: OutletProfile) -> int:
    """Similarity from keyword density, clamped to the outlet's band.

    The raw value rises strictly with density until the cap; after half-up
    rounding to an integer the result is only non-decreasing in *hits* for a
    fixed word count.
    """
    density = (hits / words) * 100 if words > 0 else 0.0
    raw = profile.similarity_base + min(DENSITY_BOOST_CAP, density * 3)
    return round_half_up(clamp(raw, profile.similarity_base, profile.similarity_ceiling))


def article_similarity(text_terms: set[str], article: Article, vocabulary: Vocabulary) -> int:
    """Share of the text's content terms that also appear in *article*."""
    if not text_terms:
        return 0
    body = " ".join(p for p in (article.title, article.description, article.content) if p)
    overlap = text_terms & content_terms(body, vocabulary)
    return round_half_up(clamp(len(overlap) / len(text_terms) * 100))


def synthesize_evidence(
    text: str,
    profile: OutletProfile,
    similarity: int,
    *,
    source_url: str | None = None,
    today: date | None = None,
) -> list[MatchingArticle]:
    """Build a placeholder evidence record from the text itself."""
    lead = text.split(".")[0] or text[:100]
    words = [w for w in lead.split(" ") if len(w) > 4]
    title = " ".join(words[:8]) + ("..." if len(words) > 8 else "")
    slug = _SLUG_STRIP.sub("", "-".join(words[:3]).lower())

    return [
        MatchingArticle(
            title=title or f"{profile.name} Report on Recent Events",
            url=source_url or f"{profile.base_url}{slug}",
            publish_date=(today or date.today()).isoformat(),
            similarity=similarity,
            excerpt=text[:150] + ("..." if len(text) > 150 else ""),
        )
    ]


def _no_match(profile: OutletProfile) -> OutletMatch:
    return OutletMatch(outlet=profile.name, found=False, similarity=0)


def _url_vetoed(profile: OutletProfile, source_url: str | None, vocabulary: Vocabulary) -> bool:
    return any(
        _names_domain(source_url, other.domain)
        for other in vocabulary.outlets
        if other.domain != profile.domain
    )


# ── Per-outlet matching ────────────────────────────────────────────────

def match_outlet(
    profile: OutletProfile,
    text: str,
    features: ExtractedFeatures,
    *,
    source_url: str | None = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    articles: list[Article] | None = None,
    article_threshold: int = DEFAULT_ARTICLE_THRESHOLD,
    today: date | None = None,
) -> OutletMatch:
    """Decide whether *text* matches *profile*.

    ``articles`` is ``None`` when no search result is available for this
    outlet (search disabled or failed); an empty list means the search ran and
    found nothing.
    """
    if _url_vetoed(profile, source_url, vocabulary):
        logger.info("%s: vetoed by source URL naming another outlet", profile.name)
        return _no_match(profile)

    if _names_domain(source_url, profile.domain):
        similarity = profile.confirmed_similarity
        logger.info("%s: confirmed by source URL (similarity %d)", profile.name, similarity)
        return OutletMatch(
            outlet=profile.name,
            found=True,
            similarity=similarity,
            matching_articles=synthesize_evidence(
                text, profile, similarity, source_url=source_url, today=today
            ),
        )

    if articles is not None:
        return _match_articles(profile, text, articles, vocabulary, article_threshold)

    hits = count_terms(text, profile.keywords)
    found = hits >= MIN_KEYWORD_HITS and features.word_count >= MIN_WORDS
    logger.info(
        "%s: keyword match found=%s hits=%d words=%d",
        profile.name, found, hits, features.word_count,
    )
    if not found:
        return _no_match(profile)

    similarity = keyword_similarity(hits, features.word_count, profile)
    return OutletMatch(
        outlet=profile.name,
        found=True,
        similarity=similarity,
        matching_articles=synthesize_evidence(
            text, profile, similarity, source_url=source_url, today=today
        ),
    )


def _match_articles(
    profile: OutletProfile,
    text: str,
    articles: list[Article],
    vocabulary: Vocabulary,
    threshold: int,
) -> OutletMatch:
    terms = content_terms(text, vocabulary)
    scored = sorted(
        ((article_similarity(terms, a, vocabulary), a) for a in articles),
        key=lambda pair: pair[0],
        reverse=True,
    )
    best = scored[0][0] if scored else 0
    found = best >= threshold

    logger.info(
        "%s: search match found=%s best=%d articles=%d",
        profile.name, found, best, len(articles),
    )
    if not found:
        return _no_match(profile)

    evidence = [
        MatchingArticle(
            title=a.title,
            url=a.url,
            publish_date=(a.published_at or "")[:10],
            similarity=sim,
            excerpt=(a.description or "")[:150],
        )
        for sim, a in scored[:MAX_EVIDENCE]
        if sim >= threshold
    ]
    return OutletMatch(outlet=profile.name, found=True, similarity=best, matching_articles=evidence)


# ── Compartment roll-up ────────────────────────────────────────────────

def cross_reference(matches: list[OutletMatch], trusted_url: bool) -> CrossReference:
    any_found = any(m.found for m in matches)
    if all(m.found for m in matches):
        return CrossReference(
            score=95,
            details="Content corroborated by multiple authoritative news sources.",
        )
    if trusted_url and any_found:
        return CrossReference(
            score=90,
            details="Content verified by a trusted authoritative news source.",
        )
    if any_found:
        return CrossReference(
            score=85,
            details="Content matches patterns found in major news outlets.",
        )
    return CrossReference(score=20, details="No verification found in major news databases.")


def legitimacy_overall(matches: list[OutletMatch], cross: CrossReference, trusted_url: bool) -> int:
    """Priority-ordered blend of outlet similarities and the cross-reference score."""
    first, second = matches
    found = [m for m in matches if m.found]

    if trusted_url and found:
        # sum of three divided by two
        total = (
            (first.similarity if first.found else 0)
            + (second.similarity if second.found else 0)
            + cross.score
        )
        return round_half_up(clamp(total / 2))
    if len(found) == 2:
        return round_half_up(clamp(0.4 * first.similarity + 0.4 * second.similarity + 0.2 * cross.score))
    if len(found) == 1:
        return round_half_up(clamp(0.6 * found[0].similarity + 0.4 * cross.score))
    return 20


def evaluate_legitimacy(
    text: str,
    features: ExtractedFeatures,
    *,
    source_url: str | None = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    search_results: dict[str, list[Article]] | None = None,
    article_threshold: int = DEFAULT_ARTICLE_THRESHOLD,
    today: date | None = None,
) -> LegitimacyScore:
    """Match every configured outlet and roll the results into one compartment.

    ``search_results`` maps outlet name to the articles its search returned;
    outlets missing from the mapping fall back to keyword matching.
    """
    results = search_results or {}
    matches = [
        match_outlet(
            profile,
            text,
            features,
            source_url=source_url,
            vocabulary=vocabulary,
            articles=results.get(profile.name),
            article_threshold=article_threshold,
            today=today,
        )
        for profile in vocabulary.outlets
    ]

    trusted = is_trusted_url(source_url, vocabulary)
    cross = cross_reference(matches, trusted)
    overall = legitimacy_overall(matches, cross, trusted)

    logger.info(
        "Legitimacy %d (found=%s, similarities=%s, cross-reference=%d)",
        overall,
        [m.found for m in matches],
        [m.similarity for m in matches],
        cross.score,
    )

    return LegitimacyScore(
        outlets=matches,
        cross_reference=cross,
        overall_score=overall,
        method=LegitimacyMethod.SEARCH if results else LegitimacyMethod.HEURISTIC,
    )


def legitimacy_from_judgment(
    judgment: NarrativeJudgment,
    *,
    source_url: str | None = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    articles: list[Article] | None = None,
) -> LegitimacyScore:
    """Build the legitimacy compartment from a validated narrative judgment.

    The URL veto still applies; everything else comes from the judgment.
    """
    published = {a.url: (a.published_at or "")[:10] for a in articles or [] if a.url}

    matches: list[OutletMatch] = []
    for profile in vocabulary.outlets:
        judged = judgment.outlet(profile.name)
        if judged is None or not judged.verified or _url_vetoed(profile, source_url, vocabulary):
            matches.append(_no_match(profile))
            continue
        matches.append(
            OutletMatch(
                outlet=profile.name,
                found=True,
                similarity=judged.similarity,
                matching_articles=[
                    MatchingArticle(
                        title=a.title,
                        url=a.url,
                        publish_date=published.get(a.url, ""),
                        similarity=a.similarity,
                    )
                    for a in judged.articles[:MAX_EVIDENCE]
                ],
            )
        )

    cross = cross_reference(matches, is_trusted_url(source_url, vocabulary))
    logger.info("Legitimacy %d from narrative judgment", judgment.legitimacy_score)

    return LegitimacyScore(
        outlets=matches,
        cross_reference=cross,
        overall_score=judgment.legitimacy_score,
        method=LegitimacyMethod.JUDGMENT,
        assessment=judgment.overall_assessment or None,
        credibility_indicators=list(judgment.credibility_indicators),
        red_flags=list(judgment.red_flags),
    )
