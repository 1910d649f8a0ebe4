"""Pipeline orchestrator — extract, evaluate, aggregate, assemble.

``analyze`` is the pure heuristic path.  ``run_pipeline`` optionally consults
the outlet searcher and the narrative judge first; neither is ever required
for the analysis to complete.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import date

from engine.errors import CollaboratorUnavailable, InvalidInput
from engine.extractors import build_search_query, extract_features
from engine.judgment import NarrativeJudge
from engine.legitimacy import DEFAULT_ARTICLE_THRESHOLD, evaluate_legitimacy, legitimacy_from_judgment
from engine.relatability import check_feeds, evaluate_relatability
from engine.scorer import compute_overall_score
from engine.trustworthiness import evaluate_trustworthiness
from engine.verdict import determine_verdict
from engine.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from schemas.judgment import NarrativeJudgment
from schemas.response import Article, ExtractedFeatures, LegitimacyScore, VerificationReport
from services.news_search import OutletSearcher

logger = logging.getLogger("tricheck.pipeline")


# ── Helpers ────────────────────────────────────────────────────────────

def _validate_text(text: str | None) -> str:
    if text is None or not text.strip():
        raise InvalidInput("News content is required.")
    return text


def _normalize_url(source_url: str | None) -> str | None:
    if source_url is None:
        return None
    return source_url.strip() or None


def _assemble(
    text: str,
    features: ExtractedFeatures,
    legitimacy: LegitimacyScore,
    *,
    source_url: str | None,
    vocabulary: Vocabulary,
    feed_signal_enabled: bool,
    today: date | None,
) -> VerificationReport:
    feed = (
        check_feeds(text, features, source_url=source_url, vocabulary=vocabulary, today=today)
        if feed_signal_enabled
        else None
    )
    relatability = evaluate_relatability(features, feed=feed)
    trustworthiness = evaluate_trustworthiness(text, source_url=source_url, vocabulary=vocabulary)

    overall = compute_overall_score(
        relatability.overall_score,
        legitimacy.overall_score,
        trustworthiness.overall_score,
    )
    verdict = determine_verdict(overall)

    return VerificationReport(
        relatability=relatability,
        legitimacy=legitimacy,
        trustworthiness=trustworthiness,
        overall_score=overall,
        overall_verdict=verdict,
    )


def analyze(
    text: str,
    source_url: str | None = None,
    *,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    feed_signal_enabled: bool = False,
    today: date | None = None,
) -> VerificationReport:
    """Score *text* with the local heuristics only.  Deterministic for a fixed ``today``."""
    text = _validate_text(text)
    source_url = _normalize_url(source_url)

    features = extract_features(text, vocabulary)
    legitimacy = evaluate_legitimacy(
        text, features, source_url=source_url, vocabulary=vocabulary, today=today
    )
    report = _assemble(
        text,
        features,
        legitimacy,
        source_url=source_url,
        vocabulary=vocabulary,
        feed_signal_enabled=feed_signal_enabled,
        today=today,
    )
    logger.info("Analysis complete — score %d/100 → %s", report.overall_score, report.overall_verdict.value)
    return report


# ── Collaborator phase ─────────────────────────────────────────────────

async def _search_outlets(
    searcher: OutletSearcher,
    query: str,
    vocabulary: Vocabulary,
    timeout: float | None = None,
) -> dict[str, list[Article]]:
    """Search every outlet concurrently; failed or timed-out outlets are left out of the result.

    Each outlet search gets its own *timeout*, so a slow outlet never discards
    another outlet's finished results.
    """
    outlets = vocabulary.outlets
    results = await asyncio.gather(
        *(asyncio.wait_for(searcher.search(o.search_source_id, query), timeout) for o in outlets),
        return_exceptions=True,
    )

    found: dict[str, list[Article]] = {}
    for outlet, result in zip(outlets, results):
        if isinstance(result, asyncio.TimeoutError):
            logger.warning("Search for %s timed out, using keyword matching.", outlet.name)
            continue
        if isinstance(result, BaseException):
            logger.warning("Search for %s failed, using keyword matching: %s", outlet.name, result)
            continue
        found[outlet.name] = list(result)
    return found


def _remaining(deadline: float | None) -> float | None:
    if deadline is None:
        return None
    return max(0.0, deadline - time.monotonic())


async def run_pipeline(
    text: str,
    *,
    source_url: str | None = None,
    searcher: OutletSearcher | None = None,
    judge: NarrativeJudge | None = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    feed_signal_enabled: bool = False,
    timeout: float | None = None,
    article_threshold: int = DEFAULT_ARTICLE_THRESHOLD,
    today: date | None = None,
) -> VerificationReport:
    """Execute the full verification pipeline.

    Parameters
    ----------
    text : str
        News content to verify.
    source_url : str | None
        Optional source URL.
    searcher : OutletSearcher | None
        Outlet search collaborator; outlets whose search fails fall back to
        keyword matching.
    judge : NarrativeJudge | None
        Narrative-judgment collaborator; when it answers, its judgment replaces
        the heuristic legitimacy compartment.
    timeout : float | None
        Overall budget in seconds for the collaborator calls.  The heuristic
        path is never subject to it.

    Returns
    -------
    VerificationReport

    Raises
    ------
    InvalidInput
        *text* is empty.
    MalformedJudgment
        The judge replied with data that does not match the judgment schema.
    """
    t0 = time.perf_counter()
    text = _validate_text(text)
    source_url = _normalize_url(source_url)
    features = extract_features(text, vocabulary)

    deadline = time.monotonic() + timeout if timeout is not None else None
    search_results: dict[str, list[Article]] = {}
    judgment: NarrativeJudgment | None = None

    # ── Outlet search (both outlets in parallel) ───────────────────────
    if searcher is not None:
        query = build_search_query(text, vocabulary)
        if query:
            search_results = await _search_outlets(
                searcher, query, vocabulary, _remaining(deadline)
            )
        else:
            logger.info("No search terms in content; skipping outlet search.")

    candidates = [a for batch in search_results.values() for a in batch]

    # ── Narrative judgment ─────────────────────────────────────────────
    if judge is not None:
        try:
            judgment = await asyncio.wait_for(
                judge.judge(text, source_url, candidates), _remaining(deadline)
            )
        except asyncio.TimeoutError:
            logger.warning("Narrative judgment timed out; using heuristic legitimacy.")
        except CollaboratorUnavailable as exc:
            logger.warning("Narrative judgment unavailable; using heuristic legitimacy: %s", exc)

    # ── Legitimacy ─────────────────────────────────────────────────────
    if judgment is not None:
        legitimacy = legitimacy_from_judgment(
            judgment,
            source_url=source_url,
            vocabulary=vocabulary,
            articles=candidates,
        )
    else:
        legitimacy = evaluate_legitimacy(
            text,
            features,
            source_url=source_url,
            vocabulary=vocabulary,
            search_results=search_results,
            article_threshold=article_threshold,
            today=today,
        )

    report = _assemble(
        text,
        features,
        legitimacy,
        source_url=source_url,
        vocabulary=vocabulary,
        feed_signal_enabled=feed_signal_enabled,
        today=today,
    )

    elapsed = time.perf_counter() - t0
    logger.info(
        "Pipeline complete in %.2fs — legitimacy via %s, score %d/100 → %s",
        elapsed,
        legitimacy.method.value,
        report.overall_score,
        report.overall_verdict.value,
    )
    return report
