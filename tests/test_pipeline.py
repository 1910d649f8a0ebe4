"""Tests for ``run_pipeline`` with fake outlet-search and judgment collaborators."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from engine.errors import CollaboratorUnavailable, InvalidInput, MalformedJudgment
from engine.pipeline import analyze, run_pipeline
from schemas.judgment import NarrativeJudgment
from schemas.response import Article, LegitimacyMethod

TODAY = date(2026, 1, 2)

TEXT = (
    "Breaking: the government announced new climate policy today in London, "
    "according to officials. "
) * 2

BBC_ARTICLE = Article(
    outlet="BBC News",
    title="Government announces new climate policy in London",
    description="Officials announced the climate policy today.",
    published_at="2026-01-01T09:30:00Z",
    url="https://www.bbc.com/news/climate-policy",
)


class FakeSearcher:
    """Returns canned articles per outlet id; raises for outlets in ``failing``."""

    def __init__(self, results: dict[str, list[Article]], failing: set[str] | None = None) -> None:
        self.results = results
        self.failing = failing or set()
        self.calls: list[tuple[str, str]] = []

    async def search(self, outlet_id: str, query: str) -> list[Article]:
        self.calls.append((outlet_id, query))
        if outlet_id in self.failing:
            raise CollaboratorUnavailable(f"{outlet_id} is down")
        return self.results.get(outlet_id, [])


class DelayedSearcher(FakeSearcher):
    """Like FakeSearcher, but outlets in ``delays`` sleep before answering."""

    def __init__(self, results: dict[str, list[Article]], delays: dict[str, float]) -> None:
        super().__init__(results)
        self.delays = delays

    async def search(self, outlet_id: str, query: str) -> list[Article]:
        await asyncio.sleep(self.delays.get(outlet_id, 0))
        return await super().search(outlet_id, query)


class FakeJudge:
    def __init__(self, judgment: NarrativeJudgment | None = None, error: Exception | None = None) -> None:
        self.judgment = judgment
        self.error = error
        self.seen_articles: list[Article] | None = None

    async def judge(self, text, source_url, articles):  # noqa: ARG002
        self.seen_articles = articles
        if self.error is not None:
            raise self.error
        return self.judgment


class SlowJudge:
    async def judge(self, text, source_url, articles):  # noqa: ARG002
        await asyncio.sleep(5)


def _judgment(**overrides) -> NarrativeJudgment:
    data = {
        "outlets": [
            {
                "outlet": "BBC",
                "verified": True,
                "similarity": 88,
                "articles": [{"title": BBC_ARTICLE.title, "similarity": 88, "url": BBC_ARTICLE.url}],
            },
            {"outlet": "CNN", "verified": False, "similarity": 0},
        ],
        "legitimacyScore": 81,
        "redFlags": ["Sensational opener"],
        "overallAssessment": "Consistent with BBC coverage.",
    }
    data.update(overrides)
    return NarrativeJudgment.model_validate(data)


class TestCollaboratorFree:
    async def test_matches_pure_analysis(self):
        report = await run_pipeline(TEXT, today=TODAY)
        assert report == analyze(TEXT, today=TODAY)

    async def test_empty_text(self):
        with pytest.raises(InvalidInput):
            await run_pipeline("  ")


class TestOutletSearch:
    async def test_search_results_and_partial_failure(self):
        searcher = FakeSearcher({"bbc-news": [BBC_ARTICLE]}, failing={"cnn"})
        report = await run_pipeline(TEXT, searcher=searcher, today=TODAY)

        bbc, cnn = report.legitimacy.outlets
        assert {c[0] for c in searcher.calls} == {"bbc-news", "cnn"}
        assert report.legitimacy.method == LegitimacyMethod.SEARCH
        # 7 of the text's 9 content terms appear in the article
        assert (bbc.found, bbc.similarity) == (True, 78)
        assert bbc.matching_articles[0].url == BBC_ARTICLE.url
        assert bbc.matching_articles[0].publish_date == "2026-01-01"
        # failed search falls back to keyword matching
        assert (cnn.found, cnn.similarity) == (True, 85)
        assert report.legitimacy.overall_score == 84

    async def test_empty_results_mean_no_match(self):
        searcher = FakeSearcher({})
        report = await run_pipeline(TEXT, searcher=searcher, today=TODAY)
        assert not any(m.found for m in report.legitimacy.outlets)
        assert report.legitimacy.overall_score == 20

    async def test_all_searches_failing_falls_back_to_keywords(self):
        searcher = FakeSearcher({}, failing={"bbc-news", "cnn"})
        report = await run_pipeline(TEXT, searcher=searcher, today=TODAY)
        assert report.legitimacy.method == LegitimacyMethod.HEURISTIC
        assert report.legitimacy == analyze(TEXT, today=TODAY).legitimacy

    async def test_slow_outlet_keeps_other_results(self):
        searcher = DelayedSearcher({"bbc-news": [BBC_ARTICLE]}, delays={"cnn": 5})
        report = await run_pipeline(TEXT, searcher=searcher, timeout=0.2, today=TODAY)

        bbc, cnn = report.legitimacy.outlets
        assert report.legitimacy.method == LegitimacyMethod.SEARCH
        assert (bbc.found, bbc.similarity) == (True, 78)
        # timed-out search falls back to keyword matching
        assert (cnn.found, cnn.similarity) == (True, 85)

    async def test_url_veto_beats_search_results(self):
        searcher = FakeSearcher({"bbc-news": [BBC_ARTICLE], "cnn": []})
        report = await run_pipeline(
            TEXT, source_url="https://cnn.com/story", searcher=searcher, today=TODAY
        )
        bbc, cnn = report.legitimacy.outlets
        assert bbc.found is False
        assert (cnn.found, cnn.similarity) == (True, 92)


class TestNarrativeJudgment:
    async def test_judgment_replaces_heuristic_legitimacy(self):
        searcher = FakeSearcher({"bbc-news": [BBC_ARTICLE]})
        judge = FakeJudge(_judgment())
        report = await run_pipeline(TEXT, searcher=searcher, judge=judge, today=TODAY)

        legitimacy = report.legitimacy
        assert judge.seen_articles == [BBC_ARTICLE]
        assert legitimacy.method == LegitimacyMethod.JUDGMENT
        assert legitimacy.overall_score == 81
        assert legitimacy.cross_reference.score == 85
        assert legitimacy.red_flags == ["Sensational opener"]
        assert legitimacy.assessment == "Consistent with BBC coverage."
        bbc, cnn = legitimacy.outlets
        assert (bbc.found, bbc.similarity) == (True, 88)
        assert bbc.matching_articles[0].publish_date == "2026-01-01"
        assert cnn.found is False

    async def test_judgment_still_honours_url_veto(self):
        judgment = _judgment(
            outlets=[
                {"outlet": "BBC", "verified": True, "similarity": 90},
                {"outlet": "cnn", "verified": True, "similarity": 70},
            ]
        )
        report = await run_pipeline(
            TEXT, source_url="https://www.bbc.com/news/x", judge=FakeJudge(judgment)
        )
        bbc, cnn = report.legitimacy.outlets
        assert bbc.found is True
        assert cnn.found is False

    async def test_malformed_judgment_fails_the_analysis(self):
        judge = FakeJudge(error=MalformedJudgment("not JSON"))
        with pytest.raises(MalformedJudgment):
            await run_pipeline(TEXT, judge=judge)

    async def test_unavailable_judge_falls_back(self):
        judge = FakeJudge(error=CollaboratorUnavailable("gateway down"))
        report = await run_pipeline(TEXT, judge=judge, today=TODAY)
        assert report.legitimacy.method == LegitimacyMethod.HEURISTIC
        assert report == analyze(TEXT, today=TODAY)

    async def test_timeout_falls_back(self):
        report = await run_pipeline(TEXT, judge=SlowJudge(), timeout=0.05, today=TODAY)
        assert report.legitimacy.method == LegitimacyMethod.HEURISTIC
