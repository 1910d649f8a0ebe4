"""Tests for the FastAPI routes (no network collaborators)."""

from __future__ import annotations

import os
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

# Ensure auth is disabled for tests (no INTERNAL_TOKEN set)
os.environ.pop("INTERNAL_TOKEN", None)

from engine.errors import MalformedJudgment  # noqa: E402
from main import app  # noqa: E402
from schemas.response import Article  # noqa: E402

client = TestClient(app)

NEWS_TEXT = (
    "Breaking: the government announced new climate policy today in London, "
    "according to officials. "
) * 2


@pytest.fixture(autouse=True)
def _no_collaborators():
    app.state.searcher = None
    app.state.judge = None
    yield
    app.state.searcher = None
    app.state.judge = None


class TestHealthEndpoint:
    def test_health(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["engine"] == "tricheck"
        assert data["outlet_search"] is False
        assert data["narrative_judgment"] is False


class TestVerifyEndpoint:
    def test_successful_verification(self):
        resp = client.post("/verify", json={"text": NEWS_TEXT})
        assert resp.status_code == 200
        data = resp.json()
        assert 0 <= data["overall_score"] <= 100
        assert data["overall_verdict"] in ["VERIFIED", "SUSPICIOUS", "NEEDS_REVIEW", "FAKE"]
        for compartment in ("relatability", "legitimacy", "trustworthiness"):
            assert 0 <= data[compartment]["overall_score"] <= 100
        assert data["legitimacy"]["method"] == "heuristic"
        assert data["disclaimer"].startswith("This verdict is a heuristic")

    def test_camel_case_aliases_accepted(self):
        resp = client.post(
            "/verify",
            json={"newsContent": NEWS_TEXT, "sourceUrl": "https://www.bbc.com/news/x"},
        )
        assert resp.status_code == 200
        bbc, cnn = resp.json()["legitimacy"]["outlets"]
        assert (bbc["outlet"], bbc["found"], bbc["similarity"]) == ("BBC", True, 95)
        assert (cnn["found"], cnn["similarity"]) == (False, 0)

    def test_empty_content_rejected(self):
        resp = client.post("/verify", json={"text": ""})
        assert resp.status_code == 422

    def test_missing_content_rejected(self):
        resp = client.post("/verify", json={"sourceUrl": "https://bbc.com"})
        assert resp.status_code == 422

    def test_whitespace_content_rejected_with_error_kind(self):
        resp = client.post("/verify", json={"text": "   "})
        assert resp.status_code == 422
        assert resp.json()["error"] == "invalid_input"

    def test_hello_world(self):
        resp = client.post("/verify", json={"text": "Hello world"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["legitimacy"]["overall_score"] == 20
        assert data["overall_verdict"] == "NEEDS_REVIEW"

    def test_malformed_judgment_is_bad_gateway(self):
        judge = AsyncMock()
        judge.judge.side_effect = MalformedJudgment("Invalid JSON response from AI")
        app.state.judge = judge
        resp = client.post("/verify", json={"text": NEWS_TEXT})
        assert resp.status_code == 502
        assert resp.json()["error"] == "malformed_judgment"


class TestNewsSearchEndpoint:
    def test_unconfigured_search_is_unavailable(self):
        resp = client.post("/news/search", json={"query": "climate"})
        assert resp.status_code == 503
        assert resp.json()["error"] == "collaborator_unavailable"

    def test_search_pass_through(self):
        searcher = AsyncMock()
        searcher.search_sources.return_value = (
            [Article(outlet="BBC News", title="Climate", url="https://www.bbc.com/news/a")],
            1,
        )
        app.state.searcher = searcher

        resp = client.post("/news/search", json={"query": "climate"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["total_results"] == 1
        assert data["articles"][0]["title"] == "Climate"
        searcher.search_sources.assert_awaited_once_with("bbc-news,cnn", "climate")

    def test_empty_query_rejected(self):
        resp = client.post("/news/search", json={"query": ""})
        assert resp.status_code == 422


class TestInternalAuth:
    def test_no_auth_when_token_not_configured(self):
        resp = client.post("/verify", json={"text": "Test content."})
        assert resp.status_code == 200

    def test_auth_rejects_bad_token_when_configured(self):
        from config import settings
        original = settings.internal_token
        try:
            settings.internal_token = "super-secret-token"
            resp = client.post(
                "/verify",
                json={"text": "Test content."},
                headers={"X-Internal-Token": "wrong-token"},
            )
            assert resp.status_code == 401
        finally:
            settings.internal_token = original

    def test_auth_accepts_correct_token_when_configured(self):
        from config import settings
        original = settings.internal_token
        try:
            settings.internal_token = "super-secret-token"
            resp = client.post(
                "/verify",
                json={"text": "Test content."},
                headers={"X-Internal-Token": "super-secret-token"},
            )
            assert resp.status_code == 200
        finally:
            settings.internal_token = original

    def test_auth_rejects_missing_token_when_configured(self):
        from config import settings
        original = settings.internal_token
        try:
            settings.internal_token = "super-secret-token"
            resp = client.post("/verify", json={"text": "Test content."})
            assert resp.status_code == 401
        finally:
            settings.internal_token = original
