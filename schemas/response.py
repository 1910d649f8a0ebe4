"""Response schemas for the Tricheck API.

Every model here is frozen: a report is built once per analysis and never
mutated afterwards.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator


# ── Enums ──────────────────────────────────────────────────────────────

class Verdict(str, Enum):
    VERIFIED = "VERIFIED"
    SUSPICIOUS = "SUSPICIOUS"
    NEEDS_REVIEW = "NEEDS_REVIEW"
    FAKE = "FAKE"


class EmotionalTone(str, Enum):
    NEUTRAL = "neutral"
    POSITIVE = "positive"
    NEGATIVE = "negative"
    SENSATIONAL = "sensational"


class LegitimacyMethod(str, Enum):
    HEURISTIC = "heuristic"
    SEARCH = "search"
    JUDGMENT = "judgment"


# ── Features & evidence ────────────────────────────────────────────────

class ExtractedFeatures(BaseModel):
    model_config = {"frozen": True}

    locations: list[str] = Field(default_factory=list, max_length=3)
    dates: list[str] = Field(default_factory=list, max_length=3)
    word_count: int = Field(ge=0)
    has_sensational_terms: bool = False


class Article(BaseModel):
    """A candidate article returned by an outlet search."""

    model_config = {"frozen": True}

    outlet: str
    title: str = ""
    description: str | None = None
    content: str | None = None
    published_at: str | None = None
    url: str = ""


class MatchingArticle(BaseModel):
    model_config = {"frozen": True}

    title: str
    url: str
    publish_date: str
    similarity: int = Field(ge=0, le=100)
    excerpt: str = ""


class OutletMatch(BaseModel):
    model_config = {"frozen": True}

    outlet: str
    found: bool
    similarity: int = Field(default=0, ge=0, le=100)
    matching_articles: list[MatchingArticle] = Field(default_factory=list)

    @model_validator(mode="after")
    def _not_found_is_empty(self) -> "OutletMatch":
        if not self.found and (self.similarity != 0 or self.matching_articles):
            raise ValueError("an unmatched outlet must have similarity 0 and no evidence")
        return self


class FeedMatch(BaseModel):
    model_config = {"frozen": True}

    source: str
    title: str
    url: str
    publish_date: str
    similarity: int = Field(ge=0, le=100)


class FeedVerification(BaseModel):
    model_config = {"frozen": True}

    found: bool
    score: int = Field(ge=0, le=100)
    matching_feeds: list[FeedMatch] = Field(default_factory=list)


# ── Compartment: relatability ──────────────────────────────────────────

class LocationCheck(BaseModel):
    model_config = {"frozen": True}

    score: int = Field(ge=0, le=100)
    details: str
    extracted_locations: list[str] = Field(default_factory=list)


class TimestampCheck(BaseModel):
    model_config = {"frozen": True}

    score: int = Field(ge=0, le=100)
    details: str
    extracted_dates: list[str] = Field(default_factory=list)
    consistency: bool


class EventCheck(BaseModel):
    model_config = {"frozen": True}

    score: int = Field(ge=0, le=100)
    details: str
    event_context: str
    plausibility: int = Field(ge=0, le=100)


class RelatabilityScore(BaseModel):
    model_config = {"frozen": True}

    location: LocationCheck
    timestamp: TimestampCheck
    event: EventCheck
    feed_verification: FeedVerification | None = None
    overall_score: int = Field(ge=0, le=100)


# ── Compartment: legitimacy ────────────────────────────────────────────

class CrossReference(BaseModel):
    model_config = {"frozen": True}

    score: int = Field(ge=0, le=100)
    details: str


class LegitimacyScore(BaseModel):
    model_config = {"frozen": True}

    outlets: list[OutletMatch] = Field(min_length=2, max_length=2)
    cross_reference: CrossReference
    overall_score: int = Field(ge=0, le=100)
    method: LegitimacyMethod = LegitimacyMethod.HEURISTIC
    assessment: str | None = None
    credibility_indicators: list[str] = Field(default_factory=list)
    red_flags: list[str] = Field(default_factory=list)


# ── Compartment: trustworthiness ───────────────────────────────────────

class LanguageAnalysis(BaseModel):
    model_config = {"frozen": True}

    bias: int = Field(ge=0, le=100)
    emotional_tone: EmotionalTone
    credibility_score: int = Field(ge=0, le=100)


class FactualConsistency(BaseModel):
    model_config = {"frozen": True}

    score: int = Field(ge=0, le=100)
    inconsistencies: list[str] = Field(default_factory=list)


class SourceCredibility(BaseModel):
    model_config = {"frozen": True}

    score: int = Field(ge=0, le=100)
    reputation: str


class TrustworthinessScore(BaseModel):
    model_config = {"frozen": True}

    language_analysis: LanguageAnalysis
    factual_consistency: FactualConsistency
    source_credibility: SourceCredibility
    overall_score: int = Field(ge=0, le=100)


# ── Top-level response ─────────────────────────────────────────────────

class VerificationReport(BaseModel):
    """Full pipeline output: three compartments plus the overall verdict."""

    model_config = {"frozen": True}

    relatability: RelatabilityScore
    legitimacy: LegitimacyScore
    trustworthiness: TrustworthinessScore
    overall_score: int = Field(ge=0, le=100)
    overall_verdict: Verdict
    disclaimer: str = "This verdict is a heuristic approximation and does not replace independent fact-checking."


class NewsSearchResponse(BaseModel):
    articles: list[Article] = Field(default_factory=list)
    total_results: int = Field(default=0, ge=0)


class ErrorResponse(BaseModel):
    error: str
    detail: str | None = None
