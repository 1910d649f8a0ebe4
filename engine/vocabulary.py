"""Word lists, domain lists and outlet profiles used by the evaluators.

Everything here is immutable and passed into the evaluators explicitly, so
tests can build a small ``Vocabulary`` instead of using ``DEFAULT_VOCABULARY``.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class OutletProfile:
    name: str
    domain: str
    keywords: tuple[str, ...]
    search_source_id: str
    base_url: str
    confirmed_similarity: int = 95
    similarity_base: int = 60
    similarity_ceiling: int = 92


@dataclass(frozen=True)
class Vocabulary:
    outlets: tuple[OutletProfile, OutletProfile]
    locations: tuple[str, ...] = ()
    sensational_terms: tuple[str, ...] = ()
    feed_keywords: tuple[str, ...] = ()
    bias_markers: tuple[str, ...] = ()
    tone_sensational: tuple[str, ...] = ()
    tone_positive: tuple[str, ...] = ()
    tone_negative: tuple[str, ...] = ()
    attribution_terms: tuple[str, ...] = ("said",)
    contradiction_terms: tuple[str, ...] = ("denied",)
    trusted_domains: tuple[str, ...] = ()
    reputable_domains: tuple[str, ...] = ()
    questionable_domains: tuple[str, ...] = ()
    stop_words: frozenset[str] = field(default_factory=frozenset)

    def outlet_domains(self) -> tuple[str, ...]:
        return tuple(o.domain for o in self.outlets)


# ── Outlet keyword lists ───────────────────────────────────────────────

_BBC_KEYWORDS: tuple[str, ...] = (
    # outlet
    "bbc", "british broadcasting", "uk", "britain", "england", "scotland", "wales", "london",
    # reporting
    "news", "report", "reports", "reported", "reporting", "journalist", "reporter", "correspondent",
    "announced", "statement", "says", "said", "told", "according", "sources", "officials",
    # politics
    "government", "minister", "ministers", "parliament", "prime minister", "politics", "political",
    "election", "vote", "voting", "policy", "legislation", "law", "president", "congress", "senate",
    # world
    "world", "international", "global", "country", "countries", "nation", "national", "foreign",
    "europe", "european", "asia", "africa", "america", "american", "china", "russia", "india",
    # economy
    "economy", "economic", "business", "market", "markets", "financial", "bank", "company", "companies",
    "trade", "industry", "investment", "stock", "shares", "profit", "growth", "inflation",
    # health & science
    "health", "hospital", "medical", "doctor", "doctors", "patient", "patients", "disease", "treatment",
    "study", "research", "scientist", "scientists", "university", "professor", "science", "scientific",
    "covid", "pandemic", "virus", "vaccine", "vaccination",
    # technology
    "technology", "tech", "digital", "internet", "online", "cyber", "computer", "software", "app",
    # climate
    "climate", "environment", "environmental", "weather", "temperature", "carbon", "emissions", "energy",
    # society
    "society", "social", "community", "public", "people", "population", "family", "children",
    "education", "school", "student", "students", "teacher", "teachers",
    "culture", "cultural", "art", "music", "film", "entertainment", "sport", "sports",
    # events
    "crisis", "issue", "issues", "problem", "challenge", "situation", "incident", "event",
    "attack", "conflict", "war", "peace", "security", "police", "court", "trial", "investigation",
    # time
    "today", "yesterday", "week", "month", "year", "recently", "latest", "breaking", "update",
)

_CNN_KEYWORDS: tuple[str, ...] = (
    # outlet
    "cnn", "cable news", "us", "usa", "america", "american", "washington", "white house",
    # reporting
    "news", "report", "reports", "reported", "reporting", "journalist", "reporter", "correspondent",
    "announced", "statement", "says", "said", "told", "according", "sources", "officials",
    # politics
    "politics", "political", "president", "congress", "senate", "house", "representative", "senator",
    "government", "administration", "federal", "state", "election", "vote", "voting", "campaign",
    "policy", "legislation", "law", "bill", "democrat", "republican",
    # world
    "world", "international", "global", "foreign", "country", "countries", "nation", "national",
    "europe", "european", "asia", "africa", "middle east", "china", "russia", "ukraine", "israel",
    # economy
    "business", "economy", "economic", "market", "markets", "financial", "wall street", "stock",
    "company", "companies", "corporate", "trade", "industry", "investment", "bank", "banking",
    # health & science
    "health", "healthcare", "medical", "hospital", "doctor", "doctors", "patient", "patients",
    "cdc", "fda", "study", "research", "scientist", "science", "scientific", "university",
    "covid", "pandemic", "coronavirus", "virus", "vaccine", "vaccination", "outbreak",
    # technology
    "technology", "tech", "digital", "internet", "online", "cyber", "computer", "ai", "artificial intelligence",
    "social media", "facebook", "twitter", "google", "apple", "microsoft", "amazon",
    # climate
    "climate", "weather", "storm", "hurricane", "environment", "environmental", "temperature", "warming",
    # justice
    "crime", "criminal", "police", "arrest", "arrested", "court", "trial", "judge", "jury", "justice",
    "investigation", "fbi", "department", "charges", "lawsuit", "legal",
    # breaking
    "breaking", "developing", "update", "latest", "live", "happening", "now", "alert",
    # time
    "today", "yesterday", "tonight", "this week", "this month", "recently", "year", "years",
)

BBC = OutletProfile(
    name="BBC",
    domain="bbc.com",
    keywords=_BBC_KEYWORDS,
    search_source_id="bbc-news",
    base_url="https://www.bbc.com/news/",
    confirmed_similarity=95,
    similarity_base=60,
    similarity_ceiling=92,
)

CNN = OutletProfile(
    name="CNN",
    domain="cnn.com",
    keywords=_CNN_KEYWORDS,
    search_source_id="cnn",
    base_url="https://www.cnn.com/",
    confirmed_similarity=92,
    similarity_base=55,
    similarity_ceiling=90,
)


DEFAULT_VOCABULARY = Vocabulary(
    outlets=(BBC, CNN),
    locations=(
        "New York", "London", "Paris", "Tokyo", "Washington",
        "Moscow", "Beijing", "Delhi", "Mumbai", "Sydney",
    ),
    sensational_terms=(
        "shocking", "unbelievable", "exclusive", "breaking", "you won't believe", "doctors hate",
    ),
    feed_keywords=(
        "news", "report", "announced", "according", "sources", "officials",
        "government", "president", "minister", "statement", "says", "said",
        "world", "country", "national", "international", "breaking", "update",
    ),
    bias_markers=("always", "never", "everyone knows", "obviously", "clearly", "definitely"),
    tone_sensational=("shocking", "unbelievable", "incredible", "stunning"),
    tone_positive=("great", "excellent", "amazing", "wonderful", "success"),
    tone_negative=("terrible", "awful", "disaster", "crisis", "failure"),
    trusted_domains=("bbc.com", "cnn.com", "reuters.com", "ap.org", "npr.org"),
    reputable_domains=("bbc.com", "cnn.com", "reuters.com", "ap.org"),
    questionable_domains=("fake-news.com", "clickbait.net", "unverified.info"),
    stop_words=frozenset({
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
        "by", "from", "as", "is", "was", "are", "were", "been", "be", "have", "has", "had",
        "that", "this", "it", "their", "there", "which", "about", "after", "would", "could",
    }),
)
