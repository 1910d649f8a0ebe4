"""Feature extraction: locations, dates, sensational terms, word counts.

All functions are pure and total; the same text always yields the same output.
"""

from __future__ import annotations

import re

from engine.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from schemas.response import ExtractedFeatures

MAX_LOCATIONS = 3
MAX_DATES = 3

_MONTHS = (
    "January|February|March|April|May|June|July|August|September|October|November|December"
)

_DATE_PATTERN: re.Pattern[str] = re.compile(
    rf"\b(?:{_MONTHS})\s+\d{{1,2}},?\s+\d{{4}}"
    r"|\b\d{1,2}/\d{1,2}/\d{4}"
    r"|\b\d{4}-\d{2}-\d{2}",
    re.I,
)

_CAPITALIZED: re.Pattern[str] = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)?\b")
_SENTENCE_SPLIT: re.Pattern[str] = re.compile(r"[.!?]\s+")
_TERM: re.Pattern[str] = re.compile(r"[a-z0-9']+")


def word_count(text: str) -> int:
    return len(text.split())


def count_terms(text: str, terms: tuple[str, ...]) -> int:
    """Number of distinct *terms* occurring in *text* (case-insensitive substring)."""
    lower = text.lower()
    return sum(1 for term in terms if term.lower() in lower)


def contains_any(text: str, terms: tuple[str, ...]) -> bool:
    lower = text.lower()
    return any(term.lower() in lower for term in terms)


def extract_locations(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> list[str]:
    """Known place names found in *text*, in allow-list order, at most three."""
    lower = text.lower()
    found: list[str] = []
    for place in vocabulary.locations:
        if place.lower() in lower and place not in found:
            found.append(place)
    return found[:MAX_LOCATIONS]


def extract_dates(text: str) -> list[str]:
    """Date references in order of first occurrence, at most three."""
    return [m.group(0) for m in _DATE_PATTERN.finditer(text)][:MAX_DATES]


def has_sensational_terms(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> bool:
    return contains_any(text, vocabulary.sensational_terms)


def extract_features(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> ExtractedFeatures:
    return ExtractedFeatures(
        locations=extract_locations(text, vocabulary),
        dates=extract_dates(text),
        word_count=word_count(text),
        has_sensational_terms=has_sensational_terms(text, vocabulary),
    )


def first_sentence(text: str) -> str:
    parts = _SENTENCE_SPLIT.split(text, maxsplit=1)
    return parts[0] if parts and parts[0] else text[:200]


def content_terms(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> set[str]:
    """Lower-cased words longer than three characters that are not stop words."""
    return {
        t for t in _TERM.findall(text.lower())
        if len(t) > 3 and t not in vocabulary.stop_words
    }


def build_search_query(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    """Build a short outlet-search query from proper nouns and lead-sentence keywords."""
    names: list[str] = []
    for match in _CAPITALIZED.findall(text):
        if match not in names:
            names.append(match)
        if len(names) == 3:
            break

    keywords = [
        w for w in first_sentence(text).lower().split()
        if len(w) > 4 and w not in vocabulary.stop_words
    ][:3]

    terms = names + [w[:1].upper() + w[1:] for w in keywords]
    return " ".join(terms[:5])
