"""Prompt used by the narrative-judgment collaborator.

The LLM must return **structured JSON**; the reply is schema-validated before
it can replace the heuristic legitimacy compartment.
"""

from __future__ import annotations

from schemas.response import Article

_CORE_RULES = """
CORE RULES:
- Never guess facts.  Only mark an outlet as verified when a supplied article covers the same event.
- Do NOT rely on writing style alone.
- Never invent articles, titles or URLs; only cite articles from the list provided.
- Similarity and legitimacy scores are integers from 0 to 100.
"""

JUDGMENT_PROMPT = f"""
You are Tricheck, a news verification assistant.

{_CORE_RULES}

TASK — OUTLET CROSS-CHECK
Compare the user's news content against real articles from the reference outlets
({{outlets}}).  Decide, for each outlet, whether the content matches one of its
articles and how closely.  Also assess overall legitimacy, extract topics,
locations and date references, and list credibility indicators and red flags
(contradicts real articles, sensationalism, misinformation).

Respond in JSON only:
{{{{
  "outlets": [
    {{{{
      "outlet": "<outlet name>",
      "verified": true,
      "similarity": 80,
      "articles": [{{{{"title": "...", "similarity": 80, "url": "..."}}}}]
    }}}}
  ],
  "legitimacyScore": 75,
  "topics": ["..."],
  "locations": ["..."],
  "dates": ["..."],
  "credibilityIndicators": ["..."],
  "redFlags": ["..."],
  "overallAssessment": "<one paragraph>"
}}}}
"""


def judgment_prompt(outlets: list[str]) -> str:
    return JUDGMENT_PROMPT.format(outlets=", ".join(outlets))


def judgment_message(text: str, source_url: str | None, articles: list[Article]) -> str:
    """User message: the content, its URL and the candidate articles."""
    parts = ["User's News Content:", text, ""]
    if source_url:
        parts += [f"User's Source URL: {source_url}", ""]

    parts.append("Real Articles:")
    if not articles:
        parts.append("(none found)")
    for idx, article in enumerate(articles, start=1):
        parts += [
            f"Article {idx} ({article.outlet}):",
            f"Title: {article.title}",
            f"Description: {article.description or 'N/A'}",
            f"Content: {article.content or 'N/A'}",
            f"Published: {article.published_at or 'N/A'}",
            f"URL: {article.url}",
            "---",
        ]
    return "\n".join(parts)
