"""Narrative judgment — an LLM cross-check that replaces heuristic legitimacy."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from pydantic import ValidationError

from config import settings
from engine.errors import CollaboratorUnavailable, MalformedJudgment
from engine.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from prompts.system_prompt import judgment_message, judgment_prompt
from schemas.judgment import NarrativeJudgment
from schemas.response import Article
from services.llm_service import LLMError, chat_completion_json, llm_configured

logger = logging.getLogger("tricheck.engine.judgment")


class NarrativeJudge(Protocol):
    async def judge(
        self,
        text: str,
        source_url: str | None,
        articles: list[Article],
    ) -> NarrativeJudgment:
        """Return a validated judgment, or raise ``MalformedJudgment`` /
        ``CollaboratorUnavailable``."""
        ...


def parse_judgment(data: dict[str, Any]) -> NarrativeJudgment:
    try:
        return NarrativeJudgment.model_validate(data)
    except ValidationError as exc:
        logger.error("Judgment failed schema validation: %s", exc)
        raise MalformedJudgment(f"Judgment does not match the expected schema: {exc}") from exc


class LLMJudge:
    """Narrative judge backed by the configured chat-completion provider."""

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> None:
        self._outlets = [o.name for o in vocabulary.outlets]

    async def judge(
        self,
        text: str,
        source_url: str | None,
        articles: list[Article],
    ) -> NarrativeJudgment:
        try:
            data = await chat_completion_json(
                judgment_prompt(self._outlets),
                judgment_message(text, source_url, articles),
            )
        except LLMError as exc:
            raise MalformedJudgment(str(exc)) from exc
        except CollaboratorUnavailable:
            raise
        except Exception as exc:
            raise CollaboratorUnavailable(f"Narrative judgment call failed: {exc}") from exc

        judgment = parse_judgment(data)
        logger.info(
            "Judgment received — legitimacy=%d outlets=%s",
            judgment.legitimacy_score,
            [(o.outlet, o.verified) for o in judgment.outlets],
        )
        return judgment


def build_judge(vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> LLMJudge | None:
    """Judge from settings, or ``None`` when disabled or unconfigured."""
    if not settings.judge_enabled:
        return None
    if not llm_configured():
        logger.warning("Narrative judgment disabled: LLM provider '%s' not configured.", settings.llm_provider)
        return None
    return LLMJudge(vocabulary)
