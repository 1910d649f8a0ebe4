"""Thin wrapper around LLM providers (OpenAI / Azure / local-compatible)."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from openai import AsyncAzureOpenAI, AsyncOpenAI
from tenacity import retry, retry_if_not_exception_type, stop_after_attempt, wait_exponential

from config import settings
from engine.errors import ConfigurationMissing

logger = logging.getLogger("tricheck.llm")

_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")
_BARE_OBJECT = re.compile(r"\{[\s\S]*\}")


class LLMError(Exception):
    """Raised when the LLM reply is empty or not valid JSON."""


def llm_configured() -> bool:
    provider = settings.llm_provider.lower()
    if provider == "azure":
        return bool(settings.azure_openai_endpoint and settings.azure_openai_api_key)
    if provider == "local":
        return bool(settings.local_llm_base_url)
    return bool(settings.openai_api_key)


def _build_client() -> tuple[AsyncOpenAI, str]:
    """Return (async_client, model_name) based on the configured provider."""
    if not llm_configured():
        raise ConfigurationMissing(f"LLM provider '{settings.llm_provider}' is not configured.")

    provider = settings.llm_provider.lower()
    if provider == "azure":
        client = AsyncAzureOpenAI(
            azure_endpoint=settings.azure_openai_endpoint,
            api_key=settings.azure_openai_api_key,
            api_version="2024-12-01-preview",
        )
        model = settings.azure_openai_deployment
    elif provider == "local":
        client = AsyncOpenAI(
            base_url=settings.local_llm_base_url,
            api_key="not-needed",
        )
        model = settings.local_llm_model
    else:  # default: openai
        client = AsyncOpenAI(api_key=settings.openai_api_key)
        model = settings.openai_model

    return client, model


_client: AsyncOpenAI | None = None
_model: str = ""


def _get_client() -> tuple[AsyncOpenAI, str]:
    global _client, _model
    if _client is None:
        _client, _model = _build_client()
    return _client, _model


def parse_json_object(raw: str) -> dict[str, Any]:
    """Parse a JSON object out of *raw*, tolerating markdown code fences."""
    if not raw or not raw.strip():
        raise LLMError("LLM returned empty content.")

    fenced = _FENCED_JSON.search(raw)
    if fenced:
        candidate = fenced.group(1)
    else:
        bare = _BARE_OBJECT.search(raw)
        candidate = bare.group(0) if bare else raw

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse LLM JSON: %s\nRaw: %s", exc, raw[:500])
        raise LLMError(f"LLM returned invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise LLMError(f"LLM returned JSON {type(data).__name__}, expected an object.")
    return data


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=30),
    retry=retry_if_not_exception_type(ConfigurationMissing),
    reraise=True,
)
async def chat_completion(
    system_prompt: str,
    user_message: str,
    *,
    temperature: float | None = None,
    response_format: dict[str, Any] | None = None,
) -> str:
    """Send a chat-completion request and return the assistant's text reply.

    Parameters
    ----------
    system_prompt : str
        The system-level instruction.
    user_message : str
        The user-level content to analyse.
    temperature : float, optional
        Sampling temperature; defaults to ``settings.judge_temperature``.
    response_format : dict, optional
        If supplied, passed as ``response_format`` to the API (e.g. JSON mode).

    Returns
    -------
    str
        Raw text content of the assistant reply.
    """
    client, model = _get_client()
    temp = temperature if temperature is not None else settings.judge_temperature

    kwargs: dict[str, Any] = {
        "model": model,
        "temperature": temp,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ],
    }
    if response_format is not None:
        kwargs["response_format"] = response_format

    try:
        response = await client.chat.completions.create(**kwargs)
        content = response.choices[0].message.content
        if content is None:
            raise LLMError("LLM returned empty content.")
        return content.strip()
    except Exception as exc:
        logger.exception("LLM call failed: %s", exc)
        raise


async def chat_completion_json(
    system_prompt: str,
    user_message: str,
    *,
    temperature: float | None = None,
) -> dict[str, Any]:
    """Like ``chat_completion`` but forces JSON output and parses it."""
    raw = await chat_completion(
        system_prompt,
        user_message,
        temperature=temperature,
        response_format={"type": "json_object"},
    )
    return parse_json_object(raw)
