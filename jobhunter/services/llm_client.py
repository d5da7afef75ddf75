import json
import logging
import re
from typing import Any, TypeVar

import groq
import requests
from groq import Groq
from pydantic import TypeAdapter, ValidationError

from jobhunter.config import settings
from jobhunter.core.exceptions import LLMCallError, LLMNotConfigured, LLMParseError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_FENCE_OPEN = re.compile(r"^```(?:json|markdown|md|text)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")


def is_groq_configured() -> bool:
    return bool(settings.groq_api_key)


def is_perplexity_configured() -> bool:
    return bool(settings.perplexity_api_key)


def _groq_client() -> Groq:
    return Groq(api_key=settings.groq_api_key, timeout=settings.http_timeout_seconds, max_retries=0)


def call_groq(
    system_prompt: str,
    user_prompt: str,
    temperature: float = 0.2,
    max_tokens: int | None = None,
    json_mode: bool = False,
) -> str:
    """Single Groq chat completion. Returns the message text, never empty."""
    if not is_groq_configured():
        raise LLMNotConfigured("GROQ_API_KEY not configured")
    kwargs: dict[str, Any] = {
        "model": settings.groq_model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        "temperature": temperature,
    }
    if max_tokens is not None:
        kwargs["max_tokens"] = max_tokens
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}
    try:
        response = _groq_client().chat.completions.create(**kwargs)
    except groq.APIError as e:
        logger.warning("Groq call failed: %s", e)
        raise LLMCallError(f"Groq API error: {e}") from e
    text = (response.choices[0].message.content or "").strip() if response.choices else ""
    if not text:
        raise LLMCallError("Groq returned an empty response")
    logger.debug("Groq response length=%d", len(text))
    return text


def call_perplexity(system_prompt: str, user_prompt: str, temperature: float = 0.2) -> str:
    """Perplexity chat completion over plain HTTP (OpenAI-compatible endpoint)."""
    if not is_perplexity_configured():
        raise LLMNotConfigured("Perplexity API key not configured")
    try:
        r = requests.post(
            f"{settings.perplexity_base_url}/chat/completions",
            headers={
                "Authorization": f"Bearer {settings.perplexity_api_key}",
                "Content-Type": "application/json",
            },
            json={
                "model": settings.perplexity_model,
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                "temperature": temperature,
            },
            timeout=settings.http_timeout_seconds,
        )
        data = r.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("Perplexity call failed: %s", e)
        raise LLMCallError(f"Failed to fetch from Perplexity: {e}") from e
    if not r.ok:
        message = ((data or {}).get("error") or {}).get("message") if isinstance(data, dict) else None
        logger.warning("Perplexity API error status=%s", r.status_code)
        raise LLMCallError(message or "Failed to fetch from Perplexity")
    try:
        return data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise LLMCallError("Perplexity returned no content") from e


def strip_code_fence(text: str) -> str:
    clean = _FENCE_OPEN.sub("", (text or "").strip())
    return _FENCE_CLOSE.sub("", clean).strip()


def _load_json(text: str) -> Any:
    clean = strip_code_fence(text)
    try:
        return json.loads(clean)
    except json.JSONDecodeError:
        pass
    # Models sometimes wrap the payload in prose; take the outermost object or array.
    m = re.search(r"(\{[\s\S]*\}|\[[\s\S]*\])", clean)
    if not m:
        raise LLMParseError("No JSON found in model output", raw=text)
    try:
        return json.loads(m.group(0))
    except json.JSONDecodeError as e:
        raise LLMParseError(f"Invalid JSON in model output: {e}", raw=text) from e


def decode_json(text: str, target: type[T] | Any) -> T:
    """Decode model output into `target` or raise LLMParseError.

    `target` is anything pydantic's TypeAdapter accepts: a model class,
    `list[str]`, `dict[str, Model]` and so on.
    """
    obj = _load_json(text)
    try:
        return TypeAdapter(target).validate_python(obj)
    except ValidationError as e:
        raise LLMParseError(f"Model output did not match expected shape: {e.error_count()} error(s)", raw=text) from e
