"""
LLM binding for the researcher: prompt in, pydantic object out.

All models go through one OpenAI-compatible chat completions endpoint
(OPENAI_BASE_URL may point at a gateway that also serves non-OpenAI models).
When tools are given, tool calls are executed and fed back until the model answers.
"""

import json
import logging
import re
from functools import lru_cache
from typing import Any, TypeVar

import openai
from openai import OpenAI
from pydantic import BaseModel, ValidationError

from showcase.core.config import LLM_API_TIMEOUT, LLM_MAX_TOKENS, MAX_TOOL_ROUNDS, OPENAI_API_KEY, OPENAI_BASE_URL
from showcase.core.errors import LlmResponseError, ServiceUnavailableError
from showcase.researcher.tools import execute_tool

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


@lru_cache(maxsize=1)
def get_client() -> OpenAI:
    if not OPENAI_API_KEY:
        raise ServiceUnavailableError("LLM is not configured (set OPENAI_API_KEY).")
    return OpenAI(api_key=OPENAI_API_KEY, base_url=OPENAI_BASE_URL or None, timeout=LLM_API_TIMEOUT)


def extract_json(text: str) -> str:
    """Pull the JSON object out of a reply that may carry code fences or chatter around it."""
    text = (text or "").strip()
    fenced = _FENCE_RE.search(text)
    if fenced:
        text = fenced.group(1).strip()
    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end < start:
        return text
    return text[start:end + 1]


def _bind(content: str, output_type: type[M]) -> M:
    raw = extract_json(content)
    try:
        return output_type.model_validate_json(raw)
    except ValidationError as e:
        raise LlmResponseError(f"Could not bind LLM output to {output_type.__name__}: {e}", raw=content) from e


def _assistant_tool_message(msg: Any) -> dict[str, Any]:
    return {
        "role": "assistant",
        "content": msg.content or "",
        "tool_calls": [
            {
                "id": tc.id,
                "type": "function",
                "function": {"name": tc.function.name, "arguments": tc.function.arguments or "{}"},
            }
            for tc in msg.tool_calls
        ],
    }


def _parse_arguments(raw: str | None) -> dict[str, Any]:
    try:
        args = json.loads(raw) if raw else {}
    except json.JSONDecodeError:
        return {}
    return args if isinstance(args, dict) else {}


def create_object(
    prompt: str,
    output_type: type[M],
    model: str,
    system: str | None = None,
    tools: list[dict[str, Any]] | None = None,
    client: Any = None,
) -> M:
    """
    Ask model for a JSON object and validate it as output_type.
    Raises ServiceUnavailableError when the LLM cannot be reached, LlmResponseError on unusable output.
    """
    client = client or get_client()
    messages: list[dict[str, Any]] = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})
    logger.info(
        "[llm:create_object] IN  model=%s output=%s prompt_len=%d tools=%s",
        model, output_type.__name__, len(prompt), [t["function"]["name"] for t in tools or []],
    )

    for round_no in range(MAX_TOOL_ROUNDS + 1):
        kwargs: dict[str, Any] = {"model": model, "messages": messages, "max_tokens": LLM_MAX_TOKENS}
        if tools:
            kwargs["tools"] = tools
            # Last round: no more tool calls, the model has to answer
            if round_no == MAX_TOOL_ROUNDS:
                kwargs["tool_choice"] = "none"
        else:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            response = client.chat.completions.create(**kwargs)
        except openai.APIError as e:
            logger.warning("[llm:create_object] model=%s request failed: %s", model, e)
            raise ServiceUnavailableError(f"LLM request failed for model {model}: {e}") from e

        msg = response.choices[0].message if response.choices else None
        if msg is None:
            raise LlmResponseError(f"Model {model} returned no choices.")
        if getattr(msg, "tool_calls", None):
            messages.append(_assistant_tool_message(msg))
            for tc in msg.tool_calls:
                result = execute_tool(tc.function.name, _parse_arguments(tc.function.arguments))
                messages.append({"role": "tool", "tool_call_id": tc.id, "content": result})
            logger.info("[llm:create_object] round=%d tool_calls=%s", round_no, [tc.function.name for tc in msg.tool_calls])
            continue

        content = (msg.content or "").strip()
        if not content:
            raise LlmResponseError(f"Model {model} returned empty content.")
        logger.info("[llm:create_object] OUT model=%s content_len=%d rounds=%d", model, len(content), round_no + 1)
        return _bind(content, output_type)

    raise LlmResponseError(f"Model {model} kept calling tools after {MAX_TOOL_ROUNDS} rounds.")
