"""
Parsing helpers for JSON replies from chat models.
Models frequently wrap JSON in Markdown code fences; strip them first.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict

from pydantic import ValidationError

from app.domain.errors import LLMResponseParseError
from app.domain.models import SentimentSubScores
from app.domain.schemas.sentiment import SentimentReply

_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\r?\n?")
_FENCE_CLOSE = re.compile(r"\r?\n?```\s*$")


def strip_code_fence(text: str) -> str:
    """
    Remove an optional leading ```json / ``` fence and trailing ``` fence.
    Text without a leading fence is returned trimmed but otherwise unchanged.
    """
    stripped = (text or "").strip()
    if not stripped.startswith("```"):
        return stripped
    stripped = _FENCE_OPEN.sub("", stripped, count=1)
    stripped = _FENCE_CLOSE.sub("", stripped, count=1)
    return stripped.strip()


def parse_llm_json(text: str) -> Dict[str, Any]:
    """
    Parse an LLM reply into a JSON object.

    Raises:
        LLMResponseParseError: empty reply, invalid JSON, or not an object
    """
    body = strip_code_fence(text)
    if not body:
        raise LLMResponseParseError("Empty LLM response")
    try:
        parsed = json.loads(body)
    except json.JSONDecodeError as exc:
        raise LLMResponseParseError(f"LLM response is not valid JSON: {exc.msg}") from exc
    if not isinstance(parsed, dict):
        raise LLMResponseParseError("LLM response JSON is not an object")
    return parsed


def parse_sentiment_reply(text: str) -> SentimentSubScores:
    """
    Parse and validate the sentiment sub-scores reply.

    Raises:
        LLMResponseParseError: unparseable JSON or schema mismatch
    """
    payload = parse_llm_json(text)
    try:
        return SentimentReply.model_validate(payload).to_sub_scores()
    except ValidationError as exc:
        raise LLMResponseParseError(
            f"LLM response does not match sentiment schema ({exc.error_count()} errors)"
        ) from exc
