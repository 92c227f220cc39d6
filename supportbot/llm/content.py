"""Helpers for reading chat model responses."""

import re
from typing import Any

_WORD_PATTERN = re.compile(r"\S+")


def normalize_content(content: Any) -> str:
    """
    Normalize LLM message content to a plain string.

    Gemini may return a list of content blocks instead of a string;
    text is pulled from each block and joined.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts: list[str] = []
        for item in content:
            if isinstance(item, dict):
                parts.append(str(item.get("text") or item.get("content") or ""))
            else:
                parts.append(str(item))
        return "".join(parts).strip()
    return str(content)


def estimate_tokens(text: Any) -> int:
    """Estimate token count using a simple word-based heuristic."""
    if text is None:
        return 0
    if not isinstance(text, str):
        text = str(text)
    if not text:
        return 0
    return max(1, int(len(_WORD_PATTERN.findall(text)) * 1.3))


def extract_usage(response: Any) -> dict[str, Any]:
    """Extract token usage metadata from a LangChain response."""
    usage: dict[str, Any] = {}

    usage_metadata = getattr(response, "usage_metadata", None)
    if isinstance(usage_metadata, dict):
        usage.update(usage_metadata)

    response_metadata = getattr(response, "response_metadata", None)
    if isinstance(response_metadata, dict):
        token_usage = response_metadata.get("token_usage") or response_metadata.get("usage")
        if isinstance(token_usage, dict):
            usage.update(token_usage)

    return usage


def model_name(llm: Any) -> str:
    """Best-effort model identifier for log lines."""
    name = getattr(llm, "model_name", None) or getattr(llm, "model", None)
    if isinstance(name, str) and name:
        return name
    return type(llm).__name__
