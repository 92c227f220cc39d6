"""
Best-effort structured decoding of LLM planning output.

The planner asks for a JSON object but models wrap it in prose or code
fences. Decoding tries, in order: the whole text as strict JSON, the first
fenced code block, then the first balanced ``{...}`` segment. Anything else
is reported as undecodable rather than guessed at.
"""

import json
import re
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from supportbot.core.models import QueryPlan

_FENCE_PATTERN = re.compile(r"```(?:json|JSON)?\s*(.*?)```", re.DOTALL)

# Upper bound on the text scanned for a brace-balanced object
_MAX_SCAN_CHARS = 20_000


@dataclass(frozen=True)
class DecodedPlan:
    """The text held a usable plan."""

    plan: QueryPlan
    strategy: str


@dataclass(frozen=True)
class Undecodable:
    """No usable plan could be read from the text."""

    reason: str


DecodeResult = DecodedPlan | Undecodable


def decode_plan(text: str) -> DecodeResult:
    """
    Decode a QueryPlan from raw model output.

    Returns a DecodedPlan tagged with the strategy that succeeded, or
    Undecodable with the reason the last attempt failed.
    """
    if not text or not text.strip():
        return Undecodable("empty response")

    reason = "no JSON object found"
    for strategy, candidate in _candidates(text):
        try:
            payload = json.loads(candidate)
        except json.JSONDecodeError as e:
            reason = f"{strategy}: {e.msg}"
            continue

        if not isinstance(payload, dict):
            reason = f"{strategy}: expected a JSON object, got {type(payload).__name__}"
            continue

        try:
            return DecodedPlan(plan=plan_from_payload(payload), strategy=strategy)
        except (ValidationError, ValueError) as e:
            reason = f"{strategy}: {e}"

    return Undecodable(reason)


def plan_from_payload(payload: dict[str, Any]) -> QueryPlan:
    """
    Build a QueryPlan from the object the model produced.

    The prompt names the query field ``cypher``; ``query`` is accepted too,
    as is ``params`` for ``parameters``.
    """
    intent = payload.get("intent")
    if not isinstance(intent, str) or not intent.strip():
        raise ValueError("plan has no intent")

    query = payload.get("cypher") or payload.get("query")
    if query is not None and not isinstance(query, str):
        raise ValueError("plan query must be a string")

    parameters = payload.get("parameters") or payload.get("params") or {}
    if not isinstance(parameters, dict):
        raise ValueError("plan parameters must be an object")

    return QueryPlan(
        intent=intent.strip(),
        query=query.strip() if query else None,
        parameters=parameters,
    )


def _candidates(text: str):
    """Yield (strategy, candidate_text) pairs in decreasing strictness."""
    stripped = text.strip()
    yield "strict", stripped

    fence = _FENCE_PATTERN.search(stripped)
    if fence:
        yield "fenced", fence.group(1).strip()

    segment = _extract_object_segment(stripped[:_MAX_SCAN_CHARS])
    if segment is not None and segment != stripped:
        yield "braces", segment


def _extract_object_segment(text: str) -> str | None:
    """Return the first brace-balanced ``{...}`` span, respecting strings."""
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for idx in range(start, len(text)):
        ch = text[idx]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start: idx + 1]
    return None
