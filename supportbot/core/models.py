"""
Data models shared by the chat pipeline.

ConversationTurn and QueryPlan are produced per request; FallbackEntry is the
persisted record a human reviewer works through in the agent console.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

FALLBACK_INTENT = "fallback"


class TurnRole(str, Enum):
    """Speaker of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class ConversationTurn(BaseModel):
    """A single message in a chat session."""

    model_config = ConfigDict(use_enum_values=True)

    role: TurnRole
    content: str


class QueryPlan(BaseModel):
    """
    Structured answer plan produced by the intent planner.

    Either ``intent`` is ``"fallback"`` (no query) or ``query`` holds the
    Cypher statement to run with ``parameters``.
    """

    intent: str
    query: str | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)
    message: str | None = Field(
        default=None,
        description="Diagnostic attached when the planner itself failed",
    )

    @property
    def is_fallback(self) -> bool:
        return self.intent == FALLBACK_INTENT

    @classmethod
    def fallback(cls, message: str | None = None) -> "QueryPlan":
        """Build the safe default plan."""
        return cls(intent=FALLBACK_INTENT, message=message)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class FallbackEntry(BaseModel):
    """
    A pipeline outcome recorded for human review.

    Serialized with camelCase keys (``userQuery``, ``llmPlan``...) so the
    stored file and the agent console API share one shape.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(default_factory=lambda: uuid4().hex)
    user_query: str
    llm_plan: dict[str, Any] | None = None
    db_result: Any = None
    llm_reply: str
    human_reply: str | None = None
    timestamp: str = Field(default_factory=utc_timestamp)

    @property
    def is_resolved(self) -> bool:
        """True once a reviewer supplied a non-blank reply."""
        return bool(self.human_reply and self.human_reply.strip())

    def to_record(self) -> dict[str, Any]:
        """JSON-ready dict in the stored (camelCase) shape."""
        return self.model_dump(by_alias=True, mode="json")
