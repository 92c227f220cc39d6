"""Agent console schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FallbackEntrySchema(BaseModel):
    """A fallback entry as shown in the agent console."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    user_query: str
    llm_plan: dict[str, Any] | None = None
    db_result: Any = None
    llm_reply: str
    human_reply: str | None = None
    timestamp: str


class FallbackUpdateRequest(BaseModel):
    """Human reply for one entry, keyed by its timestamp (or id)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    timestamp: str = Field(min_length=1)
    human_reply: str


class FallbackUpdateResponse(BaseModel):
    message: str
