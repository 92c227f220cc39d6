"""Chat request and response schemas."""

from pydantic import BaseModel, Field, field_validator


class ChatRequest(BaseModel):
    """Incoming chat message."""

    query: str = Field(min_length=1, max_length=2000, description="User's latest message")
    session_id: str | None = Field(
        default=None,
        description="Session to continue; omitted on the first message",
    )
    user_id: str | None = Field(default=None, description="Signed-in user's id")

    @field_validator("query")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Query is required in the request body.")
        return value


class ChatResponse(BaseModel):
    """Reply for a chat message."""

    reply: str
    session_id: str


class SessionResetResponse(BaseModel):
    session_id: str
    message: str = "Conversation history cleared"
