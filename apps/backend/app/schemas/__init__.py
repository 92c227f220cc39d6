"""Pydantic schemas."""

from app.schemas.catalog import ProductSchema, ReviewSchema
from app.schemas.chat import ChatRequest, ChatResponse, SessionResetResponse
from app.schemas.fallback import (
    FallbackEntrySchema,
    FallbackUpdateRequest,
    FallbackUpdateResponse,
)

__all__ = [
    # Chat
    "ChatRequest",
    "ChatResponse",
    "SessionResetResponse",
    # Agent console
    "FallbackEntrySchema",
    "FallbackUpdateRequest",
    "FallbackUpdateResponse",
    # Catalog
    "ProductSchema",
    "ReviewSchema",
]
