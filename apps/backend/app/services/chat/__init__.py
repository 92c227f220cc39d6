from app.services.chat.service import (
    ChatReply,
    ChatService,
    get_chat_service,
    get_fallback_store,
)

__all__ = [
    "ChatReply",
    "ChatService",
    "get_chat_service",
    "get_fallback_store",
]
