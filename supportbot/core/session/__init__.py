"""Per-session chat state."""

from supportbot.core.session.store import ChatSession, SessionStore, get_session_store

__all__ = [
    "ChatSession",
    "SessionStore",
    "get_session_store",
]
