"""
Session store for chat conversations.

Holds each browser session's user id and recent chat history in memory.
The orchestrator never touches this store; the chat service loads a
session, passes its history in, and saves what comes back.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from threading import Lock
from uuid import uuid4

from supportbot.core.models import ConversationTurn


@dataclass
class ChatSession:
    """State for a single chat session."""

    session_id: str
    user_id: str | None = None
    chat_history: list[ConversationTurn] = field(default_factory=list)
    last_updated: datetime = field(default_factory=datetime.now)
    turn_count: int = 0

    def is_stale(self, max_age: timedelta) -> bool:
        """Check if the session is older than max_age."""
        return datetime.now() - self.last_updated > max_age


class SessionStore:
    """
    Thread-safe in-memory store of chat sessions.

    Sessions expire after ``max_age`` without activity; when the store is
    full, stale sessions are dropped first and then the least recently used.
    Callers get copies, so a session only changes through ``save``.
    """

    def __init__(
        self,
        max_age: timedelta = timedelta(hours=1),
        max_sessions: int = 1000,
    ):
        """
        Initialize the session store.

        Args:
            max_age: Inactivity after which a session is discarded.
            max_sessions: Maximum number of sessions to keep.
        """
        self._sessions: dict[str, ChatSession] = {}
        self._lock = Lock()
        self._max_age = max_age
        self._max_sessions = max_sessions

    def get_or_create(self, session_id: str | None = None) -> ChatSession:
        """
        Load a live session, or start a new one.

        An unknown or expired ``session_id`` starts a fresh session under the
        same id; no id at all generates one.
        """
        with self._lock:
            if session_id:
                session = self._sessions.get(session_id)
                if session is not None and not session.is_stale(self._max_age):
                    return self._copy(session)
                self._sessions.pop(session_id, None)

            session = ChatSession(session_id=session_id or uuid4().hex)
            return self._copy(session)

    def save(
        self,
        session_id: str,
        chat_history: list[ConversationTurn],
        user_id: str | None = None,
    ) -> None:
        """
        Store the updated history for a session.

        ``user_id`` only overwrites the stored id when given.
        """
        with self._lock:
            existing = self._sessions.get(session_id)
            if existing is None and len(self._sessions) >= self._max_sessions:
                self._evict()

            session = existing or ChatSession(session_id=session_id)
            session.chat_history = list(chat_history)
            if user_id is not None:
                session.user_id = user_id
            session.last_updated = datetime.now()
            session.turn_count += 1
            self._sessions[session_id] = session

    def clear(self, session_id: str) -> bool:
        """
        Drop a session.

        Returns:
            True if the session existed.
        """
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _copy(self, session: ChatSession) -> ChatSession:
        return ChatSession(
            session_id=session.session_id,
            user_id=session.user_id,
            chat_history=list(session.chat_history),
            last_updated=session.last_updated,
            turn_count=session.turn_count,
        )

    def _evict(self) -> None:
        """Remove stale sessions, then the oldest if still full. Lock held."""
        stale_ids = [
            sid for sid, s in self._sessions.items()
            if s.is_stale(self._max_age)
        ]
        for sid in stale_ids:
            del self._sessions[sid]

        if len(self._sessions) >= self._max_sessions:
            oldest = min(self._sessions.items(), key=lambda x: x[1].last_updated)
            del self._sessions[oldest[0]]


_default_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Get the process-wide session store, built from settings on first use."""
    global _default_store
    if _default_store is None:
        from supportbot.config import get_settings

        settings = get_settings()
        _default_store = SessionStore(
            max_age=timedelta(minutes=settings.session_max_age_minutes),
            max_sessions=settings.max_sessions,
        )
    return _default_store
