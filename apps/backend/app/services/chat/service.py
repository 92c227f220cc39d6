"""
Chat Service.

Binds the stateless chat orchestrator to the session store:
1. Load (or start) the caller's session
2. Run the orchestrator over the session's history
3. Save the trimmed history back
"""

import logging
from dataclasses import dataclass

from supportbot.config import get_settings
from supportbot.core.chat import ChatOrchestrator, ChatOutcome
from supportbot.core.feedback import FallbackStore, FewShotExampleCompiler
from supportbot.core.session import SessionStore, get_session_store
from supportbot.graph import QueryProxyClient
from supportbot.llm import IntentPlanner, LLMFactory, ResponseSynthesizer

logger = logging.getLogger(__name__)


@dataclass
class ChatReply:
    """Result of one chat request."""

    reply: str
    session_id: str
    outcome: ChatOutcome


class ChatService:
    """Service for answering chat messages within a session."""

    def __init__(
        self,
        orchestrator: ChatOrchestrator,
        sessions: SessionStore,
    ):
        self._orchestrator = orchestrator
        self._sessions = sessions

    async def chat(
        self,
        query: str,
        session_id: str | None = None,
        user_id: str | None = None,
    ) -> ChatReply:
        """
        Answer a message in the context of its session.

        Args:
            query: The customer's message.
            session_id: Session to continue; a new one is started if omitted
                or expired.
            user_id: Signed-in user's id; remembered on the session.

        Returns:
            ChatReply with the reply text and the session id to send next time.
        """
        session = self._sessions.get_or_create(session_id)
        effective_user = user_id or session.user_id

        logger.info(
            "Chat message: session=%s user=%s history_turns=%d",
            session.session_id,
            effective_user,
            len(session.chat_history),
        )

        result = await self._orchestrator.handle(
            query,
            history=session.chat_history,
            user_id=effective_user,
        )

        self._sessions.save(session.session_id, result.history, user_id=user_id)
        return ChatReply(
            reply=result.reply,
            session_id=session.session_id,
            outcome=result.outcome,
        )

    def reset(self, session_id: str) -> bool:
        """Forget a session's history. Returns False if it did not exist."""
        return self._sessions.clear(session_id)


# Global instances
_fallback_store: FallbackStore | None = None
_chat_service: ChatService | None = None


def get_fallback_store() -> FallbackStore:
    """Get the fallback store shared by the chat pipeline and the agent console."""
    global _fallback_store
    if _fallback_store is None:
        _fallback_store = FallbackStore(get_settings().fallback_store_path)
    return _fallback_store


def build_chat_service(store: FallbackStore) -> ChatService:
    """Wire the production pipeline from settings."""
    settings = get_settings()
    llm = LLMFactory.create_from_settings()

    orchestrator = ChatOrchestrator(
        planner=IntentPlanner(llm=llm),
        query_runner=QueryProxyClient.from_settings(),
        synthesizer=ResponseSynthesizer(llm=llm),
        fallback_recorder=store,
        example_source=FewShotExampleCompiler(store),
        max_history_turns=settings.history_max_turns,
    )
    return ChatService(orchestrator=orchestrator, sessions=get_session_store())


def get_chat_service() -> ChatService:
    """Get the chat service instance."""
    global _chat_service
    if _chat_service is None:
        _chat_service = build_chat_service(get_fallback_store())
    return _chat_service
