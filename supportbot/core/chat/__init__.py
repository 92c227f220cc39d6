"""The chat pipeline: orchestration and history windowing."""

from supportbot.core.chat.history import DEFAULT_MAX_TURNS, append_turn, truncate_history
from supportbot.core.chat.orchestrator import (
    GENERIC_ERROR_MESSAGE,
    HANDOFF_MESSAGE,
    RETRIEVAL_ERROR_MESSAGE,
    UNDERSTANDING_ERROR_MESSAGE,
    ChatOrchestrator,
    ChatOutcome,
    ChatTurnResult,
)

__all__ = [
    "ChatOrchestrator",
    "ChatOutcome",
    "ChatTurnResult",
    "DEFAULT_MAX_TURNS",
    "GENERIC_ERROR_MESSAGE",
    "HANDOFF_MESSAGE",
    "RETRIEVAL_ERROR_MESSAGE",
    "UNDERSTANDING_ERROR_MESSAGE",
    "append_turn",
    "truncate_history",
]
