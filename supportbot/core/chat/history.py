"""Sliding window over a session's conversation turns."""

from collections.abc import Sequence

from supportbot.core.models import ConversationTurn, TurnRole

# Five user/assistant pairs
DEFAULT_MAX_TURNS = 10


def append_turn(
    history: Sequence[ConversationTurn],
    role: TurnRole,
    content: str,
) -> list[ConversationTurn]:
    """Return a new history with one more turn at the end."""
    return [*history, ConversationTurn(role=role, content=content)]


def truncate_history(
    history: Sequence[ConversationTurn],
    max_turns: int = DEFAULT_MAX_TURNS,
) -> list[ConversationTurn]:
    """Keep only the most recent ``max_turns`` turns, dropping the oldest."""
    if max_turns <= 0:
        return []
    return list(history[-max_turns:])
