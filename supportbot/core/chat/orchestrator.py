"""
Chat Orchestrator.

Runs one customer message through the pipeline:
1. Record the message in the (copied) history
2. Compile few-shot examples from human corrections
3. Plan: fallback intent or a Cypher query
4. Execute the query through the proxy
5. Synthesize a reply from the rows
6. Log a fallback entry whenever the answer did not come from the data
7. Record the reply and trim the history window

The orchestrator holds no session state: history goes in and comes back out.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from supportbot.core.chat.history import DEFAULT_MAX_TURNS, append_turn, truncate_history
from supportbot.core.models import ConversationTurn, FallbackEntry, QueryPlan, TurnRole

logger = logging.getLogger(__name__)

HANDOFF_MESSAGE = (
    "I'm sorry, I cannot directly answer that question. "
    "I'm connecting you to a human support agent who can assist you further."
)
RETRIEVAL_ERROR_MESSAGE = (
    "I encountered an issue retrieving information from our database. "
    "Please try again in a moment or consider rephrasing your query."
)
UNDERSTANDING_ERROR_MESSAGE = (
    "I'm sorry, I couldn't understand your request due to an internal "
    "processing error. Please try again."
)
GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


# -----------------------------
# Collaborator interfaces
# -----------------------------


class Planner(Protocol):
    async def plan(
        self,
        user_query: str,
        user_id: str | None = None,
        chat_history: Sequence[ConversationTurn] = (),
        dynamic_examples: str = "",
    ) -> QueryPlan: ...


class QueryRunner(Protocol):
    async def run(self, query: str, parameters: dict[str, Any] | None = None) -> list[dict[str, Any]]: ...


class Synthesizer(Protocol):
    async def synthesize(self, user_query: str, db_result: Any) -> str: ...


class FallbackRecorder(Protocol):
    def log(
        self,
        user_query: str,
        llm_plan: QueryPlan | dict[str, Any] | None,
        db_result: Any,
        llm_reply: str,
        human_reply: str | None = None,
    ) -> FallbackEntry: ...


class ExampleSource(Protocol):
    def compile(self) -> str: ...


# -----------------------------
# Results
# -----------------------------


class ChatOutcome(str, Enum):
    """Which branch of the pipeline produced the reply."""

    ANSWERED = "answered"
    HANDOFF = "handoff"
    RETRIEVAL_ERROR = "retrieval_error"
    UNDERSTANDING_ERROR = "understanding_error"
    ERROR = "error"


@dataclass
class ChatTurnResult:
    """Reply for one message plus the updated history."""

    reply: str
    history: list[ConversationTurn]
    outcome: ChatOutcome
    plan: QueryPlan | None = None
    db_result: Any = None
    fallback_entry: FallbackEntry | None = None


# -----------------------------
# Orchestrator
# -----------------------------


class ChatOrchestrator:
    """Sequential planner → proxy → synthesizer pipeline with fallback logging."""

    def __init__(
        self,
        planner: Planner,
        query_runner: QueryRunner,
        synthesizer: Synthesizer,
        fallback_recorder: FallbackRecorder,
        example_source: ExampleSource | None = None,
        max_history_turns: int = DEFAULT_MAX_TURNS,
    ):
        self._planner = planner
        self._runner = query_runner
        self._synthesizer = synthesizer
        self._recorder = fallback_recorder
        self._examples = example_source
        self._max_history_turns = max_history_turns

    async def handle(
        self,
        message: str,
        history: Sequence[ConversationTurn] = (),
        user_id: str | None = None,
    ) -> ChatTurnResult:
        """
        Answer one customer message.

        Args:
            message: The customer's text.
            history: Prior turns, oldest first. Not modified.
            user_id: Signed-in user's id, if any.

        Returns:
            ChatTurnResult with the reply and the new history window.
        """
        turns = append_turn(history, TurnRole.USER, message)
        plan: QueryPlan | None = None
        db_result: Any = None
        entry: FallbackEntry | None = None

        try:
            examples = ""
            if self._examples is not None:
                # Store reads and writes block; keep them off the event loop
                examples = await asyncio.to_thread(self._examples.compile)
            plan = await self._planner.plan(
                message,
                user_id=user_id,
                chat_history=turns,
                dynamic_examples=examples,
            )
            logger.info("Plan for %r: intent=%s", message[:50], plan.intent)

            if plan.is_fallback:
                reply, outcome = HANDOFF_MESSAGE, ChatOutcome.HANDOFF
                entry = await self._record(message, plan, None, reply)

            elif plan.query:
                try:
                    db_result = await self._runner.run(plan.query, plan.parameters)
                except Exception as e:
                    logger.error("Query execution via proxy failed: %s", e)
                    reply, outcome = RETRIEVAL_ERROR_MESSAGE, ChatOutcome.RETRIEVAL_ERROR
                    entry = await self._record(message, plan, None, reply)
                else:
                    reply = await self._synthesizer.synthesize(message, db_result)
                    outcome = ChatOutcome.ANSWERED

            else:
                logger.warning("Plan has neither fallback intent nor query: %s", plan)
                reply, outcome = UNDERSTANDING_ERROR_MESSAGE, ChatOutcome.UNDERSTANDING_ERROR
                entry = await self._record(message, plan, None, reply)

        except Exception:
            logger.exception("Unexpected error while handling chat message")
            reply, outcome = GENERIC_ERROR_MESSAGE, ChatOutcome.ERROR
            entry = await self._record(message, plan, db_result, reply)

        turns = append_turn(turns, TurnRole.ASSISTANT, reply)
        return ChatTurnResult(
            reply=reply,
            history=truncate_history(turns, self._max_history_turns),
            outcome=outcome,
            plan=plan,
            db_result=db_result,
            fallback_entry=entry,
        )

    async def _record(
        self,
        message: str,
        plan: QueryPlan | None,
        db_result: Any,
        reply: str,
    ) -> FallbackEntry | None:
        """Log a fallback entry off the event loop; a failing store never changes the reply."""
        try:
            return await asyncio.to_thread(self._recorder.log, message, plan, db_result, reply)
        except Exception:
            logger.exception("Failed to record fallback entry")
            return None
