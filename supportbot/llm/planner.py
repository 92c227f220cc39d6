"""
Intent Planner for the support bot.

Turns a customer message into a QueryPlan: either a Cypher statement to run
against the store graph, or the "fallback" intent that hands off to a human.
"""

import logging
import time
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from langchain_core.language_models import BaseChatModel

from supportbot.core.models import ConversationTurn, QueryPlan
from supportbot.llm.content import (
    estimate_tokens,
    extract_usage,
    model_name,
    normalize_content,
)
from supportbot.llm.decoding import DecodedPlan, decode_plan
from supportbot.llm.factory import LLMFactory
from supportbot.llm.prompts.planning import PlanningPromptRegistry

logger = logging.getLogger(__name__)

# ANSI colors for visibility in logs
_COLOR_MAGENTA = "\033[95m"
_COLOR_CYAN = "\033[96m"
_COLOR_YELLOW = "\033[93m"
_COLOR_GREEN = "\033[92m"
_COLOR_RESET = "\033[0m"

# Placeholder the prompt uses for the signed-in user's id
USER_ID_PLACEHOLDER = "$userId"


class IntentPlanner:
    """
    LLM-backed intent planner.

    Never raises from ``plan``: transport errors and unreadable output both
    come back as a fallback plan.
    """

    def __init__(
        self,
        llm: BaseChatModel | None = None,
        prompt_version: str = "latest",
    ):
        """
        Initialize the planner.

        Args:
            llm: LangChain chat model to use.
                Uses LLMFactory.create_from_settings() if not provided.
            prompt_version: Version of the planning prompt (e.g., "v1", "latest").
        """
        self._llm = llm or LLMFactory.create_from_settings()
        self._prompt = PlanningPromptRegistry.get(prompt_version)
        self._template = self._prompt.build()

    @property
    def prompt_version(self) -> str:
        """Get the current prompt version."""
        return self._prompt.version

    @property
    def model_info(self) -> str:
        """Get information about the current LLM."""
        return model_name(self._llm)

    async def plan(
        self,
        user_query: str,
        user_id: str | None = None,
        chat_history: Sequence[ConversationTurn] = (),
        dynamic_examples: str = "",
    ) -> QueryPlan:
        """
        Produce a QueryPlan for a user message.

        Args:
            user_query: The customer's message.
            user_id: Signed-in user's id, if any.
            chat_history: Recent turns, oldest first.
            dynamic_examples: Few-shot text compiled from past human corrections.

        Returns:
            The decoded plan, or a fallback plan if the call or decoding failed.
        """
        variables = self.build_variables(user_query, user_id, chat_history, dynamic_examples)

        try:
            messages = self._template.format_messages(**variables)
            prompt_text = self._format_messages(messages)
            prompt_tokens_est = estimate_tokens(prompt_text)
            start_time = time.time()

            self._log_llm_request(prompt_text, prompt_tokens_est, start_time)

            response = await self._llm.ainvoke(messages)
            raw_content = normalize_content(response.content)

            self._log_llm_response(
                raw_content,
                prompt_tokens_est,
                extract_usage(response),
                start_time,
            )
        except Exception as e:
            logger.error("Intent planning call failed: %s", e, exc_info=True)
            return QueryPlan.fallback(message=f"LLM planning failed: {e}")

        result = decode_plan(raw_content)
        if not isinstance(result, DecodedPlan):
            logger.warning("Planner output undecodable (%s); using fallback", result.reason)
            return QueryPlan.fallback()

        logger.info(
            "Planned intent=%s via %s decoding",
            result.plan.intent,
            result.strategy,
        )
        return self._bind_user(result.plan, user_id)

    # -------------------------
    # Prompt Building
    # -------------------------

    def build_variables(
        self,
        user_query: str,
        user_id: str | None,
        chat_history: Sequence[ConversationTurn],
        dynamic_examples: str,
    ) -> dict[str, str]:
        """Assemble the template variables for one planning call."""
        examples_block = ""
        if dynamic_examples.strip():
            examples_block = (
                "Learn from these past conversations that needed a human agent:\n"
                f"{dynamic_examples.strip()}\n\n---\n\n"
            )

        return {
            "dynamic_examples": examples_block,
            "chat_history": self._format_history(chat_history),
            "user_context": self._format_user_context(user_id),
            "query": user_query,
        }

    def _format_history(self, chat_history: Sequence[ConversationTurn]) -> str:
        """Render prior turns as a transcript block."""
        lines = []
        for turn in chat_history:
            content = turn.content.strip()
            if not content:
                continue
            label = "User" if turn.role == "user" else "Assistant"
            lines.append(f"{label}: {content}")

        if not lines:
            return ""
        return "Conversation so far:\n" + "\n".join(lines) + "\n\n---\n\n"

    def _format_user_context(self, user_id: str | None) -> str:
        if user_id:
            return f"The current user's id is available as the $userId parameter (userId: {user_id})."
        return "No user is signed in; questions about the user's own data must return fallback."

    def _bind_user(self, plan: QueryPlan, user_id: str | None) -> QueryPlan:
        """Inject the user id when the query references the placeholder."""
        if plan.query and USER_ID_PLACEHOLDER in plan.query and user_id:
            parameters = {**plan.parameters, "userId": user_id}
            return plan.model_copy(update={"parameters": parameters})
        return plan

    # -------------------------
    # Logging Helpers
    # -------------------------

    def _format_messages(self, messages: list[Any]) -> str:
        """Format prompt messages for logging."""
        formatted = []
        for msg in messages:
            role = getattr(msg, "type", "unknown").upper()
            content = getattr(msg, "content", "")
            formatted.append(f"{role}:\n{content}")
        return "\n\n".join(formatted)

    def _log_llm_request(
        self,
        prompt_text: str,
        prompt_tokens_est: int,
        start_time: float,
    ) -> None:
        header = (
            f"{_COLOR_MAGENTA}[PLANNER_LLM_REQUEST]{_COLOR_RESET} "
            f"{_COLOR_CYAN}model={self.model_info}{_COLOR_RESET} "
            f"{_COLOR_YELLOW}prompt_version={self.prompt_version}{_COLOR_RESET} "
            f"{_COLOR_GREEN}prompt_tokens_est={prompt_tokens_est}{_COLOR_RESET} "
            f"{_COLOR_YELLOW}start_time={_format_timestamp(start_time)}{_COLOR_RESET}"
        )
        logger.debug("%s\n%s%s%s", header, _COLOR_CYAN, prompt_text, _COLOR_RESET)
        logger.info(header)

    def _log_llm_response(
        self,
        raw_content: str,
        prompt_tokens_est: int,
        usage: dict[str, Any],
        start_time: float,
    ) -> None:
        end_time = time.time()
        duration_ms = int((end_time - start_time) * 1000)
        usage_total = usage.get("total_tokens")

        header = (
            f"{_COLOR_MAGENTA}[PLANNER_LLM_RESPONSE]{_COLOR_RESET} "
            f"{_COLOR_CYAN}model={self.model_info}{_COLOR_RESET} "
            f"{_COLOR_GREEN}prompt_tokens_est={prompt_tokens_est}{_COLOR_RESET} "
            f"{_COLOR_GREEN}response_tokens_est={estimate_tokens(raw_content)}{_COLOR_RESET} "
            f"{_COLOR_YELLOW}end_time={_format_timestamp(end_time)}{_COLOR_RESET} "
            f"{_COLOR_YELLOW}duration_ms={duration_ms}{_COLOR_RESET}"
        )
        if usage_total is not None:
            header += f" {_COLOR_YELLOW}usage_total={usage_total}{_COLOR_RESET}"

        logger.info("%s\n%s%s%s", header, _COLOR_CYAN, raw_content, _COLOR_RESET)


def _format_timestamp(ts: float) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()
