"""Response synthesizer for turning database rows into a customer reply."""

import json
import logging
from typing import Any

from langchain_core.language_models import BaseChatModel

from supportbot.llm.content import normalize_content
from supportbot.llm.factory import LLMFactory
from supportbot.llm.prompts.synthesis import SynthesisPromptRegistry

logger = logging.getLogger(__name__)

SYNTHESIS_ERROR_MESSAGE = (
    "I apologize, but I encountered an issue generating a response. "
    "Please try again later."
)


class ResponseSynthesizer:
    """
    Service for generating natural language replies from query results.

    Uses the LLM as a best-effort formatter; the output is returned as is.
    """

    def __init__(
        self,
        llm: BaseChatModel | None = None,
        prompt_version: str = "latest",
    ):
        """
        Initialize the synthesizer.

        Args:
            llm: LangChain chat model to use.
                Uses LLMFactory.create_from_settings() if not provided.
            prompt_version: Version of the prompt to use (e.g., "v1", "latest").
        """
        self._llm = llm or LLMFactory.create_from_settings()
        self._prompt = SynthesisPromptRegistry.get(prompt_version)
        self._template = self._prompt.build()

    @property
    def prompt_version(self) -> str:
        return self._prompt.version

    async def synthesize(self, user_query: str, db_result: Any) -> str:
        """
        Generate a reply for the customer from the rows found for their query.

        Args:
            user_query: The customer's original message.
            db_result: Rows returned by the query proxy (may be empty or None).

        Returns:
            The reply text, or a fixed apology if generation fails.
        """
        try:
            messages = self._template.format_messages(
                query=user_query,
                db_result=json.dumps(db_result, indent=2, default=str),
            )
            response = await self._llm.ainvoke(messages)
            reply = normalize_content(response.content).strip()

            logger.info(
                "Generated reply for query: '%s...' (%d chars)",
                user_query[:50],
                len(reply),
            )
            return reply

        except Exception as e:
            logger.error("Failed to generate reply: %s", e, exc_info=True)
            return SYNTHESIS_ERROR_MESSAGE
