"""Base prompt interface for response synthesis."""

from abc import abstractmethod

from langchain_core.prompts import ChatPromptTemplate

from supportbot.llm.prompts.base import BasePrompt


class BaseSynthesisPrompt(BasePrompt):
    """
    Abstract base class for response synthesis prompts.

    The template should expect ``query`` and ``db_result`` variables.
    """

    @abstractmethod
    def build(self) -> ChatPromptTemplate:
        """Build the synthesis prompt template."""
        pass
