"""Base prompt interface for intent planning."""

from abc import abstractmethod

from langchain_core.prompts import ChatPromptTemplate

from supportbot.llm.prompts.base import BasePrompt


class BasePlanningPrompt(BasePrompt):
    """
    Abstract base class for intent planning prompts.

    All planning prompt versions must inherit from this class and
    implement the build method.
    """

    @abstractmethod
    def build(self) -> ChatPromptTemplate:
        """
        Build the planning prompt template.

        The template should expect the following variables:
        - dynamic_examples: Few-shot text compiled from human corrections
        - chat_history: Formatted recent conversation turns
        - user_context: Line describing the signed-in user, if any
        - query: The new user message

        Returns:
            A ChatPromptTemplate ready for use with an LLM.
        """
        pass
