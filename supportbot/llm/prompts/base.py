"""Base prompt interface shared by all prompt families."""

from abc import ABC, abstractmethod

from langchain_core.prompts import ChatPromptTemplate


class BasePrompt(ABC):
    """
    Abstract base class for versioned prompts.

    Subclasses set ``version`` and ``description`` and implement ``build``.
    """

    # Version identifier (e.g., "v1", "v2")
    version: str

    # Human-readable description of this prompt version
    description: str

    @abstractmethod
    def build(self) -> ChatPromptTemplate:
        """Build the prompt template."""
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} version={self.version}>"
