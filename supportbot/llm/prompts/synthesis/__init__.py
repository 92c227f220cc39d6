"""Response synthesis prompts."""

from supportbot.llm.prompts.synthesis.base import BaseSynthesisPrompt
from supportbot.llm.prompts.synthesis.registry import SynthesisPromptRegistry

# Import versions to trigger registration
from supportbot.llm.prompts.synthesis import versions  # noqa: F401

__all__ = [
    "BaseSynthesisPrompt",
    "SynthesisPromptRegistry",
]
