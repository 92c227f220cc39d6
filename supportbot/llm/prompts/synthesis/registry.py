"""Registry for response synthesis prompt versions."""

from supportbot.llm.prompts.registry import PromptRegistry
from supportbot.llm.prompts.synthesis.base import BaseSynthesisPrompt


class SynthesisPromptRegistry(PromptRegistry[BaseSynthesisPrompt]):
    """Versions of the prompt that turns database rows into a reply."""
