"""Registry for intent planning prompt versions."""

from supportbot.llm.prompts.planning.base import BasePlanningPrompt
from supportbot.llm.prompts.registry import PromptRegistry


class PlanningPromptRegistry(PromptRegistry[BasePlanningPrompt]):
    """Versions of the prompt that turns a user message into a query plan."""
