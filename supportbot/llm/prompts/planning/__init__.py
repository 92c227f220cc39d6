"""Intent planning prompts."""

from supportbot.llm.prompts.planning.base import BasePlanningPrompt
from supportbot.llm.prompts.planning.registry import PlanningPromptRegistry

# Import versions to trigger registration
from supportbot.llm.prompts.planning import versions  # noqa: F401

__all__ = [
    "BasePlanningPrompt",
    "PlanningPromptRegistry",
]
