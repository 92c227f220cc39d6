"""Prompt management for the support bot."""

from .base import BasePrompt
from .registry import PromptRegistry
from .planning import BasePlanningPrompt, PlanningPromptRegistry
from .synthesis import BaseSynthesisPrompt, SynthesisPromptRegistry

__all__ = [
    "BasePlanningPrompt",
    "BasePrompt",
    "BaseSynthesisPrompt",
    "PlanningPromptRegistry",
    "PromptRegistry",
    "SynthesisPromptRegistry",
]
