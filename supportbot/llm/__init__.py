"""LLM integration package for the support bot."""

from .decoding import DecodedPlan, Undecodable, decode_plan
from .factory import LLMFactory, LLMProviderError
from .planner import IntentPlanner
from .synthesizer import SYNTHESIS_ERROR_MESSAGE, ResponseSynthesizer

__all__ = [
    "DecodedPlan",
    "IntentPlanner",
    "LLMFactory",
    "LLMProviderError",
    "ResponseSynthesizer",
    "SYNTHESIS_ERROR_MESSAGE",
    "Undecodable",
    "decode_plan",
]
