"""Fallback review store and few-shot example compilation."""

from supportbot.core.feedback.examples import FewShotExampleCompiler
from supportbot.core.feedback.store import FallbackStore

__all__ = [
    "FallbackStore",
    "FewShotExampleCompiler",
]
