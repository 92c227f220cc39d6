"""Registered planning prompt versions."""

from supportbot.llm.prompts.planning.versions import v1  # noqa: F401
