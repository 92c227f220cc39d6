"""Registered synthesis prompt versions."""

from supportbot.llm.prompts.synthesis.versions import v1  # noqa: F401
