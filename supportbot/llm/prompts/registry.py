"""Prompt registry for version management."""

from typing import Generic, TypeVar

from .base import BasePrompt

P = TypeVar("P", bound=BasePrompt)


class PromptRegistry(Generic[P]):
    """
    Registry for prompt versions.

    Each prompt family subclasses this registry and gets its own table, so
    planning and synthesis prompts can both have a "v1". Supports "latest"
    as an alias for the most recent version.
    """

    _prompts: dict[str, type[P]]

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        cls._prompts = {}

    @classmethod
    def register(cls, prompt_class: type[P]) -> type[P]:
        """
        Register a prompt class.

        Can be used as a decorator:
            @PlanningPromptRegistry.register
            class PlanningPromptV1(BasePlanningPrompt):
                version = "v1"
                ...
        """
        cls._prompts[prompt_class.version] = prompt_class
        return prompt_class

    @classmethod
    def get(cls, version: str = "latest") -> P:
        """
        Get a prompt instance by version.

        Args:
            version: Version string (e.g., "v1", "v2") or "latest".

        Raises:
            ValueError: If the version is not registered.
        """
        if not cls._prompts:
            raise ValueError("No prompts registered")

        if version == "latest":
            version = cls.list_versions()[-1]

        if version not in cls._prompts:
            available = ", ".join(sorted(cls._prompts.keys()))
            raise ValueError(
                f"Unknown prompt version: {version}. Available: {available}"
            )

        return cls._prompts[version]()

    @classmethod
    def list_versions(cls) -> list[str]:
        """List all registered prompt versions, oldest first."""
        return sorted(cls._prompts.keys(), key=cls._version_sort_key)

    @classmethod
    def unregister(cls, version: str) -> None:
        """Remove a version. Useful for testing."""
        cls._prompts.pop(version, None)

    @staticmethod
    def _version_sort_key(version: str) -> tuple:
        """
        Sort key for version strings.

        Handles versions like "v1", "v2", "v10" correctly.
        """
        if version.startswith("v"):
            try:
                return (0, int(version[1:]), "")
            except ValueError:
                pass
        return (1, 0, version)
