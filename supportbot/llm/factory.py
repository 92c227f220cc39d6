"""
Chat model construction for the planner and synthesizer.

Each provider in ``LLMProvider`` maps to the LangChain integration that
serves it. Integrations are imported on first use, so only the configured
provider's package has to be installed.
"""

import importlib
from dataclasses import dataclass
from typing import Any

from langchain_core.language_models import BaseChatModel

from supportbot.config import LLMProvider, LLMSettings, get_llm_settings


class LLMProviderError(Exception):
    """Raised when LLM provider configuration is invalid."""

    pass


@dataclass(frozen=True)
class _Integration:
    module: str
    class_name: str
    default_model: str
    # Keyword the chat model class takes its API key under
    key_kwarg: str
    package: str


_INTEGRATIONS: dict[LLMProvider, _Integration] = {
    LLMProvider.GEMINI: _Integration(
        module="langchain_google_genai",
        class_name="ChatGoogleGenerativeAI",
        default_model="gemini-2.5-flash",
        key_kwarg="google_api_key",
        package="langchain-google-genai",
    ),
    LLMProvider.OPENAI: _Integration(
        module="langchain_openai",
        class_name="ChatOpenAI",
        default_model="gpt-4o-mini",
        key_kwarg="api_key",
        package="storefront-support[openai]",
    ),
    LLMProvider.ANTHROPIC: _Integration(
        module="langchain_anthropic",
        class_name="ChatAnthropic",
        default_model="claude-3-5-sonnet-latest",
        key_kwarg="api_key",
        package="storefront-support[anthropic]",
    ),
}


class LLMFactory:
    """Builds LangChain chat models for the configured provider."""

    DEFAULT_MODELS: dict[str, str] = {
        provider.value: integration.default_model
        for provider, integration in _INTEGRATIONS.items()
    }

    @classmethod
    def create(
        cls,
        provider: str | LLMProvider,
        model: str | None = None,
        temperature: float = 0.0,
        api_key: str | None = None,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> BaseChatModel:
        """
        Create a chat model.

        Args:
            provider: "gemini", "openai" or "anthropic" (any case).
            model: Model name; the provider's default when omitted.
            temperature: Sampling temperature.
            api_key: Provider key; when omitted the integration reads its own
                environment variable.
            timeout: Request timeout in seconds.
            **kwargs: Passed through to the chat model class.

        Raises:
            LLMProviderError: Unknown provider, or its package is not installed.
        """
        integration = _INTEGRATIONS[cls._resolve(provider)]
        model_class = cls._load(integration)

        init_kwargs: dict[str, Any] = {
            "model": model or integration.default_model,
            "temperature": temperature,
            **kwargs,
        }
        if api_key:
            init_kwargs[integration.key_kwarg] = api_key
        if timeout is not None:
            init_kwargs["timeout"] = timeout

        return model_class(**init_kwargs)

    @classmethod
    def create_from_settings(cls, settings: LLMSettings | None = None) -> BaseChatModel:
        """Create the chat model described by LLM_* settings."""
        settings = settings or get_llm_settings()
        return cls.create(
            provider=settings.llm_provider,
            model=settings.llm_model,
            temperature=settings.llm_temperature,
            api_key=settings.get_api_key(),
            timeout=settings.llm_request_timeout_seconds,
        )

    @staticmethod
    def _resolve(provider: str | LLMProvider) -> LLMProvider:
        if isinstance(provider, LLMProvider):
            return provider
        try:
            return LLMProvider(provider.strip().lower())
        except ValueError:
            supported = ", ".join(p.value for p in LLMProvider)
            raise LLMProviderError(
                f"Unknown provider: {provider}. Supported: {supported}"
            ) from None

    @staticmethod
    def _load(integration: _Integration) -> type[BaseChatModel]:
        try:
            module = importlib.import_module(integration.module)
        except ImportError as e:
            raise LLMProviderError(
                f"{integration.module} is not installed. "
                f"Run: pip install '{integration.package}'"
            ) from e
        return getattr(module, integration.class_name)
