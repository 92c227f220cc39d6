"""
Tests for chat model construction.

Provider classes are patched where they live, so no network client is built.
"""

import sys
from unittest.mock import MagicMock, patch

import pytest

from supportbot.config import LLMProvider, LLMSettings
from supportbot.llm.factory import LLMFactory, LLMProviderError

PROVIDER_CLASSES = {
    "gemini": ("langchain_google_genai.ChatGoogleGenerativeAI", "google_api_key"),
    "openai": ("langchain_openai.ChatOpenAI", "api_key"),
    "anthropic": ("langchain_anthropic.ChatAnthropic", "api_key"),
}


def _settings(monkeypatch, **env: str) -> LLMSettings:
    for name in ("LLM_PROVIDER", "LLM_MODEL", "LLM_TEMPERATURE", "LLM_REQUEST_TIMEOUT_SECONDS",
                 "GOOGLE_API_KEY", "GEMINI_API_KEY",
                 "OPENAI_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    return LLMSettings(_env_file=None)


class TestCreate:
    """Tests for LLMFactory.create."""

    @pytest.mark.parametrize("provider", sorted(PROVIDER_CLASSES))
    def test_key_passed_under_provider_keyword(self, provider: str) -> None:
        target, key_kwarg = PROVIDER_CLASSES[provider]
        with patch(target) as model_class:
            model = LLMFactory.create(provider, api_key="secret", timeout=20.0)

        assert model is model_class.return_value
        model_class.assert_called_once_with(
            model=LLMFactory.DEFAULT_MODELS[provider],
            temperature=0.0,
            timeout=20.0,
            **{key_kwarg: "secret"},
        )

    def test_defaults_cover_every_provider(self) -> None:
        assert set(LLMFactory.DEFAULT_MODELS) == {p.value for p in LLMProvider}

    def test_no_key_and_no_timeout_left_to_integration(self) -> None:
        with patch("langchain_google_genai.ChatGoogleGenerativeAI") as model_class:
            LLMFactory.create("gemini", model="gemini-2.5-pro", temperature=0.3, top_p=0.9)

        model_class.assert_called_once_with(model="gemini-2.5-pro", temperature=0.3, top_p=0.9)

    def test_provider_name_normalized(self) -> None:
        with patch("langchain_openai.ChatOpenAI") as model_class:
            LLMFactory.create("  OpenAI ")
        model_class.assert_called_once()

    def test_unknown_provider(self) -> None:
        with pytest.raises(LLMProviderError, match="Unknown provider: mistral"):
            LLMFactory.create("mistral")

    def test_missing_integration_package(self) -> None:
        with patch.dict(sys.modules, {"langchain_anthropic": None}):
            with pytest.raises(LLMProviderError, match=r"storefront-support\[anthropic\]"):
                LLMFactory.create("anthropic")


class TestCreateFromSettings:
    """Tests for building the model from LLM_* settings."""

    def test_uses_configured_model_key_and_timeout(self, monkeypatch) -> None:
        settings = _settings(
            monkeypatch,
            LLM_PROVIDER="OPENAI",
            LLM_MODEL="gpt-4o",
            OPENAI_API_KEY="sk-env",
            LLM_REQUEST_TIMEOUT_SECONDS="15",
        )

        with patch("langchain_openai.ChatOpenAI") as model_class:
            LLMFactory.create_from_settings(settings)

        model_class.assert_called_once_with(
            model="gpt-4o", temperature=0.0, api_key="sk-env", timeout=15.0
        )

    def test_gemini_key_alias(self, monkeypatch) -> None:
        settings = _settings(monkeypatch, GEMINI_API_KEY="g-env")

        assert settings.llm_provider is LLMProvider.GEMINI
        assert settings.get_api_key() == "g-env"

        with patch("langchain_google_genai.ChatGoogleGenerativeAI") as model_class:
            LLMFactory.create_from_settings(settings)

        assert model_class.call_args.kwargs["google_api_key"] == "g-env"
        assert model_class.call_args.kwargs["model"] == "gemini-2.5-flash"

    def test_key_of_other_provider_ignored(self, monkeypatch) -> None:
        settings = _settings(monkeypatch, LLM_PROVIDER="anthropic", OPENAI_API_KEY="sk-openai")

        assert settings.get_api_key() is None

    def test_invalid_provider_rejected_by_settings(self, monkeypatch) -> None:
        with pytest.raises(ValueError):
            _settings(monkeypatch, LLM_PROVIDER="mistral")

    def test_defaults_to_cached_settings(self, monkeypatch) -> None:
        settings = _settings(monkeypatch, LLM_PROVIDER="anthropic")
        monkeypatch.setattr("supportbot.llm.factory.get_llm_settings", lambda: settings)

        with patch("langchain_anthropic.ChatAnthropic", return_value=MagicMock()) as model_class:
            LLMFactory.create_from_settings()

        assert model_class.call_args.kwargs["model"] == "claude-3-5-sonnet-latest"
