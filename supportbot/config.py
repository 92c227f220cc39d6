"""Configuration settings for the support bot and its services."""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root is where the .env file lives
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

_ENV_CONFIG = SettingsConfigDict(
    env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
    env_file_encoding="utf-8",
    extra="ignore",
)


class Settings(BaseSettings):
    """Configuration values for the chat backend."""

    app_name: str = "Storefront Support API"
    environment: str = "development"
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"],
    )

    # Query proxy
    mcp_url: str = Field(
        default="http://localhost:5000",
        description="Base URL of the query proxy service",
    )
    mcp_timeout_seconds: float | None = Field(
        default=30.0,
        description="Transport timeout for proxy calls; None waits indefinitely",
    )

    # Fallback review store
    fallback_store_path: Path = Field(
        default=_PROJECT_ROOT / "data" / "feedback_store.json",
        description="JSON file holding fallback entries for human review",
    )

    # Sessions
    history_max_turns: int = Field(
        default=10,
        ge=2,
        description="Conversation turns kept per session (user + assistant)",
    )
    session_max_age_minutes: int = Field(default=60, ge=1)
    max_sessions: int = Field(default=1000, ge=1)

    model_config = _ENV_CONFIG


class LLMProvider(str, Enum):
    """Chat model providers the planner and synthesizer can run on."""

    GEMINI = "gemini"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class LLMSettings(BaseSettings):
    """LLM provider configuration settings."""

    llm_provider: LLMProvider = Field(
        default=LLMProvider.GEMINI,
        description="LLM provider: gemini, openai, or anthropic",
    )
    llm_model: str | None = Field(
        default=None,
        description="Model name for the selected provider; provider default if unset",
    )
    llm_temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Temperature for LLM responses",
    )
    llm_request_timeout_seconds: float | None = Field(
        default=60.0,
        ge=1.0,
        description="Timeout in seconds for LLM requests",
    )

    # Provider API keys
    google_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("google_api_key", "gemini_api_key"),
        description="Google API key for Gemini (GOOGLE_API_KEY or GEMINI_API_KEY)",
    )
    openai_api_key: str | None = Field(default=None, description="OpenAI API key")
    anthropic_api_key: str | None = Field(default=None, description="Anthropic API key")

    model_config = _ENV_CONFIG

    @field_validator("llm_provider", mode="before")
    @classmethod
    def _lowercase_provider(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    def get_api_key(self) -> str | None:
        """Get the API key for the currently configured provider."""
        return {
            LLMProvider.GEMINI: self.google_api_key,
            LLMProvider.OPENAI: self.openai_api_key,
            LLMProvider.ANTHROPIC: self.anthropic_api_key,
        }[self.llm_provider]


class GraphSettings(BaseSettings):
    """Neo4j connection settings used by the query proxy and catalog."""

    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"
    neo4j_database: str = "neo4j"
    mcp_port: int = 5000

    model_config = _ENV_CONFIG


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


@lru_cache
def get_llm_settings() -> LLMSettings:
    """Get cached LLM settings."""
    return LLMSettings()


@lru_cache
def get_graph_settings() -> GraphSettings:
    """Get cached graph database settings."""
    return GraphSettings()
