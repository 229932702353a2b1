"""Nested pydantic-settings configuration for the application.

Each sub-config reads its own ``DICTATION_<GROUP>_*`` env vars::

    export DICTATION_LLM_API_KEY=sk-...
    export DICTATION_LLM_MODEL=gpt-4
    export DICTATION_OBSERVABILITY_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class LLMConfig(BaseSettings):
    """Chat-completion backend for the LLM-assisted categorizer.

    An empty ``api_key`` disables the LLM path; the precedence service then
    serves rule-based results only.
    """

    model_config = {"env_prefix": "DICTATION_LLM_"}

    api_key: str = ""
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-3.5-turbo"
    temperature: float = 0.1
    timeout: float = 60.0
    default_max_tokens: int = 2000
    max_tokens_by_model: dict[str, int] = Field(
        default_factory=lambda: {"gpt-3.5-turbo": 1500}
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key.strip())

    def max_tokens_for(self, model: str) -> int:
        return self.max_tokens_by_model.get(model, self.default_max_tokens)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``DICTATION_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "DICTATION_OBSERVABILITY_"}

    service_name: str = "dictation-router"
    log_level: str = "INFO"


class APIConfig(BaseSettings):
    """HTTP API metadata.

    Env vars use ``DICTATION_API_`` prefix.
    """

    model_config = {"env_prefix": "DICTATION_API_"}

    title: str = "dictation-router"
    description: str = (
        "Routes clinical dictation into note template sections and suggests templates."
    )


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    api: APIConfig = Field(default_factory=APIConfig)
