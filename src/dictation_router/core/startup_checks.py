"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dictation_router.core.config import AppSettings

log = logging.getLogger(__name__)


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_base_url(settings)
    _check_temperature(settings)
    _check_api_key(settings)


def _check_base_url(settings: AppSettings) -> None:
    if not settings.llm.base_url.startswith(("http://", "https://")):
        raise ValueError(
            f"DICTATION_LLM_BASE_URL must be an http(s) URL, got {settings.llm.base_url!r}."
        )


def _check_temperature(settings: AppSettings) -> None:
    if not 0.0 <= settings.llm.temperature <= 2.0:
        raise ValueError(
            f"DICTATION_LLM_TEMPERATURE must be within [0, 2], got {settings.llm.temperature}."
        )


def _check_api_key(settings: AppSettings) -> None:
    """A missing key is legal: the service runs rule-based only."""
    if not settings.llm.is_configured:
        log.warning(
            "DICTATION_LLM_API_KEY is not set. LLM-assisted categorization is disabled; "
            "notes will be categorized by the rule-based engine."
        )
