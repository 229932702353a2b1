"""Framework layer: configuration and startup checks."""

from __future__ import annotations

from dictation_router.core.config import APIConfig, AppSettings, LLMConfig, ObservabilityConfig
from dictation_router.core.startup_checks import validate_settings

__all__ = [
    "APIConfig",
    "AppSettings",
    "LLMConfig",
    "ObservabilityConfig",
    "validate_settings",
]
