"""Prompt templates for the LLM-assisted path."""

from __future__ import annotations

from dictation_router.prompts.categorization import (
    CATEGORIZE_TRANSCRIPTION_PROMPT,
    build_categorization_prompt,
    render_sections,
)

__all__ = [
    "CATEGORIZE_TRANSCRIPTION_PROMPT",
    "build_categorization_prompt",
    "render_sections",
]
