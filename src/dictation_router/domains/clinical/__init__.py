"""Clinical note domain: keyword lexicon, scoring weights and default templates."""

from __future__ import annotations

from dictation_router.domains.clinical.catalog import DEFAULT_TEMPLATES, get_template, load_templates
from dictation_router.domains.clinical.lexicon import (
    DEFAULT_LEXICON,
    DEFAULT_WEIGHTS,
    TEMPLATE_TRIGGERS,
    Lexicon,
    ScoringWeights,
    TemplateTrigger,
)

__all__ = [
    "DEFAULT_LEXICON",
    "DEFAULT_TEMPLATES",
    "DEFAULT_WEIGHTS",
    "Lexicon",
    "ScoringWeights",
    "TEMPLATE_TRIGGERS",
    "TemplateTrigger",
    "get_template",
    "load_templates",
]
