"""Categorization engines: rule-based pipeline and the LLM-assisted path."""

from __future__ import annotations

from dictation_router.classification.ai_categorizer import (
    AICategorizer,
    parse_categorization_response,
)
from dictation_router.classification.categorizer import ContentCategorizer, categorize_content
from dictation_router.classification.entity_extractor import (
    assess_symptom_severity,
    extract_clinical_entities,
    extract_medical_entities,
    extract_medications,
    remove_overlapping_entities,
)
from dictation_router.classification.scorer import SectionScorer
from dictation_router.classification.segmenter import split_into_fragments
from dictation_router.classification.template_matcher import TemplateMatcher, suggest_template

__all__ = [
    "AICategorizer",
    "ContentCategorizer",
    "SectionScorer",
    "TemplateMatcher",
    "assess_symptom_severity",
    "categorize_content",
    "extract_clinical_entities",
    "extract_medical_entities",
    "extract_medications",
    "parse_categorization_response",
    "remove_overlapping_entities",
    "split_into_fragments",
    "suggest_template",
]
