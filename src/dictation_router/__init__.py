"""dictation-router: route clinical dictation into structured note templates.

Rule-based engine::

    from dictation_router import categorize_content, suggest_template, DEFAULT_TEMPLATES

    groups = categorize_content(text, template.sections)
    suggestion = suggest_template(text, DEFAULT_TEMPLATES)

LLM-assisted path with rule-based fallback::

    from dictation_router import AppSettings, create_categorization_service

    service = create_categorization_service(AppSettings())
    note = await service.categorize_note(text, template)
"""

from __future__ import annotations

from dictation_router.classification import (
    AICategorizer,
    ContentCategorizer,
    SectionScorer,
    TemplateMatcher,
    categorize_content,
    extract_clinical_entities,
    split_into_fragments,
    suggest_template,
)
from dictation_router.core.config import AppSettings, LLMConfig
from dictation_router.domains.clinical import (
    DEFAULT_LEXICON,
    DEFAULT_TEMPLATES,
    DEFAULT_WEIGHTS,
    Lexicon,
    ScoringWeights,
    get_template,
)
from dictation_router.exceptions import (
    ApiError,
    CategorizerError,
    ConfigurationError,
    DictationRouterError,
    ParseError,
    TemplateNotFoundError,
    TransportError,
    ValidationError,
)
from dictation_router.models import (
    AICategorization,
    AICategorizationResult,
    CategorizationGroup,
    CategorizedNote,
    ClassificationResult,
    ClinicalEntities,
    ICD10Code,
    MedicalEntity,
    MedicationDetails,
    NoteSection,
    SectionType,
    SymptomSeverity,
    Template,
    TemplateSection,
    TemplateSuggestion,
)
from dictation_router.services import CategorizationService, create_categorization_service

__all__ = [
    # Models
    "AICategorization",
    "AICategorizationResult",
    "CategorizationGroup",
    "CategorizedNote",
    "ClassificationResult",
    "ClinicalEntities",
    "ICD10Code",
    "MedicalEntity",
    "MedicationDetails",
    "NoteSection",
    "SectionType",
    "SymptomSeverity",
    "Template",
    "TemplateSection",
    "TemplateSuggestion",
    # Engines
    "AICategorizer",
    "ContentCategorizer",
    "SectionScorer",
    "TemplateMatcher",
    "categorize_content",
    "extract_clinical_entities",
    "split_into_fragments",
    "suggest_template",
    # Knowledge base
    "DEFAULT_LEXICON",
    "DEFAULT_TEMPLATES",
    "DEFAULT_WEIGHTS",
    "Lexicon",
    "ScoringWeights",
    "get_template",
    # Config / services
    "AppSettings",
    "LLMConfig",
    "CategorizationService",
    "create_categorization_service",
    # Errors
    "ApiError",
    "CategorizerError",
    "ConfigurationError",
    "DictationRouterError",
    "ParseError",
    "TemplateNotFoundError",
    "TransportError",
    "ValidationError",
]
