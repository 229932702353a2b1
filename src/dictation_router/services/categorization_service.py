"""Categorization service: chooses between the LLM and rule-based engines.

Precedence: a well-formed LLM result wins outright. Any LLM-path failure
(missing credential, transport, HTTP status, unparseable reply) falls back
to the rule-based result. The two are never merged.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from dictation_router.classification.ai_categorizer import AICategorizer
from dictation_router.classification.categorizer import ContentCategorizer
from dictation_router.classification.template_matcher import TemplateMatcher
from dictation_router.core.config import AppSettings
from dictation_router.exceptions import CategorizerError, ConfigurationError, ValidationError
from dictation_router.hooks.usage_tracker import IUsageTracker
from dictation_router.models import (
    AICategorizationResult,
    CategorizationGroup,
    CategorizedNote,
    NoteSection,
    Template,
    TemplateSuggestion,
)

log = logging.getLogger(__name__)


class CategorizationService:
    """Entry point used by the API and CLI."""

    def __init__(
        self,
        categorizer: Optional[ContentCategorizer] = None,
        template_matcher: Optional[TemplateMatcher] = None,
        ai_categorizer: Optional[AICategorizer] = None,
    ) -> None:
        self._categorizer = categorizer or ContentCategorizer()
        self._matcher = template_matcher or TemplateMatcher()
        self._ai = ai_categorizer

    @property
    def llm_enabled(self) -> bool:
        return self._ai is not None and self._ai.is_configured

    def categorize(self, text: str, template: Template) -> list[CategorizationGroup]:
        return self._categorizer.categorize(text, template.sections)

    def suggest_template(
        self, text: str, templates: Sequence[Template]
    ) -> Optional[TemplateSuggestion]:
        return self._matcher.suggest(text, templates)

    async def ai_categorize(self, text: str, template: Template) -> AICategorizationResult:
        """LLM path only; failures propagate to the caller."""
        if self._ai is None:
            raise ConfigurationError("LLM-assisted categorization is not configured")
        return await self._ai.categorize(text, template)

    async def categorize_note(
        self, text: str, template: Template, *, prefer_ai: bool = True
    ) -> CategorizedNote:
        """Categorize ``text`` using the LLM when available, else the rule-based engine.

        Raises:
            ValidationError: Blank text or a template without sections.
        """
        if not text or not text.strip():
            raise ValidationError("Transcription is empty")
        if not template.sections:
            raise ValidationError(f"Template {template.id!r} has no sections")

        fallback_reason: Optional[str] = None
        if prefer_ai and self.llm_enabled and self._ai is not None:
            try:
                result = await self._ai.categorize(text, template)
            except CategorizerError as exc:
                fallback_reason = type(exc).__name__
                log.warning(
                    "LLM categorization failed, using rule-based result",
                    extra={"template_id": template.id, "error_type": fallback_reason},
                )
            else:
                return CategorizedNote(
                    template_id=template.id,
                    source="llm",
                    sections=[
                        NoteSection(
                            section_id=c.section_id,
                            content=c.content,
                            confidence=c.confidence,
                            icd10_codes=c.icd10_codes or [],
                        )
                        for c in result.categorizations
                    ],
                    summary=result.summary,
                )
        elif prefer_ai:
            fallback_reason = ConfigurationError.__name__

        groups = self._categorizer.categorize(text, template.sections)
        return CategorizedNote(
            template_id=template.id,
            source="rules",
            sections=[
                NoteSection(
                    section_id=g.section_id,
                    content=g.suggested_content,
                    confidence=g.confidence,
                )
                for g in groups
            ],
            fallback_reason=fallback_reason,
        )


def create_categorization_service(
    settings: AppSettings,
    usage_tracker: Optional[IUsageTracker] = None,
) -> CategorizationService:
    """Wire the default engines; the LLM path is attached only when a key is configured."""
    ai: Optional[AICategorizer] = None
    if settings.llm.is_configured:
        log.info("LLM-assisted categorization enabled (model=%s)", settings.llm.model)
        ai = AICategorizer(settings.llm, usage_tracker=usage_tracker)
    else:
        log.info("LLM-assisted categorization disabled; rule-based engine only")
    return CategorizationService(ai_categorizer=ai)
