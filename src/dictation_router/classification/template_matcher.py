"""Whole-transcription template recommendation."""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from dictation_router.domains.clinical.lexicon import (
    DEFAULT_LEXICON,
    DEFAULT_WEIGHTS,
    TEMPLATE_TRIGGERS,
    Lexicon,
    ScoringWeights,
    TemplateTrigger,
)
from dictation_router.models import Template, TemplateSuggestion

log = logging.getLogger(__name__)


class TemplateMatcher:
    """Scores templates by identity triggers plus section coverage.

    A template whose id has a registered trigger gains a fixed bonus when any
    trigger term appears in the text. Every template then gains a share of
    ``coverage_weight`` proportional to how many of its sections have at
    least one lexicon keyword present.
    """

    def __init__(
        self,
        lexicon: Lexicon = DEFAULT_LEXICON,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        triggers: Mapping[str, TemplateTrigger] = TEMPLATE_TRIGGERS,
    ) -> None:
        self._lexicon = lexicon
        self._weights = weights
        self._triggers = triggers

    def score_template(self, text_lower: str, template: Template) -> tuple[float, list[str]]:
        """Raw score and reasoning for one template against lower-cased text."""
        score = 0.0
        reasons: list[str] = []

        trigger = self._triggers.get(template.id)
        if trigger is not None and any(term in text_lower for term in trigger.terms):
            score += self._weights.template_identity_bonus
            reasons.append(trigger.reason)

        total = len(template.sections)
        if total:
            matched = sum(
                1 for s in template.sections if self._lexicon.mentions(s.type, text_lower)
            )
            score += (matched / total) * self._weights.coverage_weight
            if matched > self._weights.coverage_reason_min_sections:
                reasons.append(f"matches {matched} sections")

        return score, reasons

    def suggest(
        self, text: str, templates: Sequence[Template]
    ) -> Optional[TemplateSuggestion]:
        """Best template above the acceptance threshold, or ``None``."""
        if not text or not text.strip() or not templates:
            return None

        text_lower = text.lower()
        best: Optional[Template] = None
        best_score = 0.0
        best_reasons: list[str] = []

        for template in templates:
            score, reasons = self.score_template(text_lower, template)
            if score > best_score:
                best, best_score, best_reasons = template, score, reasons

        if best is None or best_score <= self._weights.template_threshold:
            log.debug("No template cleared threshold (best=%.2f)", best_score)
            return None

        return TemplateSuggestion(
            template_id=best.id,
            confidence=min(best_score, 1.0),
            reasoning=best_reasons,
        )


def suggest_template(text: str, templates: Sequence[Template]) -> Optional[TemplateSuggestion]:
    """Suggest a template with the default lexicon, weights and triggers."""
    return TemplateMatcher().suggest(text, templates)
