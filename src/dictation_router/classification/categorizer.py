"""Rule-based categorization of a transcription into template sections."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from dictation_router.classification.scorer import SectionScorer
from dictation_router.classification.segmenter import split_into_fragments
from dictation_router.domains.clinical.lexicon import DEFAULT_WEIGHTS, ScoringWeights
from dictation_router.models import (
    CategorizationGroup,
    ClassificationResult,
    TemplateSection,
)

log = logging.getLogger(__name__)


class ContentCategorizer:
    """Segment -> score every section -> keep confident fragments -> group.

    Never raises for string input: no evidence simply yields an empty list.
    """

    def __init__(
        self,
        scorer: Optional[SectionScorer] = None,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
    ) -> None:
        self._scorer = scorer or SectionScorer(weights=weights)
        self._weights = weights

    @property
    def scorer(self) -> SectionScorer:
        return self._scorer

    def classify_fragments(
        self, text: str, sections: Sequence[TemplateSection]
    ) -> list[ClassificationResult]:
        """Per-fragment results above the confidence floor, in source order."""
        if not text or not text.strip() or not sections:
            return []

        results: list[ClassificationResult] = []
        fragments = split_into_fragments(
            text, min_length=self._weights.min_fragment_length
        )
        for fragment in fragments:
            result = self._scorer.classify(fragment, sections)
            if result is not None and result.confidence > self._weights.confidence_floor:
                results.append(result)

        log.debug(
            "Kept %d of %d fragments above confidence %.2f",
            len(results), len(fragments), self._weights.confidence_floor,
        )
        return results

    def categorize(
        self, text: str, sections: Sequence[TemplateSection]
    ) -> list[CategorizationGroup]:
        """Group confident fragments by section id."""
        grouped: dict[str, tuple[float, list[str]]] = {}
        for result in self.classify_fragments(text, sections):
            confidence, content = grouped.get(result.section_id, (0.0, []))
            content.append(result.suggested_content)
            grouped[result.section_id] = (max(confidence, result.confidence), content)

        return [
            CategorizationGroup(
                section_id=section_id,
                confidence=confidence,
                suggested_content=" ".join(content),
            )
            for section_id, (confidence, content) in grouped.items()
        ]


def categorize_content(
    text: str, sections: Sequence[TemplateSection]
) -> list[CategorizationGroup]:
    """Categorize with the default lexicon and weights."""
    return ContentCategorizer().categorize(text, sections)
