"""Per-section affinity scoring for a single fragment.

Score = keyword evidence (whole-word vs. bare substring matches) plus one
contextual bonus per section type, normalized by the size of the candidate
keyword set and clamped to [0, 1].
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, Optional, Sequence

from dictation_router.domains.clinical.lexicon import (
    DEFAULT_LEXICON,
    DEFAULT_WEIGHTS,
    Lexicon,
    ScoringWeights,
)
from dictation_router.models import ClassificationResult, SectionType, TemplateSection

log = logging.getLogger(__name__)

_RATIO = re.compile(r"\d+/\d+")
_MEASUREMENT = re.compile(r"\d+\s*(bpm|mmhg|degrees|kg|lbs)")


def _contains_any(*terms: str) -> Callable[[str], bool]:
    return lambda fragment: any(term in fragment for term in terms)


def _has_measurement(fragment: str) -> bool:
    return bool(_RATIO.search(fragment) or _MEASUREMENT.search(fragment))


def _never(fragment: str) -> bool:
    return False


# Rules receive the lower-cased, trimmed fragment.
CONTEXTUAL_RULES: dict[SectionType, Callable[[str], bool]] = {
    SectionType.SYMPTOMS: _contains_any("complain", "report", "feel", "experience"),
    SectionType.DIAGNOSIS: _contains_any("assess", "diagnos", "condition", "impression"),
    SectionType.TREATMENT: _contains_any("recommend", "prescrib", "treat", "therapy"),
    SectionType.VITALS: _has_measurement,
    SectionType.EXAMINATION: _contains_any("exam", "find", "appear", "normal"),
    SectionType.PLAN: _contains_any("follow", "return", "next", "continue"),
    SectionType.HISTORY: _never,
    SectionType.NOTES: _never,
}

_missing_rules = set(SectionType) - set(CONTEXTUAL_RULES)
if _missing_rules:
    raise RuntimeError(f"No contextual rule for section types: {sorted(_missing_rules)}")


def _candidate_keywords(base: Iterable[str], extra: Iterable[str]) -> list[str]:
    """Lower-cased union of both keyword lists, first occurrence wins."""
    seen: dict[str, None] = {}
    for kw in (*base, *extra):
        kw_lower = kw.lower().strip()
        if kw_lower:
            seen.setdefault(kw_lower, None)
    return list(seen)


class SectionScorer:
    """Scores how well a fragment fits a template section."""

    def __init__(
        self,
        lexicon: Lexicon = DEFAULT_LEXICON,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
    ) -> None:
        self._lexicon = lexicon
        self._weights = weights

    @property
    def weights(self) -> ScoringWeights:
        return self._weights

    def contextual_score(self, fragment: str, section_type: SectionType) -> float:
        """Bonus for section-specific phrasing; ``fragment`` must already be lower-cased."""
        rule = CONTEXTUAL_RULES[section_type]
        return self._weights.contextual_clue if rule(fragment) else 0.0

    def score(self, fragment: str, section: TemplateSection) -> float:
        """Affinity of ``fragment`` for ``section`` in [0, 1]; 0 means no evidence."""
        sentence = fragment.lower().strip()
        if not sentence:
            return 0.0

        keywords = _candidate_keywords(
            self._lexicon.keywords_for(section.type), section.keywords
        )

        raw = 0.0
        for kw in keywords:
            if kw not in sentence:
                continue
            if f" {kw} " in sentence or sentence.startswith(kw) or sentence.endswith(kw):
                raw += self._weights.exact_match
            else:
                raw += self._weights.partial_match

        raw += self.contextual_score(sentence, section.type)

        divisor = max(len(keywords) * self._weights.keyword_normalization, 1.0)
        return min(max(raw / divisor, 0.0), 1.0)

    def classify(
        self, fragment: str, sections: Sequence[TemplateSection]
    ) -> Optional[ClassificationResult]:
        """Best-scoring section for ``fragment``; ties go to the earlier section."""
        best_section: Optional[TemplateSection] = None
        best_score = 0.0
        for section in sections:
            section_score = self.score(fragment, section)
            if section_score > best_score:
                best_section, best_score = section, section_score

        if best_section is None:
            return None

        log.debug(
            "Fragment classified as %s (%.2f)", best_section.id, best_score
        )
        return ClassificationResult(
            section_id=best_section.id,
            confidence=best_score,
            suggested_content=fragment,
        )
