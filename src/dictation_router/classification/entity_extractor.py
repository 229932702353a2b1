"""Regex-based extraction of medications, vital signs, procedures and devices.

Pure functions over the clinical vocabularies. No LLM calls, no state:
the same text always yields the same entities.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional, Pattern

from dictation_router.domains.clinical.lexicon import DEFAULT_LEXICON
from dictation_router.domains.clinical.vocabulary import (
    DEVICE_TERMS,
    MEDICATION_NAMES,
    MEDICATION_QUALIFIERS,
    PROCEDURE_TERMS,
    SEVERITY_TERMS,
)
from dictation_router.models import (
    ClinicalEntities,
    EntityDetails,
    EntityType,
    MedicalEntity,
    MedicationDetails,
    SectionType,
    SymptomSeverity,
)

log = logging.getLogger(__name__)

MEDICATION_CONFIDENCE = 0.9
VITAL_CONFIDENCE = 0.95
DEVICE_CONFIDENCE = 0.85
PROCEDURE_CONFIDENCE = 0.8
KNOWN_MEDICATION_CONFIDENCE = 0.9
UNKNOWN_MEDICATION_CONFIDENCE = 0.7
SEVERITY_HIT_CONFIDENCE = 0.8
SEVERITY_DEFAULT_CONFIDENCE = 0.5
SEVERITY_WINDOW = 50

_NAME = r"(?P<name>[a-z][a-z-]*[a-z])"
_DOSE = r"(?P<amount>\d+(?:\.\d+)?)\s*(?P<unit>mg|mcg|ml|units?|tablets?)\b"
_FREQUENCY = (
    r"(?P<frequency>once|twice|three times|four times|bd|od|tds|qds)"
    r"(?:\s+(?P<period>daily|a day|per day|at night|in the morning|in morning))?\b"
)

# "<name> <dose> [<frequency> [<period>]]"
DOSED_MEDICATION: Pattern[str] = re.compile(
    rf"\b{_NAME}\s+{_DOSE}(?:\s+{_FREQUENCY})?", re.IGNORECASE
)
# "take|give|prescribe|start <name> [<dose>]"
DIRECTED_MEDICATION: Pattern[str] = re.compile(
    rf"\b(?:take|taking|give|given|prescribed?|start(?:ed)?)\s+{_NAME}\b(?:\s+{_DOSE})?",
    re.IGNORECASE,
)

_NOT_A_NAME = MEDICATION_QUALIFIERS | {
    "take", "taking", "took", "give", "given", "gave", "prescribe", "prescribed",
    "start", "started", "the", "her", "his", "their", "with", "and", "then",
}

_TEMPERATURE_UNIT = r"(?:\s*(?P<unit>°c|°f|celsius|fahrenheit))?"

# (pattern, unit used when the dictation omits one)
VITAL_PATTERNS: tuple[tuple[Pattern[str], Optional[str]], ...] = (
    (re.compile(r"\bblood pressure\s+(?P<value>\d+/\d+)(?:\s*(?P<unit>mmhg))?", re.IGNORECASE), "mmHg"),
    (re.compile(r"\bbp\s+(?P<value>\d+/\d+)(?:\s*(?P<unit>mmhg))?", re.IGNORECASE), "mmHg"),
    (re.compile(r"\bheart rate\s+(?P<value>\d+)(?:\s*(?P<unit>bpm)\b)?", re.IGNORECASE), None),
    (re.compile(r"\bhr\s+(?P<value>\d+)(?:\s*(?P<unit>bpm)\b)?", re.IGNORECASE), None),
    (re.compile(rf"\btemperature\s+(?P<value>\d+(?:\.\d+)?){_TEMPERATURE_UNIT}", re.IGNORECASE), None),
    (re.compile(rf"\btemp\s+(?P<value>\d+(?:\.\d+)?){_TEMPERATURE_UNIT}", re.IGNORECASE), None),
    (re.compile(r"\boxygen saturation\s+(?P<value>\d+)(?P<unit>%)?", re.IGNORECASE), None),
    (re.compile(r"\bo2 sat\s+(?P<value>\d+)(?P<unit>%)?", re.IGNORECASE), None),
)


def _term_pattern(term: str) -> Pattern[str]:
    return re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)


PROCEDURE_PATTERNS: tuple[Pattern[str], ...] = tuple(_term_pattern(t) for t in PROCEDURE_TERMS)
DEVICE_PATTERNS: tuple[Pattern[str], ...] = tuple(_term_pattern(t) for t in DEVICE_TERMS)
SYMPTOM_PATTERNS: tuple[Pattern[str], ...] = tuple(
    _term_pattern(t) for t in DEFAULT_LEXICON.keywords_for(SectionType.SYMPTOMS)
)


def _frequency(match: re.Match[str]) -> Optional[str]:
    if not match.group("frequency"):
        return None
    return " ".join(p for p in (match.group("frequency"), match.group("period")) if p)


def _dosage(match: re.Match[str]) -> Optional[str]:
    if not match.group("amount"):
        return None
    return f"{match.group('amount')} {match.group('unit')}"


def medication_confidence(name: str) -> Optional[float]:
    """Confidence that ``name`` is a drug, or None when it cannot be one."""
    lowered = name.lower()
    if lowered in MEDICATION_NAMES:
        return KNOWN_MEDICATION_CONFIDENCE
    if lowered in _NOT_A_NAME or len(lowered) <= 3:
        return None
    return UNKNOWN_MEDICATION_CONFIDENCE


def _term_entities(
    text: str, patterns: Iterable[Pattern[str]], entity_type: EntityType, confidence: float
) -> list[MedicalEntity]:
    return [
        MedicalEntity(
            type=entity_type,
            text=m.group(0),
            start_index=m.start(),
            end_index=m.end(),
            confidence=confidence,
        )
        for pattern in patterns
        for m in pattern.finditer(text)
    ]


def _medication_entities(text: str) -> list[MedicalEntity]:
    entities: list[MedicalEntity] = []
    for m in DOSED_MEDICATION.finditer(text):
        if medication_confidence(m.group("name")) is None:
            continue
        entities.append(
            MedicalEntity(
                type="medication",
                text=m.group(0),
                start_index=m.start(),
                end_index=m.end(),
                confidence=MEDICATION_CONFIDENCE,
                details=EntityDetails(dosage=_dosage(m), frequency=_frequency(m) or "as needed"),
            )
        )
    return entities


def _vital_entities(text: str) -> list[MedicalEntity]:
    entities: list[MedicalEntity] = []
    for pattern, default_unit in VITAL_PATTERNS:
        for m in pattern.finditer(text):
            entities.append(
                MedicalEntity(
                    type="vital",
                    text=m.group(0),
                    start_index=m.start(),
                    end_index=m.end(),
                    confidence=VITAL_CONFIDENCE,
                    details=EntityDetails(
                        value=m.group("value"), unit=m.group("unit") or default_unit
                    ),
                )
            )
    return entities


def remove_overlapping_entities(entities: Iterable[MedicalEntity]) -> list[MedicalEntity]:
    """Resolve overlapping spans in favour of the more confident entity.

    Input is processed in start order; on equal confidence the entity seen
    first is kept. The result is ordered by ``start_index``.
    """
    kept: list[MedicalEntity] = []
    for entity in sorted(entities, key=lambda e: e.start_index):
        clashes = [k for k in kept if k.overlaps(entity)]
        if all(entity.confidence > k.confidence for k in clashes):
            kept = [k for k in kept if not k.overlaps(entity)]
            kept.append(entity)
    return kept


def extract_medical_entities(text: str) -> list[MedicalEntity]:
    """Medications with doses, vital-sign readings, procedures and devices in ``text``."""
    if not text or not text.strip():
        return []
    candidates = [
        *_medication_entities(text),
        *_vital_entities(text),
        *_term_entities(text, PROCEDURE_PATTERNS, "procedure", PROCEDURE_CONFIDENCE),
        *_term_entities(text, DEVICE_PATTERNS, "device", DEVICE_CONFIDENCE),
    ]
    entities = remove_overlapping_entities(candidates)
    log.debug("Kept %d of %d entity candidates", len(entities), len(candidates))
    return entities


def extract_medications(text: str) -> list[MedicationDetails]:
    """Medication mentions, one per drug name, most confident first."""
    if not text or not text.strip():
        return []

    seen: set[str] = set()
    medications: list[MedicationDetails] = []
    for pattern in (DOSED_MEDICATION, DIRECTED_MEDICATION):
        for m in pattern.finditer(text):
            name = m.group("name")
            confidence = medication_confidence(name)
            if confidence is None or name.lower() in seen:
                continue
            seen.add(name.lower())
            medications.append(
                MedicationDetails(
                    name=name,
                    dosage=_dosage(m),
                    frequency=_frequency(m) if "frequency" in pattern.groupindex else None,
                    confidence=confidence,
                )
            )
    return sorted(medications, key=lambda med: -med.confidence)


def _severity_near(text_lower: str, start: int) -> tuple[str, float]:
    window = text_lower[max(0, start - SEVERITY_WINDOW):start + SEVERITY_WINDOW]
    for level, qualifiers in SEVERITY_TERMS.items():
        if any(q in window for q in qualifiers):
            return level, SEVERITY_HIT_CONFIDENCE
    return "moderate", SEVERITY_DEFAULT_CONFIDENCE


def assess_symptom_severity(text: str) -> list[SymptomSeverity]:
    """Severity of every symptom mention, judged from qualifiers near it.

    Each mention is graded from the text within 50 characters of its start.
    Without a qualifier the grade defaults to ``moderate`` at low confidence.
    Results follow the order of appearance.
    """
    if not text or not text.strip():
        return []

    text_lower = text.lower()
    found: list[tuple[int, int, SymptomSeverity]] = []
    for order, pattern in enumerate(SYMPTOM_PATTERNS):
        for m in pattern.finditer(text):
            level, confidence = _severity_near(text_lower, m.start())
            assessment = SymptomSeverity(symptom=m.group(0), severity=level, confidence=confidence)
            found.append((m.start(), order, assessment))
    return [assessment for _, _, assessment in sorted(found, key=lambda f: (f[0], f[1]))]


def extract_clinical_entities(text: str) -> ClinicalEntities:
    return ClinicalEntities(
        entities=extract_medical_entities(text),
        medications=extract_medications(text),
        symptom_severity=assess_symptom_severity(text),
    )
