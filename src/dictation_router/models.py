"""Pydantic data models for dictation-router.

Templates are supplied whole by the template-management collaborator and
are frozen here. Result models accept both snake_case names and the
camelCase wire aliases (``sectionId``, ``suggestedContent``, ...) and
serialize with aliases at every external surface.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ── Template models ──────────────────────────────────────────────────


class SectionType(str, Enum):
    """Closed set of clinical note section types."""

    SYMPTOMS = "symptoms"
    VITALS = "vitals"
    EXAMINATION = "examination"
    DIAGNOSIS = "diagnosis"
    TREATMENT = "treatment"
    HISTORY = "history"
    PLAN = "plan"
    NOTES = "notes"


class TemplateSection(BaseModel):
    """One typed field of a clinical note template."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    type: SectionType
    placeholder: str = ""
    required: bool = False
    keywords: tuple[str, ...] = ()


class Template(BaseModel):
    """An ordered collection of typed sections."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    sections: tuple[TemplateSection, ...] = ()

    def section_ids(self) -> set[str]:
        return {s.id for s in self.sections}


# ── Rule-based results ───────────────────────────────────────────────


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ClassificationResult(_WireModel):
    """Best section for a single fragment."""

    section_id: str = Field(alias="sectionId")
    confidence: float = Field(ge=0.0, le=1.0)
    suggested_content: str = Field(alias="suggestedContent")


class CategorizationGroup(_WireModel):
    """All fragments routed to one section, in source order."""

    section_id: str = Field(alias="sectionId")
    confidence: float = Field(ge=0.0, le=1.0)
    suggested_content: str = Field(alias="suggestedContent")


class TemplateSuggestion(_WireModel):
    """Best-fitting template for a whole transcription."""

    template_id: str = Field(alias="templateId")
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: list[str] = Field(default_factory=list)


# ── LLM-assisted results ─────────────────────────────────────────────


class ICD10Code(_WireModel):
    code: str
    description: str


class AICategorization(_WireModel):
    """One section assignment returned by the chat-completion model."""

    section_id: str = Field(alias="sectionId")
    content: str
    confidence: float = Field(allow_inf_nan=False)
    icd10_codes: Optional[list[ICD10Code]] = Field(default=None, alias="icd10Codes")

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return min(max(value, 0.0), 1.0)


class AICategorizationResult(_WireModel):
    """Full response contract of the LLM-assisted categorizer."""

    categorizations: list[AICategorization] = Field(default_factory=list)
    summary: str


# ── Service output ───────────────────────────────────────────────────


class NoteSection(_WireModel):
    """A section's content as decided by whichever strategy won."""

    section_id: str = Field(alias="sectionId")
    content: str
    confidence: float = Field(ge=0.0, le=1.0)
    icd10_codes: list[ICD10Code] = Field(default_factory=list, alias="icd10Codes")


class CategorizedNote(_WireModel):
    """Result of the precedence service: LLM output or the rule-based fallback."""

    template_id: str = Field(alias="templateId")
    source: Literal["llm", "rules"]
    sections: list[NoteSection] = Field(default_factory=list)
    summary: str = ""
    fallback_reason: Optional[str] = Field(default=None, alias="fallbackReason")


# ── Entity extraction ────────────────────────────────────────────────

EntityType = Literal["medication", "procedure", "device", "vital", "symptom", "diagnosis"]
SeverityLevel = Literal["mild", "moderate", "severe"]


class EntityDetails(_WireModel):
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    value: Optional[str] = None
    unit: Optional[str] = None


class MedicalEntity(_WireModel):
    """A recognized span of the transcription; ``end_index`` is exclusive."""

    type: EntityType
    text: str
    start_index: int = Field(alias="startIndex", ge=0)
    end_index: int = Field(alias="endIndex", ge=0)
    confidence: float = Field(ge=0.0, le=1.0)
    details: Optional[EntityDetails] = None

    def overlaps(self, other: MedicalEntity) -> bool:
        return self.start_index < other.end_index and other.start_index < self.end_index


class MedicationDetails(_WireModel):
    name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    confidence: float = Field(ge=0.0, le=1.0)


class SymptomSeverity(_WireModel):
    symptom: str
    severity: SeverityLevel
    confidence: float = Field(ge=0.0, le=1.0)


class ClinicalEntities(_WireModel):
    """Everything the entity extractor found in one transcription."""

    entities: list[MedicalEntity] = Field(default_factory=list)
    medications: list[MedicationDetails] = Field(default_factory=list)
    symptom_severity: list[SymptomSeverity] = Field(default_factory=list, alias="symptomSeverity")
