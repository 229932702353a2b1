"""Clinical keyword lexicon, scoring weights and template trigger terms.

These are the read-only knowledge base of the rule-based classifier.
Components take them as constructor arguments; the ``DEFAULT_*`` instances
below are what production code uses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from dictation_router.models import SectionType

# Keywords are matched case-insensitively as substrings of a fragment.

_CLINICAL_KEYWORDS: dict[SectionType, tuple[str, ...]] = {
    SectionType.SYMPTOMS: (
        "pain", "ache", "hurt", "sore", "tender", "burning", "sharp", "dull", "throbbing",
        "nausea", "vomiting", "fever", "chills", "sweating", "fatigue", "tired", "weak",
        "headache", "migraine", "dizziness", "dizzy", "lightheaded", "faint",
        "cough", "shortness of breath", "difficulty breathing", "wheezing", "chest tightness",
        "rash", "itching", "swelling", "numbness", "tingling", "cramping",
        "constipation", "diarrhea", "bloating", "heartburn", "indigestion",
        "blurred vision", "double vision", "hearing loss", "tinnitus", "ear pain",
        "joint pain", "muscle pain", "back pain", "neck pain", "stiffness",
        "sleep problems", "insomnia", "anxiety", "depression", "mood changes",
        "weight loss", "weight gain", "appetite loss", "increased appetite",
        "palpitations", "irregular heartbeat", "chest pain", "syncope", "presyncope",
    ),
    SectionType.DIAGNOSIS: (
        "diagnosis", "diagnosed with", "condition", "disease", "disorder", "syndrome",
        "infection", "bacterial", "viral", "fungal", "inflammation", "inflammatory",
        "acute", "chronic", "suspected", "confirmed", "probable", "possible",
        "hypertension", "diabetes", "asthma", "pneumonia", "bronchitis", "sinusitis",
        "arthritis", "osteoporosis", "fracture", "sprain", "strain", "laceration",
        "gastritis", "ulcer", "reflux", "ibs", "uti", "kidney stones",
        "migraine", "tension headache", "anxiety disorder", "depression",
        "hyperlipidemia", "hypothyroidism", "hyperthyroidism", "anemia",
        "malignancy", "benign", "tumor", "mass", "nodule", "cyst",
    ),
    SectionType.TREATMENT: (
        "prescribe", "prescribed", "medication", "medicine", "drug", "tablet", "capsule",
        "mg", "grams", "ml", "dose", "dosage", "twice daily", "once daily", "three times",
        "antibiotic", "pain killer", "analgesic", "anti-inflammatory", "steroid",
        "surgery", "operation", "procedure", "treatment", "therapy", "rehabilitation",
        "physical therapy", "occupational therapy", "counseling", "psychotherapy",
        "lifestyle changes", "diet", "exercise", "rest", "ice", "heat", "compression",
        "referral", "specialist", "consultation", "second opinion",
        "injection", "infusion", "iv", "topical", "ointment", "cream", "gel",
        "inhaler", "nebulizer", "oxygen", "cpap", "splint", "cast", "brace",
        "aspirin", "paracetamol", "ibuprofen", "warfarin", "metformin", "lisinopril",
        "amlodipine", "atorvastatin", "omeprazole", "losartan", "simvastatin", "salbutamol",
        "prednisolone", "amoxicillin", "doxycycline", "furosemide",
    ),
    SectionType.VITALS: (
        "blood pressure", "bp", "systolic", "diastolic", "mmhg",
        "heart rate", "hr", "pulse", "beats per minute", "bpm", "rhythm",
        "temperature", "temp", "fever", "celsius", "fahrenheit", "degrees",
        "respiratory rate", "rr", "breathing rate", "breaths per minute",
        "oxygen saturation", "o2 sat", "spo2", "pulse ox",
        "weight", "kg", "pounds", "lbs", "bmi", "body mass index",
        "height", "cm", "inches", "feet", "tall", "short",
    ),
    SectionType.HISTORY: (
        "history", "previous", "past", "prior", "family history", "medical history",
        "surgical history", "allergies", "allergic to", "adverse reaction",
        "current medications", "taking", "on medication", "chronic condition",
        "hospitalization", "hospital", "admission", "surgery", "operation",
        "mother", "father", "sibling", "parent", "grandparent", "family member",
        "genetic", "hereditary", "runs in family", "family history of",
        "smoking", "alcohol", "drugs", "substance use", "social history",
    ),
    SectionType.EXAMINATION: (
        "examination", "exam", "inspect", "inspection", "observe", "observation",
        "palpation", "palpate", "feel", "touch", "pressure",
        "auscultation", "listen", "heart sounds", "lung sounds", "bowel sounds",
        "percussion", "tap", "dull", "resonant", "tympanic",
        "normal", "abnormal", "unremarkable", "remarkable", "significant",
        "tender", "non-tender", "soft", "firm", "hard", "enlarged", "swollen",
        "symmetrical", "asymmetrical", "equal", "unequal", "bilateral",
        "clear", "cloudy", "red", "pale", "cyanotic", "jaundiced",
        "range of motion", "rom", "flexibility", "strength", "weakness",
        "reflexes", "sensation", "numbness", "tingling", "coordination",
    ),
    SectionType.PLAN: (
        "plan", "follow-up", "return", "come back", "schedule", "appointment",
        "next visit", "recheck", "monitor", "watch", "observe", "track",
        "continue", "stop", "discontinue", "increase", "decrease", "adjust",
        "lab work", "blood test", "urine test", "x-ray", "mri", "ct scan",
        "ultrasound", "ekg", "ecg", "stress test", "colonoscopy", "mammogram",
        "education", "instruct", "teach", "explain", "discuss", "counsel",
        "warning signs", "red flags", "when to call", "emergency", "urgent",
        "prognosis", "outlook", "expected", "recovery", "healing",
    ),
    # NOTES carries no domain keywords; only a section's own keywords score for it.
}


@dataclass(frozen=True)
class Lexicon:
    """Read-only mapping from section type to its domain keywords."""

    keywords: Mapping[SectionType, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        frozen = {SectionType(k): tuple(v) for k, v in self.keywords.items()}
        object.__setattr__(self, "keywords", MappingProxyType(frozen))

    def keywords_for(self, section_type: SectionType) -> tuple[str, ...]:
        return self.keywords.get(section_type, ())

    def mentions(self, section_type: SectionType, text_lower: str) -> bool:
        """True if any keyword for ``section_type`` occurs in already lower-cased text."""
        return any(kw.lower() in text_lower for kw in self.keywords_for(section_type))


@dataclass(frozen=True)
class ScoringWeights:
    """Weights and thresholds of the rule-based scorer and template matcher."""

    exact_match: float = 3.0
    partial_match: float = 2.0
    contextual_clue: float = 1.0
    keyword_normalization: float = 0.1
    min_fragment_length: int = 10
    confidence_floor: float = 0.3
    template_identity_bonus: float = 0.4
    coverage_weight: float = 0.3
    template_threshold: float = 0.2
    coverage_reason_min_sections: int = 2


@dataclass(frozen=True)
class TemplateTrigger:
    """Terms that mark a transcription as fitting a well-known template."""

    terms: tuple[str, ...]
    reason: str


DEFAULT_LEXICON = Lexicon(_CLINICAL_KEYWORDS)

DEFAULT_WEIGHTS = ScoringWeights()

TEMPLATE_TRIGGERS: Mapping[str, TemplateTrigger] = MappingProxyType({
    "emergency": TemplateTrigger(
        terms=("emergency", "urgent", "severe", "acute"),
        reason="emergency keywords detected",
    ),
    "follow-up": TemplateTrigger(
        terms=("follow", "return", "progress", "better"),
        reason="follow-up indicators found",
    ),
    "physical-exam": TemplateTrigger(
        terms=("examination", "physical", "inspect", "palpat"),
        reason="examination terminology present",
    ),
    "procedure": TemplateTrigger(
        terms=("procedure", "surgery", "operation", "inject"),
        reason="procedure-related content",
    ),
})
