"""Built-in clinical note templates.

Template management lives outside this package; these defaults let the API
and CLI run without a template store. Free-text sections of the procedure
note are typed ``notes``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from dictation_router.models import SectionType, Template, TemplateSection


def _section(
    section_type: SectionType,
    title: str,
    order: int,
    required: bool = False,
    placeholder: Optional[str] = None,
    keywords: tuple[str, ...] = (),
) -> TemplateSection:
    return TemplateSection(
        id=f"{section_type.value}_{order}",
        title=title,
        type=section_type,
        placeholder=placeholder or f"Enter {title.lower()}...",
        required=required,
        keywords=keywords,
    )


S = SectionType

BASIC = Template(
    id="basic",
    name="Basic Consultation",
    description="Simple template for quick consultations",
    sections=(
        _section(S.SYMPTOMS, "Symptoms", 1, True, "What symptoms is the patient experiencing?"),
        _section(S.EXAMINATION, "Examination", 2, False, "Key examination findings..."),
        _section(S.DIAGNOSIS, "Diagnosis", 3, True, "Clinical diagnosis or assessment..."),
        _section(S.TREATMENT, "Treatment", 4, True, "Prescribed treatment and medications..."),
        _section(S.NOTES, "Notes", 5, False, "Any additional notes or observations..."),
    ),
)

GENERAL_CONSULTATION = Template(
    id="general-consultation",
    name="General Consultation",
    description="Standard template for routine medical consultations",
    sections=(
        _section(S.SYMPTOMS, "Chief Complaint & Symptoms", 1, True,
                 "What brings the patient in today? Describe presenting symptoms..."),
        _section(S.HISTORY, "Medical History", 2, False,
                 "Relevant medical history, allergies, current medications..."),
        _section(S.VITALS, "Vital Signs", 3, False,
                 "Blood pressure, heart rate, temperature, weight, etc..."),
        _section(S.EXAMINATION, "Physical Examination", 4, False,
                 "Examination findings and observations..."),
        _section(S.DIAGNOSIS, "Assessment & Diagnosis", 5, True,
                 "Clinical assessment and working diagnosis..."),
        _section(S.TREATMENT, "Treatment Plan", 6, True,
                 "Prescribed medications, procedures, and treatment approach..."),
        _section(S.PLAN, "Follow-up Plan", 7, False,
                 "Next steps, follow-up appointments, monitoring instructions..."),
    ),
)

PHYSICAL_EXAM = Template(
    id="physical-exam",
    name="Comprehensive Physical Examination",
    description="Detailed template for thorough physical examinations",
    sections=(
        _section(S.VITALS, "Vital Signs", 1, True, "BP, HR, RR, Temp, O2 Sat, Weight, Height..."),
        _section(S.EXAMINATION, "General Appearance", 2, True,
                 "Overall appearance, demeanor, distress level..."),
        _section(S.EXAMINATION, "Head & Neck", 3, False, "HEENT examination findings..."),
        _section(S.EXAMINATION, "Cardiovascular", 4, False,
                 "Heart sounds, rhythm, murmurs, peripheral pulses..."),
        _section(S.EXAMINATION, "Respiratory", 5, False,
                 "Lung sounds, breathing pattern, chest movement..."),
        _section(S.EXAMINATION, "Abdominal", 6, False,
                 "Inspection, palpation, bowel sounds, tenderness..."),
        _section(S.EXAMINATION, "Neurological", 7, False,
                 "Mental status, reflexes, sensation, motor function..."),
        _section(S.EXAMINATION, "Musculoskeletal", 8, False,
                 "Range of motion, strength, deformities..."),
        _section(S.NOTES, "Additional Findings", 9, False,
                 "Any other relevant examination findings..."),
    ),
)

FOLLOW_UP = Template(
    id="follow-up",
    name="Follow-up Visit",
    description="Template for follow-up appointments and progress reviews",
    sections=(
        _section(S.SYMPTOMS, "Current Status", 1, True,
                 "How is the patient feeling since last visit? Any changes in symptoms?"),
        _section(S.TREATMENT, "Treatment Compliance", 2, True,
                 "Medication adherence, side effects, treatment response..."),
        _section(S.VITALS, "Current Vital Signs", 3, False,
                 "Updated vital signs and measurements..."),
        _section(S.EXAMINATION, "Focused Examination", 4, False,
                 "Targeted examination based on condition..."),
        _section(S.DIAGNOSIS, "Progress Assessment", 5, True,
                 "Clinical progress, improvement, or concerns..."),
        _section(S.TREATMENT, "Treatment Adjustments", 6, False,
                 "Any changes to medications or treatment plan..."),
        _section(S.PLAN, "Next Steps", 7, True,
                 "Follow-up schedule, monitoring, patient education..."),
    ),
)

EMERGENCY = Template(
    id="emergency",
    name="Emergency Consultation",
    description="Quick template for urgent medical situations",
    sections=(
        _section(S.SYMPTOMS, "Presenting Complaint", 1, True,
                 "Primary emergency complaint and timeline..."),
        _section(S.VITALS, "Emergency Vitals", 2, True,
                 "Critical vital signs and triage assessment..."),
        _section(S.HISTORY, "Relevant History", 3, True,
                 "Pertinent medical history and medications..."),
        _section(S.EXAMINATION, "Focused Assessment", 4, True,
                 "Targeted examination findings..."),
        _section(S.DIAGNOSIS, "Emergency Diagnosis", 5, True,
                 "Working diagnosis and differential..."),
        _section(S.TREATMENT, "Immediate Treatment", 6, True,
                 "Emergency interventions and medications..."),
        _section(S.PLAN, "Disposition", 7, True, "Discharge, admission, or transfer plans..."),
    ),
)

PROCEDURE = Template(
    id="procedure",
    name="Procedure Note",
    description="Documentation template for medical procedures",
    sections=(
        _section(S.NOTES, "Procedure Details", 1, True,
                 "Name of procedure, indication, and consent..."),
        _section(S.NOTES, "Pre-procedure Assessment", 2, True,
                 "Patient preparation and pre-procedure vitals..."),
        _section(S.NOTES, "Procedure Steps", 3, True,
                 "Detailed description of procedure performed..."),
        _section(S.NOTES, "Findings", 4, False, "Procedure findings and observations..."),
        _section(S.NOTES, "Complications", 5, False, "Any complications or adverse events..."),
        _section(S.TREATMENT, "Post-procedure Care", 6, True,
                 "Post-procedure instructions and medications..."),
        _section(S.PLAN, "Follow-up Instructions", 7, True,
                 "When to return, warning signs, activity restrictions..."),
    ),
)

DEFAULT_TEMPLATES: tuple[Template, ...] = (
    BASIC,
    GENERAL_CONSULTATION,
    PHYSICAL_EXAM,
    FOLLOW_UP,
    EMERGENCY,
    PROCEDURE,
)


def get_template(template_id: str, templates: tuple[Template, ...] = DEFAULT_TEMPLATES) -> Template:
    """Look up a template by id. Raises KeyError if unknown."""
    for template in templates:
        if template.id == template_id:
            return template
    raise KeyError(f"Unknown template: {template_id}")


def load_templates(path: Path) -> list[Template]:
    """Load templates from a JSON array file."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = [raw]
    return [Template.model_validate(item) for item in raw]
