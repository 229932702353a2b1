"""Entity vocabularies: medication names, devices, procedures and severity qualifiers.

Used by the entity extractor, not by section scoring. Terms are matched
case-insensitively at word boundaries.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

MEDICATION_NAMES: frozenset[str] = frozenset({
    "aspirin", "paracetamol", "acetaminophen", "ibuprofen", "diclofenac",
    "warfarin", "heparin", "metformin", "insulin", "glimepiride",
    "lisinopril", "enalapril", "amlodipine", "nifedipine", "atenolol",
    "atorvastatin", "simvastatin", "omeprazole", "lansoprazole", "ranitidine",
    "salbutamol", "beclomethasone", "prednisolone", "hydrocortisone",
    "amoxicillin", "doxycycline", "ciprofloxacin", "azithromycin",
    "furosemide", "hydrochlorothiazide", "spironolactone",
})

# Dosage forms, units and frequency shorthand; never a drug name on their own.
MEDICATION_QUALIFIERS: frozenset[str] = frozenset({
    "tablet", "tablets", "capsule", "capsules", "syrup", "injection", "drops",
    "cream", "ointment", "mg", "mcg", "ml", "unit", "units", "dose", "doses",
    "twice", "daily", "once", "bd", "od", "tds", "qds", "prn", "stat",
})

DEVICE_TERMS: tuple[str, ...] = (
    "stethoscope", "blood pressure cuff", "thermometer", "pulse oximeter",
    "ECG machine", "defibrillator", "pacemaker", "insulin pump", "hearing aid",
    "CPAP machine", "ventilator", "oxygen concentrator", "nebulizer", "inhaler",
    "spacer device", "peak flow meter", "glucometer", "blood glucose monitor",
    "wheelchair", "walker", "crutches", "compression stockings", "tens unit",
    "ultrasound", "X-ray machine", "MRI scanner", "CT scanner",
    "catheter", "stent", "prosthesis", "orthotic device", "brace", "splint",
)

PROCEDURE_TERMS: tuple[str, ...] = (
    "blood test", "urine test", "ECG", "EKG", "echocardiogram", "stress test",
    "X-ray", "ultrasound", "CT scan", "MRI scan", "mammogram", "colonoscopy",
    "endoscopy", "biopsy", "surgery", "operation", "angioplasty", "bypass",
    "catheterization", "dialysis", "chemotherapy", "radiotherapy",
    "physiotherapy", "occupational therapy", "vaccination", "immunization",
    "injection", "infusion", "transfusion", "intubation", "tracheostomy",
    "appendectomy", "cholecystectomy", "hysterectomy", "arthroscopy",
    "lumbar puncture", "bone marrow biopsy", "skin graft", "wound suturing",
)

# Checked in insertion order; the first level with a hit wins.
SEVERITY_TERMS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "severe": ("severe", "excruciating", "unbearable", "intense", "agonizing", "10/10", "9/10", "8/10"),
    "moderate": ("moderate", "significant", "noticeable", "6/10", "7/10", "5/10"),
    "mild": ("mild", "slight", "minor", "minimal", "1/10", "2/10", "3/10", "4/10"),
})
