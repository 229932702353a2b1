"""Tests for regex-based clinical entity extraction."""

from __future__ import annotations

from typing import Optional

import pytest

from dictation_router.classification.entity_extractor import (
    assess_symptom_severity,
    extract_clinical_entities,
    extract_medical_entities,
    extract_medications,
    medication_confidence,
    remove_overlapping_entities,
)
from dictation_router.models import MedicalEntity

VISIT = (
    "Started metformin 500 mg twice daily. BP 140/90 mmHg, HR 88 bpm. "
    "Arrange an ECG and a chest X-ray; continue the inhaler."
)


def _entity(start: int, end: int, confidence: float, kind: str = "procedure") -> MedicalEntity:
    return MedicalEntity(
        type=kind, text="x" * (end - start), start_index=start, end_index=end, confidence=confidence
    )


class TestExtractMedicalEntities:
    def test_finds_each_entity_type_in_order(self) -> None:
        entities = extract_medical_entities(VISIT)
        assert [(e.type, e.text) for e in entities] == [
            ("medication", "metformin 500 mg twice daily"),
            ("vital", "BP 140/90 mmHg"),
            ("vital", "HR 88 bpm"),
            ("procedure", "ECG"),
            ("procedure", "X-ray"),
            ("device", "inhaler"),
        ]

    def test_spans_index_into_text(self) -> None:
        for entity in extract_medical_entities(VISIT):
            assert VISIT[entity.start_index:entity.end_index] == entity.text
        medication = extract_medical_entities(VISIT)[0]
        assert (medication.start_index, medication.end_index) == (8, 36)

    def test_medication_details(self) -> None:
        medication = extract_medical_entities(VISIT)[0]
        assert medication.confidence == 0.9
        assert medication.details is not None
        assert medication.details.dosage == "500 mg"
        assert medication.details.frequency == "twice daily"

    def test_medication_without_frequency_is_as_needed(self) -> None:
        entities = extract_medical_entities("Ibuprofen 400 mg for pain.")
        assert entities[0].details is not None
        assert entities[0].details.frequency == "as needed"

    def test_vital_values_and_units(self) -> None:
        text = "Temperature 38.5 °C, oxygen saturation 97%, heart rate 72, blood pressure 120/80."
        details = {
            e.text: (e.details.value, e.details.unit)
            for e in extract_medical_entities(text)
            if e.details is not None
        }
        assert details == {
            "Temperature 38.5 °C": ("38.5", "°C"),
            "oxygen saturation 97%": ("97", "%"),
            "heart rate 72": ("72", None),
            "blood pressure 120/80": ("120/80", "mmHg"),
        }

    def test_vitals_are_most_confident(self) -> None:
        vitals = [e for e in extract_medical_entities(VISIT) if e.type == "vital"]
        assert {e.confidence for e in vitals} == {0.95}

    def test_device_beats_overlapping_procedure(self) -> None:
        entities = extract_medical_entities("An ECG machine was brought to the bedside.")
        assert [(e.type, e.text) for e in entities] == [("device", "ECG machine")]

    def test_terms_match_whole_words_only(self) -> None:
        assert extract_medical_entities("The stenting team started early.") == []

    def test_dose_words_are_not_medication_names(self) -> None:
        assert extract_medical_entities("She took 2 tablets with water.") == []

    @pytest.mark.parametrize("text", ["", "   "])
    def test_blank_text(self, text: str) -> None:
        assert extract_medical_entities(text) == []


class TestRemoveOverlappingEntities:
    def test_higher_confidence_replaces_earlier_entity(self) -> None:
        kept = remove_overlapping_entities([_entity(0, 3, 0.8), _entity(0, 11, 0.85, "device")])
        assert [(e.start_index, e.end_index) for e in kept] == [(0, 11)]

    def test_tie_keeps_first(self) -> None:
        kept = remove_overlapping_entities([_entity(0, 5, 0.8), _entity(2, 7, 0.8)])
        assert [(e.start_index, e.end_index) for e in kept] == [(0, 5)]

    def test_adjacent_spans_do_not_overlap(self) -> None:
        kept = remove_overlapping_entities([_entity(3, 6, 0.8), _entity(0, 3, 0.8)])
        assert [(e.start_index, e.end_index) for e in kept] == [(0, 3), (3, 6)]

    def test_must_beat_every_clash(self) -> None:
        x, y = _entity(0, 4, 0.8), _entity(5, 9, 0.8)
        assert remove_overlapping_entities([x, y, _entity(2, 7, 0.9)]) == [_entity(2, 7, 0.9)]

        strong = _entity(0, 4, 0.95)
        assert remove_overlapping_entities([strong, y, _entity(2, 7, 0.9)]) == [strong, y]


class TestExtractMedications:
    def test_known_drug_ranks_above_unknown(self) -> None:
        meds = extract_medications("Prescribed zorvexin 20 mg at night. Take aspirin 75 mg once daily.")
        assert [(m.name, m.dosage, m.frequency, m.confidence) for m in meds] == [
            ("aspirin", "75 mg", "once daily", 0.9),
            ("zorvexin", "20 mg", None, 0.7),
        ]

    def test_directive_without_dose(self) -> None:
        meds = extract_medications("Start ramipril tomorrow.")
        assert [(m.name, m.dosage, m.frequency) for m in meds] == [("ramipril", None, None)]

    def test_one_entry_per_drug(self) -> None:
        meds = extract_medications("Started metformin 500 mg. Continue Metformin 500 mg bd.")
        assert [m.name for m in meds] == ["metformin"]

    def test_shorthand_frequency(self) -> None:
        meds = extract_medications("Amoxicillin 500 mg tds for a week.")
        assert meds[0].frequency == "tds"

    def test_non_names_rejected(self) -> None:
        assert extract_medications("She took 2 tablets. Increase the dose 5 mg.") == []

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("Warfarin", 0.9), ("zorvexin", 0.7), ("abc", None), ("tablets", None), ("took", None)],
    )
    def test_medication_confidence(self, name: str, expected: Optional[float]) -> None:
        assert medication_confidence(name) == expected


class TestAssessSymptomSeverity:
    def test_severe_qualifier(self) -> None:
        result = assess_symptom_severity("Severe headache since last night.")
        assert [(s.symptom, s.severity, s.confidence) for s in result] == [
            ("headache", "severe", 0.8)
        ]

    def test_pain_score_grades_severity(self) -> None:
        result = assess_symptom_severity("Pain is 3/10 today.")
        assert [(s.symptom, s.severity) for s in result] == [("Pain", "mild")]

    def test_unqualified_symptom_defaults_to_moderate(self) -> None:
        result = assess_symptom_severity("Reports a cough.")
        assert [(s.symptom, s.severity, s.confidence) for s in result] == [
            ("cough", "moderate", 0.5)
        ]

    def test_qualifier_only_counts_nearby(self) -> None:
        text = (
            "Mild cough overnight. "
            "The patient walked to the clinic without any assistance today. "
            "Severe back pain."
        )
        result = assess_symptom_severity(text)
        assert [(s.symptom, s.severity) for s in result] == [
            ("cough", "mild"),
            ("back pain", "severe"),
            ("pain", "severe"),
        ]

    def test_blank_text(self) -> None:
        assert assess_symptom_severity("  ") == []


class TestExtractClinicalEntities:
    def test_combines_all_extractors(self) -> None:
        found = extract_clinical_entities(VISIT + " Mild nausea.")
        assert len(found.entities) == 6
        assert [m.name for m in found.medications] == ["metformin"]
        assert [(s.symptom, s.severity) for s in found.symptom_severity] == [("nausea", "mild")]

    def test_serializes_with_wire_names(self) -> None:
        payload = extract_clinical_entities(VISIT).model_dump(by_alias=True)
        assert set(payload) == {"entities", "medications", "symptomSeverity"}
        assert {"startIndex", "endIndex"} <= set(payload["entities"][0])
