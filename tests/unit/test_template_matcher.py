"""Tests for whole-transcription template suggestion."""

from __future__ import annotations

import pytest

from dictation_router.classification.template_matcher import TemplateMatcher, suggest_template
from dictation_router.domains.clinical.catalog import BASIC, DEFAULT_TEMPLATES, EMERGENCY
from dictation_router.domains.clinical.lexicon import Lexicon, ScoringWeights, TemplateTrigger
from dictation_router.models import SectionType, Template, TemplateSection

EMERGENCY_TEXT = "Patient presents to the emergency department with severe acute chest pain."


class TestSuggestTemplate:
    def test_emergency_text_picks_emergency(self) -> None:
        suggestion = suggest_template(EMERGENCY_TEXT, list(DEFAULT_TEMPLATES))
        assert suggestion is not None
        assert suggestion.template_id == "emergency"
        assert suggestion.reasoning == ["emergency keywords detected", "matches 3 sections"]
        # Identity bonus plus 3 of 7 sections covered.
        assert suggestion.confidence == pytest.approx(0.4 + 0.3 * 3 / 7)

    def test_below_threshold_returns_none(self) -> None:
        assert suggest_template("Patient has mild cough", [BASIC]) is None

    def test_blank_text_or_no_templates(self) -> None:
        assert suggest_template("", list(DEFAULT_TEMPLATES)) is None
        assert suggest_template("   ", list(DEFAULT_TEMPLATES)) is None
        assert suggest_template(EMERGENCY_TEXT, []) is None

    def test_confidence_never_exceeds_one(self) -> None:
        matcher = TemplateMatcher(
            weights=ScoringWeights(template_identity_bonus=5.0),
        )
        suggestion = matcher.suggest(EMERGENCY_TEXT, [EMERGENCY])
        assert suggestion is not None
        assert suggestion.confidence == 1.0

    def test_tie_goes_to_first_template(self) -> None:
        section = TemplateSection(id="s", title="S", type=SectionType.SYMPTOMS)
        first = Template(id="a", name="A", sections=(section,))
        second = Template(id="b", name="B", sections=(section,))
        suggestion = suggest_template("severe headache today", [first, second])
        assert suggestion is not None
        assert suggestion.template_id == "a"

    def test_serializes_with_wire_names(self) -> None:
        suggestion = suggest_template(EMERGENCY_TEXT, list(DEFAULT_TEMPLATES))
        assert suggestion is not None
        assert set(suggestion.model_dump(by_alias=True)) == {"templateId", "confidence", "reasoning"}


class TestScoreTemplate:
    @pytest.fixture
    def matcher(self) -> TemplateMatcher:
        return TemplateMatcher(
            lexicon=Lexicon({SectionType.SYMPTOMS: ("cough",), SectionType.VITALS: ("bp",)}),
            triggers={"respiratory": TemplateTrigger(terms=("wheez",), reason="airway terms")},
        )

    def test_trigger_bonus_applies_only_to_matching_id(self, matcher: TemplateMatcher) -> None:
        sections = (TemplateSection(id="n", title="N", type=SectionType.NOTES),)
        with_trigger = Template(id="respiratory", name="R", sections=sections)
        without = Template(id="other", name="O", sections=sections)

        assert matcher.score_template("wheezing at night", with_trigger) == (0.4, ["airway terms"])
        assert matcher.score_template("wheezing at night", without) == (0.0, [])

    def test_coverage_share(self, matcher: TemplateMatcher) -> None:
        template = Template(
            id="t",
            name="T",
            sections=(
                TemplateSection(id="a", title="A", type=SectionType.SYMPTOMS),
                TemplateSection(id="b", title="B", type=SectionType.VITALS),
                TemplateSection(id="c", title="C", type=SectionType.NOTES),
                TemplateSection(id="d", title="D", type=SectionType.PLAN),
            ),
        )
        score, reasons = matcher.score_template("cough and bp check", template)
        assert score == pytest.approx(0.3 * 2 / 4)
        # Two matched sections do not earn a reason; more than two would.
        assert reasons == []

    def test_template_without_sections_has_no_coverage(self, matcher: TemplateMatcher) -> None:
        assert matcher.score_template("cough", Template(id="empty", name="E")) == (0.0, [])
