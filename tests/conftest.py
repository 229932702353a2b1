"""Shared fixtures for dictation-router tests."""

from __future__ import annotations

import json

import pytest

from dictation_router.core.config import LLMConfig
from dictation_router.domains.clinical.catalog import GENERAL_CONSULTATION
from dictation_router.models import SectionType, Template, TemplateSection

COMPLAINT = "Patient complains of severe headache and nausea."
VITALS = "BP 140/90, HR 88 bpm."
RECHECK = "Follow-up in two weeks to recheck blood pressure."


@pytest.fixture
def consultation() -> Template:
    """Seven-section general consultation template."""
    return GENERAL_CONSULTATION


@pytest.fixture
def soap_template() -> Template:
    """Small template with user-defined keywords on the symptoms section."""
    return Template(
        id="soap",
        name="SOAP",
        sections=(
            TemplateSection(
                id="subjective",
                title="Subjective",
                type=SectionType.SYMPTOMS,
                placeholder="Presenting complaint...",
                required=True,
                keywords=("headache",),
            ),
            TemplateSection(id="objective", title="Vitals", type=SectionType.VITALS),
            TemplateSection(id="assessment", title="Assessment", type=SectionType.DIAGNOSIS),
            TemplateSection(id="plan", title="Plan", type=SectionType.PLAN),
        ),
    )


@pytest.fixture
def llm_config() -> LLMConfig:
    return LLMConfig(
        api_key="test-key",
        base_url="http://test-llm:4000/v1",
        model="gpt-3.5-turbo",
    )


@pytest.fixture
def llm_reply() -> str:
    """Well-formed reply for ``soap_template``."""
    return json.dumps(
        {
            "categorizations": [
                {
                    "sectionId": "subjective",
                    "content": "Patient complains of severe headache and nausea.",
                    "confidence": 0.93,
                    "icd10Codes": [
                        {"code": "R51.9", "description": "Headache, unspecified"},
                        {"code": "R11.0", "description": "Nausea"},
                    ],
                },
                {
                    "sectionId": "objective",
                    "content": "BP 140/90, HR 88 bpm.",
                    "confidence": 0.88,
                },
            ],
            "summary": "Headache with nausea; elevated blood pressure.",
        }
    )
