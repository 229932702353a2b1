"""Tests for the HTTP API routes and error mapping."""

from __future__ import annotations

from typing import Iterator, Optional

import pytest
from fastapi.testclient import TestClient

from dictation_router.api.app import create_app
from dictation_router.classification.ai_categorizer import AICategorizer
from dictation_router.core.config import AppSettings, LLMConfig
from dictation_router.exceptions import ApiError, TransportError
from dictation_router.services.categorization_service import CategorizationService
from tests.conftest import COMPLAINT, RECHECK, VITALS
from tests.fakes.fake_inference import FakeInferenceBackend

TEXT = " ".join([COMPLAINT, VITALS, RECHECK])


def _client(service: Optional[CategorizationService] = None) -> TestClient:
    settings = AppSettings(llm=LLMConfig(api_key=""))
    return TestClient(create_app(settings=settings, service=service))


def _llm_service(backend: FakeInferenceBackend) -> CategorizationService:
    config = LLMConfig(api_key="sk-test", base_url="http://test-llm:4000/v1")
    return CategorizationService(ai_categorizer=AICategorizer(config, backend=backend))


@pytest.fixture
def client() -> Iterator[TestClient]:
    with _client() as c:
        yield c


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_ready(self, client: TestClient) -> None:
        resp = client.get("/ready")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ready", "llm_enabled": False}

    def test_ready_reports_llm_path(self) -> None:
        with _client(_llm_service(FakeInferenceBackend())) as client:
            resp = client.get("/ready")
        assert resp.json() == {"status": "ready", "llm_enabled": True}

    def test_not_ready_before_startup(self) -> None:
        # No context manager, so the lifespan never runs.
        resp = _client().get("/ready")
        assert resp.status_code == 503
        assert resp.json() == {"status": "starting"}


class TestRuleBasedRoutes:
    def test_templates(self, client: TestClient) -> None:
        resp = client.get("/api/templates")
        assert resp.status_code == 200
        ids = [t["id"] for t in resp.json()]
        assert ids == [
            "basic", "general-consultation", "physical-exam", "follow-up", "emergency", "procedure",
        ]

    def test_categorize_by_template_id(self, client: TestClient) -> None:
        resp = client.post(
            "/api/categorize", json={"text": TEXT, "templateId": "general-consultation"}
        )
        assert resp.status_code == 200
        body = resp.json()
        assert [g["sectionId"] for g in body] == ["symptoms_1", "vitals_3", "plan_7"]
        assert "suggestedContent" in body[0]

    def test_categorize_inline_template(self, client: TestClient) -> None:
        template = {
            "id": "mini",
            "name": "Mini",
            "sections": [
                {"id": "complaint", "title": "Complaint", "type": "symptoms"},
                {"id": "obs", "title": "Observations", "type": "vitals"},
            ],
        }
        resp = client.post("/api/categorize", json={"text": TEXT, "template": template})
        assert resp.status_code == 200
        assert [g["sectionId"] for g in resp.json()] == ["complaint", "obs"]

    def test_categorize_blank_text_is_empty(self, client: TestClient) -> None:
        resp = client.post("/api/categorize", json={"text": "", "templateId": "basic"})
        assert resp.status_code == 200
        assert resp.json() == []

    def test_categorize_requires_a_template(self, client: TestClient) -> None:
        resp = client.post("/api/categorize", json={"text": TEXT})
        assert resp.status_code == 422
        assert resp.json()["type"] == "validation_error"

    def test_unknown_template_id(self, client: TestClient) -> None:
        resp = client.post("/api/categorize", json={"text": TEXT, "templateId": "nope"})
        assert resp.status_code == 404
        assert resp.json()["type"] == "not_found"

    def test_internal_key_error_is_server_error(self) -> None:
        class _BrokenService(CategorizationService):
            def categorize(self, text, template):
                raise KeyError("symptoms")

        settings = AppSettings(llm=LLMConfig(api_key=""))
        app = create_app(settings=settings, service=_BrokenService())
        with TestClient(app, raise_server_exceptions=False) as client:
            resp = client.post("/api/categorize", json={"text": TEXT, "templateId": "basic"})
        assert resp.status_code == 500

    def test_suggest_template(self, client: TestClient) -> None:
        resp = client.post(
            "/api/suggest-template",
            json={"text": "Patient presents to the emergency department with severe acute chest pain."},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["templateId"] == "emergency"
        assert "emergency keywords detected" in body["reasoning"]

    def test_suggest_template_none(self, client: TestClient) -> None:
        resp = client.post("/api/suggest-template", json={"text": "   "})
        assert resp.status_code == 200
        assert resp.json() is None


class TestEntities:
    def test_entities(self, client: TestClient) -> None:
        resp = client.post(
            "/api/entities",
            json={"text": "Severe headache. Started aspirin 75 mg once daily. BP 150/95."},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert [(e["type"], e["text"]) for e in body["entities"]] == [
            ("medication", "aspirin 75 mg once daily"),
            ("vital", "BP 150/95"),
        ]
        assert body["entities"][1]["details"]["unit"] == "mmHg"
        assert body["medications"][0]["name"] == "aspirin"
        assert body["symptomSeverity"][0] == {
            "symptom": "headache", "severity": "severe", "confidence": 0.8,
        }

    def test_entities_blank_text(self, client: TestClient) -> None:
        resp = client.post("/api/entities", json={"text": ""})
        assert resp.status_code == 200
        assert resp.json() == {"entities": [], "medications": [], "symptomSeverity": []}


class TestLLMRoutes:
    def test_ai_categorize_without_key(self, client: TestClient) -> None:
        resp = client.post("/api/ai-categorize", json={"text": TEXT, "templateId": "basic"})
        assert resp.status_code == 503
        assert resp.json()["type"] == "configuration_error"

    def test_ai_categorize_success(self) -> None:
        reply = (
            '{"categorizations": [{"sectionId": "symptoms_1", "content": "headache", '
            '"confidence": 0.9, "icd10Codes": [{"code": "R51.9", "description": "Headache"}]}], '
            '"summary": "Headache."}'
        )
        with _client(_llm_service(FakeInferenceBackend(default_content=reply))) as client:
            resp = client.post("/api/ai-categorize", json={"text": TEXT, "templateId": "basic"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["categorizations"][0]["icd10Codes"][0]["code"] == "R51.9"
        assert body["summary"] == "Headache."

    @pytest.mark.parametrize(
        ("error", "status", "error_type"),
        [
            (TransportError("unreachable"), 504, "transport_error"),
            (ApiError("unauthorized", status_code=401), 502, "api_error"),
        ],
    )
    def test_ai_categorize_failures(self, error: Exception, status: int, error_type: str) -> None:
        with _client(_llm_service(FakeInferenceBackend(error=error))) as client:
            resp = client.post("/api/ai-categorize", json={"text": TEXT, "templateId": "basic"})
        assert resp.status_code == status
        assert resp.json()["type"] == error_type

    def test_ai_categorize_parse_error(self) -> None:
        with _client(_llm_service(FakeInferenceBackend(default_content="no json here"))) as client:
            resp = client.post("/api/ai-categorize", json={"text": TEXT, "templateId": "basic"})
        assert resp.status_code == 502
        assert resp.json()["type"] == "parse_error"

    def test_api_error_carries_upstream_status(self) -> None:
        backend = FakeInferenceBackend(error=ApiError("rate limited", status_code=429))
        with _client(_llm_service(backend)) as client:
            resp = client.post("/api/ai-categorize", json={"text": TEXT, "templateId": "basic"})
        assert resp.json()["upstream_status"] == 429


class TestNotes:
    def test_note_falls_back_to_rules(self, client: TestClient) -> None:
        resp = client.post("/api/notes", json={"text": TEXT, "templateId": "general-consultation"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["source"] == "rules"
        assert body["fallbackReason"] == "ConfigurationError"
        assert [s["sectionId"] for s in body["sections"]] == ["symptoms_1", "vitals_3", "plan_7"]

    def test_note_rules_only(self, client: TestClient) -> None:
        resp = client.post(
            "/api/notes",
            json={"text": TEXT, "templateId": "general-consultation", "preferAi": False},
        )
        assert resp.status_code == 200
        assert resp.json()["fallbackReason"] is None

    def test_note_blank_text(self, client: TestClient) -> None:
        resp = client.post("/api/notes", json={"text": " ", "templateId": "basic"})
        assert resp.status_code == 422

    def test_note_from_llm(self) -> None:
        reply = '{"categorizations": [], "summary": "Nothing clinical."}'
        with _client(_llm_service(FakeInferenceBackend(default_content=reply))) as client:
            resp = client.post("/api/notes", json={"text": TEXT, "templateId": "basic"})
        body = resp.json()
        assert body["source"] == "llm"
        assert body["summary"] == "Nothing clinical."
        assert body["sections"] == []
