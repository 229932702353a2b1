"""Categorization and template suggestion endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, ConfigDict, Field

from dictation_router.classification.entity_extractor import extract_clinical_entities
from dictation_router.domains.clinical.catalog import DEFAULT_TEMPLATES, get_template
from dictation_router.exceptions import TemplateNotFoundError, ValidationError
from dictation_router.models import (
    AICategorizationResult,
    CategorizationGroup,
    CategorizedNote,
    ClinicalEntities,
    Template,
    TemplateSuggestion,
)
from dictation_router.services.categorization_service import CategorizationService

router = APIRouter(tags=["categorization"])


class CategorizeRequest(BaseModel):
    """Transcription plus either an inline template or a built-in template id."""

    model_config = ConfigDict(populate_by_name=True)

    text: str
    template: Optional[Template] = None
    template_id: Optional[str] = Field(default=None, alias="templateId")


class NoteRequest(CategorizeRequest):
    prefer_ai: bool = Field(default=True, alias="preferAi")


class EntitiesRequest(BaseModel):
    text: str


class SuggestTemplateRequest(BaseModel):
    """Transcription plus candidate templates (defaults to the built-in catalog)."""

    text: str
    templates: Optional[list[Template]] = None


def _resolve_template(body: CategorizeRequest) -> Template:
    if body.template is not None:
        return body.template
    if body.template_id:
        try:
            return get_template(body.template_id)
        except KeyError as exc:
            raise TemplateNotFoundError(f"Unknown template: {body.template_id}") from exc
    raise ValidationError("Either 'template' or 'templateId' is required")


def _service(request: Request) -> CategorizationService:
    return request.app.state.service


@router.get("/templates", response_model=list[Template])
async def list_templates() -> list[Template]:
    """Built-in note templates."""
    return list(DEFAULT_TEMPLATES)


@router.post("/categorize", response_model=list[CategorizationGroup])
async def categorize(body: CategorizeRequest, request: Request) -> list[CategorizationGroup]:
    """Rule-based categorization of a transcription into template sections."""
    return _service(request).categorize(body.text, _resolve_template(body))


@router.post("/suggest-template", response_model=Optional[TemplateSuggestion])
async def suggest(body: SuggestTemplateRequest, request: Request) -> Optional[TemplateSuggestion]:
    """Best-fitting template for the transcription, or ``null``."""
    templates = body.templates if body.templates is not None else list(DEFAULT_TEMPLATES)
    return _service(request).suggest_template(body.text, templates)


@router.post("/ai-categorize", response_model=AICategorizationResult)
async def ai_categorize(body: CategorizeRequest, request: Request) -> AICategorizationResult:
    """LLM-assisted categorization with ICD-10 codes; failures map to HTTP errors."""
    return await _service(request).ai_categorize(body.text, _resolve_template(body))


@router.post("/notes", response_model=CategorizedNote)
async def categorize_note(body: NoteRequest, request: Request) -> CategorizedNote:
    """LLM result when available and well-formed, otherwise the rule-based result."""
    return await _service(request).categorize_note(
        body.text, _resolve_template(body), prefer_ai=body.prefer_ai
    )


@router.post("/entities", response_model=ClinicalEntities)
async def entities(body: EntitiesRequest) -> ClinicalEntities:
    """Medications, vital signs, procedures, devices and symptom severity in the text."""
    return extract_clinical_entities(body.text)
