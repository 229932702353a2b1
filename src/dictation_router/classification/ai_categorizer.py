"""LLM-assisted categorization: one chat-completion call, strict JSON contract.

No retry, no backoff, no caching. Every failure surfaces as a typed
``CategorizerError`` subclass; the caller decides whether to fall back to
the rule-based engine.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from pydantic import ValidationError as SchemaValidationError

from dictation_router.core.config import LLMConfig
from dictation_router.exceptions import ConfigurationError, ParseError, ValidationError
from dictation_router.hooks.usage_tracker import IUsageTracker
from dictation_router.inference.protocols import IInferenceBackend
from dictation_router.inference.realtime import RealTimeBackend
from dictation_router.models import AICategorizationResult, Template
from dictation_router.prompts.categorization import build_categorization_prompt

log = logging.getLogger(__name__)


def _strip_code_fence(content: str) -> str:
    """Return the body of a Markdown code fence if the reply is wrapped in one."""
    text = content.strip()
    for fence in ("```json", "```"):
        start = text.find(fence)
        if start == -1:
            continue
        inner = text[start + len(fence):]
        end = inner.find("```")
        if end != -1:
            return inner[:end].strip()
    return text


def parse_categorization_response(content: str, template: Template) -> AICategorizationResult:
    """Parse and validate the model's reply against the response contract.

    Raises:
        ParseError: Not JSON, wrong shape, or a ``sectionId`` the template does not have.
    """
    try:
        data: Any = json.loads(_strip_code_fence(content))
    except json.JSONDecodeError as exc:
        raise ParseError(f"LLM response is not valid JSON: {exc}", raw_response=content) from exc

    try:
        result = AICategorizationResult.model_validate(data)
    except SchemaValidationError as exc:
        raise ParseError(
            f"LLM response does not match the categorization contract: {exc.error_count()} error(s)",
            raw_response=content,
        ) from exc

    known = template.section_ids()
    unknown = sorted({c.section_id for c in result.categorizations} - known)
    if unknown:
        raise ParseError(
            f"LLM response references unknown section ids: {unknown}",
            raw_response=content,
        )
    return result


class AICategorizer:
    """Delegates categorization and ICD-10 coding to a chat-completion model."""

    def __init__(
        self,
        config: LLMConfig,
        backend: Optional[IInferenceBackend] = None,
        usage_tracker: Optional[IUsageTracker] = None,
    ) -> None:
        self._config = config
        self._backend = backend
        self._usage_tracker = usage_tracker

    @property
    def model(self) -> str:
        return self._config.model

    @property
    def is_configured(self) -> bool:
        return self._config.is_configured

    def _get_backend(self) -> IInferenceBackend:
        if self._backend is None:
            self._backend = RealTimeBackend(
                base_url=self._config.base_url,
                api_key=self._config.api_key,
                timeout=self._config.timeout,
            )
        return self._backend

    def build_request(self, transcription: str, template: Template) -> dict[str, Any]:
        """Chat-completion request parameters for one categorization call."""
        return {
            "model": self._config.model,
            "messages": [
                {"role": "user", "content": build_categorization_prompt(transcription, template)}
            ],
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens_for(self._config.model),
        }

    async def categorize(self, transcription: str, template: Template) -> AICategorizationResult:
        """Categorize ``transcription`` into ``template`` sections via the LLM.

        Raises:
            ConfigurationError: No API credential configured (no call is made).
            ValidationError: Blank transcription or a template without sections.
            TransportError: The endpoint could not be reached.
            ApiError: The endpoint answered with a non-2xx status.
            ParseError: The reply is not valid JSON or violates the contract.
        """
        if not self._config.is_configured:
            raise ConfigurationError(
                "LLM API key not configured (set DICTATION_LLM_API_KEY)"
            )
        if not transcription or not transcription.strip():
            raise ValidationError("Transcription is empty")
        if not template.sections:
            raise ValidationError(f"Template {template.id!r} has no sections")

        request = self.build_request(transcription, template)
        log.info(
            "Requesting LLM categorization",
            extra={
                "model": request["model"],
                "template_id": template.id,
                "characters": len(transcription),
                "max_tokens": request["max_tokens"],
            },
        )

        result = await self._get_backend().infer(
            request["messages"],
            request["model"],
            temperature=request["temperature"],
            max_tokens=request["max_tokens"],
        )
        parsed = parse_categorization_response(result.content, template)

        if self._usage_tracker is not None:
            self._usage_tracker.track_categorization(len(transcription), self._config.model)

        log.info(
            "LLM categorization succeeded",
            extra={"template_id": template.id, "sections": len(parsed.categorizations)},
        )
        return parsed
