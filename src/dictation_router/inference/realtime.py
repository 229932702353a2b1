"""Real-time inference backend wrapping litellm.acompletion()."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from dictation_router.exceptions import ApiError, ParseError, TransportError
from dictation_router.inference.protocols import InferenceResult

log = logging.getLogger(__name__)


class RealTimeBackend:
    """One chat-completion POST per call via litellm.acompletion().

    Talks to any OpenAI-compatible ``/chat/completions`` endpoint; the API
    key is sent as a bearer token. LiteLLM's own retries are disabled so a
    call is exactly one attempt.
    """

    def __init__(self, *, base_url: str, api_key: str, timeout: float = 60.0) -> None:
        self._base_url = base_url
        self._api_key = api_key
        self._timeout = timeout

    async def infer(
        self,
        messages: list[dict[str, Any]],
        model: str,
        **params: Any,
    ) -> InferenceResult:
        """Single inference call; maps transport and HTTP failures to domain errors."""
        from litellm import acompletion
        from litellm.exceptions import APIConnectionError, Timeout

        kwargs: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "api_base": self._base_url,
            "api_key": self._api_key,
            "custom_llm_provider": "openai",
            "timeout": self._timeout,
            "num_retries": 0,
            **params,
        }

        try:
            response = await acompletion(**kwargs)
        except (APIConnectionError, Timeout, asyncio.TimeoutError) as exc:
            raise TransportError(f"Could not reach chat-completion endpoint: {exc}") from exc
        except Exception as exc:
            status_code = getattr(exc, "status_code", None)
            if isinstance(status_code, int):
                raise ApiError(
                    f"Chat-completion endpoint returned HTTP {status_code}: {exc}",
                    status_code=status_code,
                ) from exc
            raise

        choices = getattr(response, "choices", None) or []
        choice = choices[0] if choices else None
        message = getattr(choice, "message", None)
        if message is None:
            raise ParseError(
                "Chat-completion response carries no message",
                raw_response=str(response),
            )
        content = message.content or ""
        mapped_reason = "max_output_reached" if choice.finish_reason == "length" else "finished"

        usage: dict[str, int] = {}
        if getattr(response, "usage", None):
            usage = {
                "prompt_tokens": getattr(response.usage, "prompt_tokens", 0),
                "completion_tokens": getattr(response.usage, "completion_tokens", 0),
                "total_tokens": getattr(response.usage, "total_tokens", 0),
            }

        log.debug("Completion finished (%s, %d chars)", mapped_reason, len(content))
        return InferenceResult(content=content, finish_reason=mapped_reason, usage=usage)
