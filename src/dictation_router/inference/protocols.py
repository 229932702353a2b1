"""Inference backend protocol defining the contract all backends implement."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass
class InferenceResult:
    """Result from a single chat-completion call."""

    content: str
    finish_reason: str = "finished"
    usage: dict[str, int] = field(default_factory=dict)


@runtime_checkable
class IInferenceBackend(Protocol):
    """Protocol for chat-completion backends.

    Implementations make exactly one attempt per call, raising
    ``TransportError`` on network failure and ``ApiError`` on a non-2xx
    status. A 2xx reply without a message is a ``ParseError``.
    """

    async def infer(
        self,
        messages: list[dict[str, Any]],
        model: str,
        **params: Any,
    ) -> InferenceResult:
        """Run a single inference call.

        Args:
            messages: Chat messages in OpenAI format.
            model: Model identifier.
            **params: Request parameters (temperature, max_tokens, api_key, ...).

        Returns:
            InferenceResult with the message content and metadata.
        """
        ...
