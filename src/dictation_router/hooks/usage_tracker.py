"""Usage tracking for LLM-assisted categorization: estimated tokens and cost."""

from __future__ import annotations

import math
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

# USD per token, input and output averaged.
API_PRICING: dict[str, float] = {
    "gpt-3.5-turbo": 0.002 / 1000,
    "gpt-4": 0.03 / 1000,
    "gpt-4-turbo": 0.01 / 1000,
}
_DEFAULT_PRICED_MODEL = "gpt-3.5-turbo"

# ~4 characters per English token, plus fixed prompt overhead.
_TOKENS_PER_CHAR = 0.25
_PROMPT_OVERHEAD_TOKENS = 500

_HISTORY_LIMIT = 100


def estimate_tokens(characters: int) -> int:
    return math.ceil(characters * _TOKENS_PER_CHAR) + _PROMPT_OVERHEAD_TOKENS


def estimate_categorization_cost(characters: int, model: str = _DEFAULT_PRICED_MODEL) -> float:
    """Estimated USD cost of categorizing ``characters`` of transcription."""
    price = API_PRICING.get(model, API_PRICING[_DEFAULT_PRICED_MODEL])
    return estimate_tokens(characters) * price


@runtime_checkable
class IUsageTracker(Protocol):
    """Receives one report per successful LLM categorization."""

    def track_categorization(self, characters: int, model: str) -> None: ...


@dataclass(frozen=True)
class UsageRecord:
    model: str
    characters: int
    tokens: int
    cost: float
    timestamp: datetime


@dataclass
class UsageSummary:
    """Accumulated usage since the last reset."""

    categorization_tokens: int = 0
    total_cost: float = 0.0
    request_count: int = 0
    last_reset: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class InMemoryUsageTracker:
    """Process-local tracker keeping totals and the most recent calls."""

    def __init__(self, history_limit: int = _HISTORY_LIMIT) -> None:
        self._lock = threading.Lock()
        self._summary = UsageSummary()
        self._calls: deque[UsageRecord] = deque(maxlen=history_limit)

    def track_categorization(self, characters: int, model: str) -> None:
        tokens = estimate_tokens(characters)
        record = UsageRecord(
            model=model,
            characters=characters,
            tokens=tokens,
            cost=estimate_categorization_cost(characters, model),
            timestamp=datetime.now(timezone.utc),
        )
        with self._lock:
            self._summary.categorization_tokens += tokens
            self._summary.total_cost += record.cost
            self._summary.request_count += 1
            self._calls.append(record)

    def summary(self) -> UsageSummary:
        with self._lock:
            return UsageSummary(
                categorization_tokens=self._summary.categorization_tokens,
                total_cost=self._summary.total_cost,
                request_count=self._summary.request_count,
                last_reset=self._summary.last_reset,
            )

    def recent_calls(self, limit: int = 10) -> list[UsageRecord]:
        with self._lock:
            if limit <= 0:
                return []
            return list(self._calls)[-limit:]

    def cost_since(self, since: datetime) -> float:
        with self._lock:
            return sum(c.cost for c in self._calls if c.timestamp >= since)

    def reset(self) -> UsageSummary:
        """Clear totals and history; returns the fresh summary."""
        with self._lock:
            self._summary = UsageSummary()
            self._calls.clear()
            return self._summary
