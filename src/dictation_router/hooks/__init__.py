"""Cross-cutting hooks: structured logging and usage tracking."""

from __future__ import annotations

from dictation_router.hooks.logging_config import setup_logging
from dictation_router.hooks.usage_tracker import (
    IUsageTracker,
    InMemoryUsageTracker,
    UsageRecord,
    UsageSummary,
    estimate_categorization_cost,
)

__all__ = [
    "IUsageTracker",
    "InMemoryUsageTracker",
    "UsageRecord",
    "UsageSummary",
    "estimate_categorization_cost",
    "setup_logging",
]
