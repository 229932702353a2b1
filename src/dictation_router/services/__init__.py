"""Service layer orchestrating the categorization engines."""

from __future__ import annotations

from dictation_router.services.categorization_service import (
    CategorizationService,
    create_categorization_service,
)

__all__ = ["CategorizationService", "create_categorization_service"]
