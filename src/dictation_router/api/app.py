"""FastAPI application with lifespan management."""

from __future__ import annotations

import importlib.metadata
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from dictation_router.api.middleware.error_handler import register_error_handlers
from dictation_router.api.routes import categorize, health
from dictation_router.core.config import APIConfig, AppSettings
from dictation_router.core.startup_checks import validate_settings
from dictation_router.hooks import InMemoryUsageTracker, setup_logging
from dictation_router.services.categorization_service import (
    CategorizationService,
    create_categorization_service,
)


def _get_version() -> str:
    """Read package version from installed metadata, with dev fallback."""
    try:
        return importlib.metadata.version("dictation-router")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


def create_app(
    settings: Optional[AppSettings] = None,
    service: Optional[CategorizationService] = None,
) -> FastAPI:
    """Build the API. ``service`` overrides the one wired from settings (tests)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        app_settings = settings or AppSettings()
        validate_settings(app_settings)
        setup_logging(app_settings.observability)

        app.state.settings = app_settings
        app.state.usage_tracker = InMemoryUsageTracker()
        app.state.service = service or create_categorization_service(
            app_settings, usage_tracker=app.state.usage_tracker
        )
        yield

    api_config = settings.api if settings is not None else APIConfig()
    app = FastAPI(
        title=api_config.title,
        description=api_config.description,
        version=_get_version(),
        lifespan=lifespan,
    )
    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(categorize.router, prefix="/api")
    return app


app = create_app()
