"""Liveness and readiness endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """200 while the process is up."""
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request) -> JSONResponse:
    """503 until the lifespan has wired the categorization service.

    Reports whether the LLM-assisted path is available; the rule-based
    engine is always served.
    """
    service = getattr(request.app.state, "service", None)
    if service is None:
        return JSONResponse(status_code=503, content={"status": "starting"})
    return JSONResponse(content={"status": "ready", "llm_enabled": service.llm_enabled})
