"""Global exception handlers mapping domain exceptions to HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dictation_router.exceptions import (
    ApiError,
    ConfigurationError,
    DictationRouterError,
    ParseError,
    TemplateNotFoundError,
    TransportError,
    ValidationError,
)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"error": str(exc), "type": "validation_error"})

    @app.exception_handler(ConfigurationError)
    async def handle_configuration_error(request: Request, exc: ConfigurationError) -> JSONResponse:
        return JSONResponse(
            status_code=503, content={"error": str(exc), "type": "configuration_error"}
        )

    @app.exception_handler(TransportError)
    async def handle_transport_error(request: Request, exc: TransportError) -> JSONResponse:
        return JSONResponse(status_code=504, content={"error": str(exc), "type": "transport_error"})

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=502,
            content={"error": str(exc), "type": "api_error", "upstream_status": exc.status_code},
        )

    @app.exception_handler(ParseError)
    async def handle_parse_error(request: Request, exc: ParseError) -> JSONResponse:
        return JSONResponse(status_code=502, content={"error": str(exc), "type": "parse_error"})

    @app.exception_handler(DictationRouterError)
    async def handle_generic_error(request: Request, exc: DictationRouterError) -> JSONResponse:
        return JSONResponse(
            status_code=500, content={"error": str(exc), "type": "dictation_router_error"}
        )

    @app.exception_handler(TemplateNotFoundError)
    async def handle_not_found(request: Request, exc: TemplateNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": str(exc), "type": "not_found"})
