"""
CORS headers and error translation for the FastAPI app.

Every response, including preflights and every error path, carries the same
CORS headers so browser callers can always read the body. Error bodies have a
single shape: ``{"error": "<message>"}`` plus optional extra fields.

Handlers for Exception run outside user middleware in Starlette, so error
responses set the CORS headers themselves instead of relying on the middleware.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.domain.exceptions import (
    CreditsConflict,
    DuplicateStock,
    InsufficientCredits,
    InvalidArgument,
    Unauthorized,
    UpstreamUnavailable,
)

logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"
CORS_ALLOW_METHODS = "GET, POST, DELETE, OPTIONS"

_STATUS_BY_ERROR: dict[type[Exception], int] = {
    InvalidArgument: 400,
    Unauthorized: 401,
    InsufficientCredits: 402,
    CreditsConflict: 409,
    DuplicateStock: 409,
    UpstreamUnavailable: 503,
}


def cors_headers(allowed_origin: str = "*") -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": allowed_origin,
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
    }


def error_response(
    status_code: int,
    message: str,
    headers: dict[str, str],
    **extra: Any,
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra}, headers=headers)


def install_cors(app: FastAPI, allowed_origin: str = "*") -> None:
    """Answer every OPTIONS preflight and stamp CORS headers on all responses."""
    headers = cors_headers(allowed_origin)

    @app.middleware("http")
    async def cors_middleware(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=headers)
        response = await call_next(request)
        response.headers.update(headers)
        return response


def install_error_handlers(app: FastAPI, allowed_origin: str = "*") -> None:
    """Map domain errors, validation failures and HTTP errors to ``{error}`` bodies."""
    headers = cors_headers(allowed_origin)

    def _domain_handler(status_code: int):
        async def handler(request: Request, exc: Exception) -> JSONResponse:
            if status_code >= 500:
                logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
            return error_response(status_code, str(exc), headers)

        return handler

    for error_type, status_code in _STATUS_BY_ERROR.items():
        app.add_exception_handler(error_type, _domain_handler(status_code))

    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("query", "body", "path"))
        message = first.get("msg", "Request validation failed")
        return error_response(400, f"{location}: {message}" if location else message, headers)

    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
        return error_response(exc.status_code, message, {**headers, **(exc.headers or {})})

    async def handle_unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return error_response(500, "Internal server error", headers)

    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unhandled_exception)
