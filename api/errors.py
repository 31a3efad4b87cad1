"""
Exception handlers translating errors into typed JSON responses.

Every error response, whether raised by a component, by a dependency as an
HTTPException, or by FastAPI's request validation, has the same shape:
    {"error": code, "detail": message, "field": field, "retryable": bool}
Form errors carry the field group that caused them; store errors are
flagged retryable since they may be transient.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gasbygas.errors import AuthError, GasServiceError, NotFoundError, StoreError, ValidationError

logger = logging.getLogger(__name__)

STATUS_CODES: dict[type[GasServiceError], int] = {
    ValidationError: 422,
    AuthError: 401,
    NotFoundError: 404,
    StoreError: 503,
}

HTTP_ERROR_CODES: dict[int, str] = {
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
}


def status_for(exc: GasServiceError) -> int:
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return 500


def error_body(code: str, detail: str, field: str | None = None, retryable: bool = False) -> dict[str, object]:
    return {"error": code, "detail": detail, "field": field, "retryable": retryable}


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on an application."""

    @app.exception_handler(GasServiceError)
    async def service_error_handler(request: Request, exc: GasServiceError) -> JSONResponse:
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc.code} (field={exc.field})")
        return JSONResponse(status_code=status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        code = HTTP_ERROR_CODES.get(exc.status_code, "http_error")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
        logger.info(f"{request.method} {request.url.path} rejected: invalid request ({len(errors)} error(s))")
        return JSONResponse(
            status_code=422,
            content=error_body(
                "validation_error",
                str(first.get("msg", "Invalid request")),
                field=".".join(location) or None,
            ),
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unexpected error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=error_body("internal_error", "An unexpected error occurred while processing your request."),
        )
