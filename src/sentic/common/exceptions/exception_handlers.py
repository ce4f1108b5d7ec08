# File: common/exceptions/exception_handlers.py

import traceback
from typing import Any, Optional

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from sentic.common.config.settings import Settings
from sentic.common.exceptions.base_exception import AppHTTPException
from sentic.common.logging.logger import log_error, log_warning
from sentic.common.schemas.standard_response import ErrorResponse

GENERIC_SERVER_ERROR = "Internal Server Error"
ROUTE_NOT_FOUND = "Route not found"


def _settings(request: Request) -> Settings:
    return request.app.state.settings


def build_error_response(
    settings: Settings,
    status_code: int,
    message: str,
    details: Optional[Any] = None,
) -> JSONResponse:
    """Render the error envelope, hiding server-side detail in production."""
    if status_code >= HTTP_500_INTERNAL_SERVER_ERROR and settings.is_production:
        message = GENERIC_SERVER_ERROR
    body = ErrorResponse.from_exception(message, details, debug=not settings.is_production)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log, report to Sentry and render an unexpected failure as a 500."""
    log_error("Unhandled exception", extra={
        "path": request.url.path,
        "method": request.method,
        "error": str(exc),
        "client_ip": request.client.host if request.client else "unknown",
    }, exc_info=True)
    sentry_sdk.capture_exception(exc)

    details = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return build_error_response(
        _settings(request),
        HTTP_500_INTERNAL_SERVER_ERROR,
        str(exc) or GENERIC_SERVER_ERROR,
        details,
    )


def register_exception_handlers(app: FastAPI):
    """
    Register global exception handlers for all expected error types.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Handles Pydantic validation errors (e.g., missing fields, wrong types, etc.)
        """
        details = []
        for err in exc.errors():
            loc = err.get("loc", [])
            msg = err.get("msg", "Invalid input.")
            field = loc[-1] if loc else "field"
            details.append(f"{field}: {msg}")

        error_message = "; ".join(details)

        log_warning("Validation error", extra={
            "path": request.url.path,
            "method": request.method,
            "errors": error_message
        })

        return build_error_response(_settings(request), HTTP_400_BAD_REQUEST, error_message, details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Handles all HTTP exceptions, including the application ones and unmatched routes.
        """
        if isinstance(exc, AppHTTPException):
            message = exc.message
        elif exc.status_code == HTTP_404_NOT_FOUND:
            message = ROUTE_NOT_FOUND
        else:
            message = str(exc.detail)

        log_warning("HTTPException caught", extra={
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
            "detail": message,
        })

        response = build_error_response(_settings(request), exc.status_code, message)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Handles uncaught general exceptions.
        """
        return internal_error_response(request, exc)
