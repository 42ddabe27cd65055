"""Error taxonomy and the handlers that render it as JSON responses."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def build_error_payload(message: str) -> Dict[str, Any]:
    return {"error": message}


class AppError(Exception):
    """Application-scoped error for standardized API responses."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def payload(self) -> Dict[str, Any]:
        return build_error_payload(self.message)


class ValidationError(AppError):
    """Malformed or missing field / identifier."""

    status_code = 400


class UnrecognizedActionError(ValidationError):
    """An `action` value outside the closed set a route accepts."""

    def __init__(self, action: Any):
        super().__init__(f"Unrecognized action: {action}")
        self.action = action


class AuthError(AppError):
    """Missing, invalid or expired token, or a role outside the allow-list."""

    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class InternalError(AppError):
    status_code = 500


def describe_validation_errors(errors: Iterable[Dict[str, Any]]) -> str:
    """Flatten pydantic error entries into one readable message."""
    parts = []
    for error in errors:
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload)


async def request_validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=build_error_payload(describe_validation_errors(exc.errors())),
    )


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=build_error_payload(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=build_error_payload("Internal server error"))


def register_error_handlers(app) -> None:
    """Attach every handler to a FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
