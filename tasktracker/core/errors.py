"""Application error types and the single boundary that renders them as JSON envelopes."""

import logging
import traceback
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasktracker.core.config import settings

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE codes for constraint violations -> client-facing message.
INTEGRITY_MESSAGES: dict[str, str] = {
    "23505": "Duplicate field value entered",
    "23503": "Referenced record not found",
    "23502": "Required field is missing",
    "23514": "Invalid value for field",
}

# Fallback for drivers without SQLSTATE (e.g. SQLite): substring -> SQLSTATE.
_INTEGRITY_TEXT_HINTS: tuple[tuple[str, str], ...] = (
    ("unique", "23505"),
    ("foreign key", "23503"),
    ("not null", "23502"),
    ("check constraint", "23514"),
)


class AppError(Exception):
    """Base for errors that map to a non-2xx response with a human-readable message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class BadRequest(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(AppError):
    """Duplicate unique value; reported as 400 like other store constraint violations."""

    status_code = status.HTTP_400_BAD_REQUEST


def error_body(message: str, **extra: Any) -> dict[str, Any]:
    """Build the uniform error envelope."""
    body: dict[str, Any] = {"status": "error", "message": message}
    body.update(extra)
    return body


def integrity_error_message(exc: IntegrityError) -> str:
    """Map a store constraint violation to a generic message without leaking driver detail."""
    code = getattr(exc.orig, "pgcode", None)
    if code in INTEGRITY_MESSAGES:
        return INTEGRITY_MESSAGES[code]
    text = str(exc.orig).lower()
    for hint, sqlstate in _INTEGRITY_TEXT_HINTS:
        if hint in text:
            return INTEGRITY_MESSAGES[sqlstate]
    return "Invalid data"


def _validation_message(errors: list[dict[str, str]]) -> str:
    if not errors:
        return "Validation failed"
    first = errors[0]
    return f"{first['field']}: {first['message']}" if first["field"] else first["message"]


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message),
        headers=headers,
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message),
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(p) for p in e.get("loc", ()) if p not in ("body", "query", "path")),
            "message": e.get("msg", ""),
        }
        for e in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(_validation_message(errors), errors=errors),
    )


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    message = integrity_error_message(exc)
    logger.warning(
        "Constraint violation",
        extra={"path": request.url.path, "reason": message},
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(message))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    extra: dict[str, Any] = {}
    if settings.APP_ENV == "dev":
        extra["stack"] = "".join(traceback.format_exception(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal Server Error", **extra),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that turn every failure into the error envelope."""
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
