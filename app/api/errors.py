"""Exception handlers mapping domain errors onto the JSON error envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CollabException,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from app.schemas.common import ErrorEnvelope

logger = logging.getLogger(__name__)

GENERIC_ERROR_DETAIL = "Something went wrong."

# Order matters: subclasses must precede their bases.
ERROR_STATUS: tuple[tuple[type[CollabException], int, str], ...] = (
    (ValidationError, 422, "validation_error"),
    (NotFoundError, 404, "not_found"),
    (ConflictError, 409, "conflict"),
    (AuthenticationError, 401, "unauthenticated"),
    (AuthorizationError, 403, "forbidden"),
)


def map_error(exc: Exception) -> tuple[int, str]:
    """Return the HTTP status and error code for a domain exception."""
    for error_type, status_code, error_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code, error_code
    return 500, "internal_error"


def error_response(status_code: int, error_code: str, detail: str, field: str | None = None) -> JSONResponse:
    envelope = ErrorEnvelope(error_code=error_code, detail=detail, field=field)
    return JSONResponse(status_code=status_code, content=envelope.model_dump(exclude_none=True))


async def collab_exception_handler(request: Request, exc: CollabException) -> JSONResponse:
    status_code, error_code = map_error(exc)
    if status_code == 500:
        logger.error(
            "api.unhandled_domain_error",
            exc_info=exc,
            extra={"event": "api.unhandled_domain_error", "path": request.url.path},
        )
        return error_response(status_code, error_code, GENERIC_ERROR_DETAIL)
    return error_response(status_code, error_code, str(exc), getattr(exc, "field", None))


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "api.database_error",
        exc_info=exc,
        extra={"event": "api.database_error", "path": request.url.path},
    )
    return error_response(500, "internal_error", GENERIC_ERROR_DETAIL)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    return error_response(
        422,
        "validation_error",
        str(first.get("msg", "Invalid request.")),
        location[-1] if location else None,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, "http_error", str(exc.detail))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CollabException, collab_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
