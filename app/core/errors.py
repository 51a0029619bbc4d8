"""Application error taxonomy, envelope mapping and exception handler registration.

Every failure that becomes an HTTP response passes through :func:`handle_error`.
Typed :class:`AppError` kinds map to a fixed status through :func:`status_of`;
anything else collapses to an opaque 500 so internal detail never reaches clients.
"""

from __future__ import annotations

from typing import Any
import logging

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core import messages
from app.core.config import API_VERSION
from app.core.request_id import api_version_of
from app.core.request_id import request_id_of
from app.core.response import build_error
from app.core.response import build_meta
from app.core.response import envelope_response
from app.schemas.error import ErrorEnvelope
from app.schemas.error import FieldError

logger = logging.getLogger(__name__)

VALIDATION_ERROR_CODE = "VALIDATION_ERROR"


class AppError(Exception):
    """Base application error carrying one message, an optional field and an optional code."""

    def __init__(self, message: str, field: str | None = None, code: str | None = None) -> None:
        if not message:
            raise ValueError("AppError message must be non-empty")
        super().__init__(message)
        self.message = message
        self.field = field
        self.code = code

    def serialize(self) -> list[FieldError]:
        """Return this error as a single-item list of field errors."""
        return [FieldError(message=self.message, field=self.field, code=self.code)]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, field={self.field!r}, code={self.code!r})"


class BadRequestError(AppError):
    """Malformed input, unknown validation anomaly or re-wrapped upstream rejection."""


class ValidationError(AppError):
    """Exactly one field-tagged schema violation."""


class UnauthorizedError(AppError):
    """Credential or permission failure."""


class NotFoundError(AppError):
    """Unmatched route or missing resource."""


_STATUS_BY_KIND: dict[type[AppError], int] = {
    BadRequestError: 400,
    UnauthorizedError: 401,
    NotFoundError: 404,
    ValidationError: 422,
}


def _status_for_kind(kind: type[AppError]) -> int | None:
    for klass in kind.__mro__:
        if klass in _STATUS_BY_KIND:
            return _STATUS_BY_KIND[klass]
    return None


def status_of(error: AppError | type[AppError]) -> int:
    """Resolve the HTTP status of an error kind; subclasses inherit their parent's status."""
    kind = error if isinstance(error, type) else type(error)
    resolved = _status_for_kind(kind)
    if resolved is None:
        raise TypeError(f"{kind.__name__} is not a registered error kind")
    return resolved


def is_known_error(error: Any) -> bool:
    """Return whether ``error`` is an AppError of a registered kind."""
    return isinstance(error, AppError) and _status_for_kind(type(error)) is not None


def handle_error(error: Any, request_id: str | None = "", version: str | None = API_VERSION) -> ErrorEnvelope:
    """Map any error value to the shared error envelope."""
    meta = build_meta(request_id=request_id, version=version)
    if is_known_error(error):
        return build_error(status_of(error), error.serialize(), meta)

    return build_error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        [FieldError(message=messages.INTERNAL_SERVER_ERROR)],
        meta,
    )


def _format_location(location: tuple[Any, ...] | list[Any] | Any) -> str:
    if not isinstance(location, (tuple, list)):
        return str(location)

    prefixes = {"body", "query", "path", "header", "cookie"}
    filtered = [str(part) for part in location if part not in prefixes]
    if filtered:
        return ".".join(filtered)

    if not location:
        return "request"

    return str(location[0])


def _from_request_validation(exc: RequestValidationError) -> AppError:
    issues = exc.errors()
    if not issues:
        return BadRequestError(messages.UNKNOWN_VALIDATION_ERROR)

    first = issues[0]
    return ValidationError(
        str(first.get("msg") or messages.INVALID_FIELDS),
        field=_format_location(first.get("loc", ())),
        code=VALIDATION_ERROR_CODE,
    )


def _from_http_exception(exc: StarletteHTTPException) -> AppError | None:
    detail = exc.detail if isinstance(exc.detail, str) and exc.detail else messages.REQUEST_FAILED

    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return NotFoundError(messages.ROUTE_NOT_FOUND if detail == "Not Found" else detail)
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        return UnauthorizedError(detail)
    if 400 <= exc.status_code < 500:
        return BadRequestError(detail)
    return None


def _respond(request: Request, error: Any) -> JSONResponse:
    request_id = request_id_of(request)
    envelope = handle_error(error, request_id, api_version_of(request) or API_VERSION)

    if envelope.code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "Unhandled error on %s %s rid=%s: %r",
            request.method,
            request.url.path,
            request_id,
            error,
            exc_info=error if isinstance(error, BaseException) else None,
        )
    else:
        logger.warning(
            "%s on %s %s rid=%s: %s",
            type(error).__name__,
            request.method,
            request.url.path,
            request_id,
            getattr(error, "message", error),
        )

    return envelope_response(envelope, status_code=envelope.code)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Return typed application errors in the shared envelope."""
    return _respond(request, exc)


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Normalize FastAPI validation errors to the first field violation."""
    return _respond(request, _from_request_validation(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Normalize framework HTTP exceptions, including unmatched routes."""
    return _respond(request, _from_http_exception(exc) or exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Avoid leaking internal exceptions while keeping response shape stable."""
    return _respond(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    """Attach all error handlers to a FastAPI app instance."""
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
