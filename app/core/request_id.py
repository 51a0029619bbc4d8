"""Per-request correlation id middleware and context."""

from __future__ import annotations

from dataclasses import dataclass
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"


@dataclass(frozen=True)
class RequestContext:
    """Ephemeral per-request state handed to controllers and the error handler."""

    request_id: str = ""
    version: str = ""


def request_id_of(request: Request) -> str:
    """Return the correlation id assigned to ``request`` or ``""`` when none was set."""
    return getattr(request.state, "request_id", None) or ""


def api_version_of(request: Request) -> str:
    """Return the API version the application was built with, ``""`` when unset."""
    return getattr(request.app.state, "api_version", None) or ""


def get_request_context(request: Request) -> RequestContext:
    """FastAPI dependency exposing the current request's correlation context."""
    return RequestContext(request_id=request_id_of(request), version=api_version_of(request))


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Assign a fresh UUID4 to every request before any handler runs.

    The id is stored on ``request.state.request_id`` and mirrored onto the
    ``X-Request-ID`` response header.
    """

    header_name = REQUEST_ID_HEADER

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        response: Response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response
