"""Access logging keyed by the request's correlation context.

Health probes are skipped. Server failures log at ERROR so they stand out from
the client errors that the auth flows produce routinely.
"""

from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.request_id import get_request_context

logger = logging.getLogger("app.request")

QUIET_PATHS = frozenset({"/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start = time.perf_counter()
        status_code = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            context = get_request_context(request)
            logger.log(
                logging.ERROR if status_code >= 500 else logging.INFO,
                "%s %s -> %s (%.1fms) rid=%s version=%s",
                request.method,
                request.url.path,
                status_code,
                (time.perf_counter() - start) * 1000.0,
                context.request_id,
                context.version or "-",
            )
