"""Envelope construction and JSON response helpers.

The ``build_*`` functions are pure: they never touch the network or the request and
only fill in metadata defaults. The ``send_*`` helpers wrap an envelope into a
``JSONResponse`` for a given request context.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from datetime import timezone
import math
from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.core.config import API_VERSION
from app.core.request_id import REQUEST_ID_HEADER
from app.core.request_id import RequestContext
from app.schemas.error import ErrorEnvelope
from app.schemas.error import FieldError
from app.schemas.response import PaginationMeta
from app.schemas.response import ResponseMeta
from app.schemas.response import SuccessEnvelope


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string with a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_meta(
    *,
    request_id: str | None = None,
    timestamp: str | None = None,
    version: str | None = None,
    pagination: PaginationMeta | None = None,
) -> ResponseMeta:
    """Build envelope metadata, falling back to defaults for empty values."""
    return ResponseMeta(
        request_id=request_id or "",
        timestamp=timestamp or utc_timestamp(),
        version=version or API_VERSION,
        pagination=pagination,
    )


def build_success(data: Any, meta: ResponseMeta | None = None) -> SuccessEnvelope:
    """Wrap ``data`` in a success envelope without copying or coercing it."""
    return SuccessEnvelope(data=data, meta=meta or build_meta())


def build_error(
    code: int,
    errors: Sequence[FieldError],
    meta: ResponseMeta | None = None,
) -> ErrorEnvelope:
    """Wrap serialized errors in an error envelope."""
    return ErrorEnvelope(code=code, errors=list(errors), meta=meta or build_meta())


def build_paginated(
    items: Sequence[Any],
    *,
    page: int,
    limit: int,
    total: int,
    meta: ResponseMeta | None = None,
) -> SuccessEnvelope:
    """Wrap a page of items and attach pagination metadata with ``totalPages``."""
    if limit <= 0:
        raise ValueError("limit must be positive")

    base = meta or build_meta()
    pagination = PaginationMeta(
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit),
    )
    return build_success(items, base.model_copy(update={"pagination": pagination}))


def envelope_content(envelope: BaseModel) -> Any:
    """Return the JSON-ready body for an envelope using camelCase keys."""
    return envelope.model_dump(mode="json", by_alias=True)


def envelope_response(envelope: SuccessEnvelope | ErrorEnvelope, *, status_code: int) -> JSONResponse:
    """Render an envelope and mirror its request id onto the response header."""
    response = JSONResponse(status_code=status_code, content=envelope_content(envelope))
    if envelope.meta.request_id:
        response.headers[REQUEST_ID_HEADER] = envelope.meta.request_id
    return response


def send_success(
    data: Any,
    context: RequestContext,
    *,
    status_code: int = 200,
    version: str | None = None,
) -> JSONResponse:
    """Build and render a success envelope for the current request."""
    meta = build_meta(request_id=context.request_id, version=version or context.version)
    envelope = build_success(data, meta)
    return envelope_response(envelope, status_code=status_code)


def send_paginated(
    items: Sequence[Any],
    context: RequestContext,
    *,
    page: int,
    limit: int,
    total: int,
    status_code: int = 200,
    version: str | None = None,
) -> JSONResponse:
    """Build and render a paginated success envelope for the current request."""
    envelope = build_paginated(
        items,
        page=page,
        limit=limit,
        total=total,
        meta=build_meta(request_id=context.request_id, version=version or context.version),
    )
    return envelope_response(envelope, status_code=status_code)
