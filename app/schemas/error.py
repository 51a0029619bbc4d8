"""Error envelope schemas shared across API handlers."""

from __future__ import annotations

from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import model_serializer

from app.schemas.response import ResponseMeta


class FieldError(BaseModel):
    """Single violation: a message plus the optional field path and machine code."""

    message: str
    field: str | None = None
    code: str | None = None

    @model_serializer(mode="wrap")
    def _omit_unset(self, handler: Any) -> dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value is not None}


class ErrorEnvelope(BaseModel):
    """Top-level API error response envelope."""

    status: Literal["error"] = "error"
    code: int
    errors: list[FieldError]
    meta: ResponseMeta
