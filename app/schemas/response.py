"""Success envelope and metadata schemas."""

from __future__ import annotations

from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_serializer


class PaginationMeta(BaseModel):
    """Page window attached to paginated envelopes."""

    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")


class ResponseMeta(BaseModel):
    """Correlation metadata carried by every envelope."""

    model_config = ConfigDict(populate_by_name=True)

    request_id: str = Field(alias="requestId")
    timestamp: str
    version: str
    pagination: PaginationMeta | None = None

    @model_serializer(mode="wrap")
    def _omit_empty_pagination(self, handler: Any) -> dict[str, Any]:
        payload = handler(self)
        if payload.get("pagination") is None:
            payload.pop("pagination", None)
        return payload


class SuccessEnvelope(BaseModel):
    """Top-level API success response envelope."""

    status: Literal["success"] = "success"
    data: Any
    meta: ResponseMeta
