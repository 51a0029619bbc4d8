"""Turn raw request bodies into DTOs or typed application errors."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from typing import NoReturn
from typing import TypeVar

import pydantic
from pydantic import BaseModel

from app.core import messages
from app.core.errors import VALIDATION_ERROR_CODE
from app.core.errors import AppError
from app.core.errors import BadRequestError
from app.core.errors import ValidationError
from app.domain.dtos import DtoCreationError
from app.domain.dtos import LoginDto
from app.domain.dtos import RegisterDto
from app.schemas.auth import LoginSchema
from app.schemas.auth import RegisterSchema

DtoT = TypeVar("DtoT")


def process_validation_error(error: BaseException) -> NoReturn:
    """Re-raise any validation-stage failure as a typed application error.

    Only the first schema issue is reported. Typed application errors pass through
    untouched so their field, code and status survive.
    """
    if isinstance(error, pydantic.ValidationError):
        issues = error.errors()
        if issues:
            first = issues[0]
            field = ".".join(str(part) for part in first.get("loc", ()))
            raise ValidationError(first["msg"], field=field, code=VALIDATION_ERROR_CODE) from error
        raise BadRequestError(messages.UNKNOWN_VALIDATION_ERROR) from error

    if isinstance(error, AppError):
        raise error

    raise BadRequestError(messages.UNKNOWN_VALIDATION_ERROR) from error


def _validate(
    raw: Any,
    schema: type[BaseModel],
    create_dto: Callable[[dict[str, Any]], DtoT],
) -> DtoT:
    try:
        validated = schema.model_validate(raw)
        try:
            return create_dto(validated.model_dump())
        except DtoCreationError as exc:
            raise BadRequestError(exc.message) from exc
    except Exception as exc:
        process_validation_error(exc)


class RegisterValidator:
    @staticmethod
    def validate(raw: Any) -> RegisterDto:
        """Validate a registration body and return a normalized DTO."""
        return _validate(raw, RegisterSchema, RegisterDto.create_from)


class LoginValidator:
    @staticmethod
    def validate(raw: Any) -> LoginDto:
        """Validate a login body and return a normalized DTO."""
        return _validate(raw, LoginSchema, LoginDto.create_from)
