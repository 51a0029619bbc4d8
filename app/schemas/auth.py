"""Declarative request schemas for the register and login payloads.

Each field runs an ordered chain of constraints. The first constraint that fails
raises a ``PydanticCustomError`` carrying that constraint's own message, so the
first reported issue always names exactly one field and one rule.
"""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Mapping
import re
from typing import Annotated
from typing import Any

from pydantic import BaseModel
from pydantic import BeforeValidator
from pydantic import ConfigDict
from pydantic import model_validator
from pydantic_core import PydanticCustomError

from app.core import messages
from app.core.patterns import EMAIL_BASIC_REGEX
from app.core.patterns import NAME_LASTNAME_REGEX
from app.core.patterns import SECURE_PASSWORD_REGEX

Constraint = Callable[[str], str]


def min_length(limit: int, message: str) -> Constraint:
    def check(value: str) -> str:
        if len(value) < limit:
            raise PydanticCustomError("string_too_short", message)
        return value

    return check


def max_length(limit: int, message: str) -> Constraint:
    def check(value: str) -> str:
        if len(value) > limit:
            raise PydanticCustomError("string_too_long", message)
        return value

    return check


def matches(pattern: re.Pattern[str], message: str) -> Constraint:
    def check(value: str) -> str:
        if pattern.fullmatch(value) is None:
            raise PydanticCustomError("string_pattern_mismatch", message)
        return value

    return check


def lowercase(value: str) -> str:
    return value.lower()


def text_field(required_message: str, *constraints: Constraint) -> BeforeValidator:
    """Build a validator for a required string field with ordered constraints."""

    def validate(value: Any) -> str:
        if value is None:
            raise PydanticCustomError("missing", required_message)
        if not isinstance(value, str):
            raise PydanticCustomError("string_type", messages.INVALID_FIELDS)
        for constraint in constraints:
            value = constraint(value)
        return value

    return BeforeValidator(validate)


NameField = Annotated[
    str,
    text_field(
        messages.NAME_REQUIRED,
        min_length(2, messages.NAME_MIN_LENGTH),
        max_length(50, messages.NAME_MAX_LENGTH),
        matches(NAME_LASTNAME_REGEX, messages.NAME_INVALID_FORMAT),
    ),
]

LastnameField = Annotated[
    str,
    text_field(
        messages.LASTNAME_REQUIRED,
        min_length(2, messages.LASTNAME_MIN_LENGTH),
        max_length(50, messages.LASTNAME_MAX_LENGTH),
        matches(NAME_LASTNAME_REGEX, messages.LASTNAME_INVALID_FORMAT),
    ),
]

EmailField = Annotated[
    str,
    text_field(
        messages.EMAIL_REQUIRED,
        matches(EMAIL_BASIC_REGEX, messages.EMAIL_INVALID_FORMAT),
        max_length(100, messages.EMAIL_MAX_LENGTH),
        lowercase,
    ),
]

PasswordField = Annotated[
    str,
    text_field(
        messages.PASSWORD_REQUIRED,
        min_length(8, messages.PASSWORD_MIN_LENGTH),
        max_length(128, messages.PASSWORD_MAX_LENGTH),
        matches(SECURE_PASSWORD_REGEX, messages.PASSWORD_INVALID_FORMAT),
    ),
]


class _RequestSchema(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _coerce_mapping(cls, data: Any) -> dict[str, Any]:
        # Non-object bodies fail field by field exactly like an empty object;
        # absent fields are passed as None so each reports its own required message.
        source = data if isinstance(data, Mapping) else {}
        return {name: source.get(name) for name in cls.model_fields}


class RegisterSchema(_RequestSchema):
    """Registration payload constraints."""

    name: NameField
    lastname: LastnameField
    email: EmailField
    password: PasswordField


class LoginSchema(_RequestSchema):
    """Login payload constraints."""

    email: EmailField
    password: PasswordField
