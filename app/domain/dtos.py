"""Immutable request DTOs handed from the presentation layer to use-cases."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from typing import Any

from app.core import messages


class DtoCreationError(ValueError):
    """Raised when a DTO is built from a mapping missing required values."""

    def __init__(self, message: str = messages.INVALID_DATA) -> None:
        super().__init__(message)
        self.message = message


def _require(data: Mapping[str, Any], *names: str) -> tuple[Any, ...]:
    values = tuple(data.get(name) for name in names)
    if not all(values):
        raise DtoCreationError()
    return values


@dataclass(frozen=True)
class RegisterDto:
    """Validated registration payload."""

    name: str
    lastname: str
    email: str
    password: str = field(repr=False)

    @property
    def display_name(self) -> str:
        return f"{self.name} {self.lastname}"

    @classmethod
    def create_from(cls, data: Mapping[str, Any]) -> RegisterDto:
        name, lastname, email, password = _require(data, "name", "lastname", "email", "password")
        return cls(name=name, lastname=lastname, email=email, password=password)


@dataclass(frozen=True)
class LoginDto:
    """Validated login payload."""

    email: str
    password: str = field(repr=False)

    @classmethod
    def create_from(cls, data: Mapping[str, Any]) -> LoginDto:
        email, password = _require(data, "email", "password")
        return cls(email=email, password=password)
