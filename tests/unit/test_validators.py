"""Unit tests for the register/login validation pipeline."""

from __future__ import annotations

from typing import Any

import pydantic
import pytest

from app.core import messages
from app.core.errors import BadRequestError
from app.core.errors import UnauthorizedError
from app.core.errors import ValidationError
from app.core.errors import status_of
from app.domain.dtos import DtoCreationError
from app.domain.dtos import LoginDto
from app.domain.dtos import RegisterDto
from app.validators.auth import LoginValidator
from app.validators.auth import RegisterValidator
from app.validators.auth import process_validation_error


def _register_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "name": "John",
        "lastname": "Doe",
        "email": "john.doe@example.com",
        "password": "SecurePass123!",
    }
    payload.update(overrides)
    return payload


def _validation_error(raw: Any, validator=RegisterValidator) -> ValidationError:
    with pytest.raises(ValidationError) as exc_info:
        validator.validate(raw)
    return exc_info.value


def test_minimum_lengths_produce_dto_with_lowercased_email() -> None:
    dto = RegisterValidator.validate({"name": "Jo", "lastname": "Do", "email": "A@B.CO", "password": "Pass123!"})

    assert dto == RegisterDto(name="Jo", lastname="Do", email="a@b.co", password="Pass123!")


def test_maximum_lengths_are_accepted() -> None:
    dto = RegisterValidator.validate(
        _register_payload(
            name="A" * 50,
            lastname="B" * 50,
            email="test@" + "a" * 90 + ".com",
            password="A" * 120 + "Pass123!",
        )
    )

    assert len(dto.password) == 128


def test_accented_names_are_accepted() -> None:
    dto = RegisterValidator.validate(_register_payload(name="José María", lastname="Núñez"))

    assert dto.name == "José María"
    assert dto.display_name == "José María Núñez"


def test_short_name_reports_min_length_message() -> None:
    error = _validation_error(_register_payload(name="J"))

    assert error.field == "name"
    assert error.message == messages.NAME_MIN_LENGTH
    assert error.code == "VALIDATION_ERROR"
    assert status_of(error) == 422


@pytest.mark.parametrize(
    ("overrides", "field", "message"),
    [
        ({"name": "A" * 51}, "name", messages.NAME_MAX_LENGTH),
        ({"name": "John123"}, "name", messages.NAME_INVALID_FORMAT),
        ({"lastname": "D"}, "lastname", messages.LASTNAME_MIN_LENGTH),
        ({"lastname": "Doe-Smith"}, "lastname", messages.LASTNAME_INVALID_FORMAT),
        ({"email": "invalid-email"}, "email", messages.EMAIL_INVALID_FORMAT),
        ({"email": "test@" + "a" * 92 + ".com"}, "email", messages.EMAIL_MAX_LENGTH),
        ({"password": "Pa1!"}, "password", messages.PASSWORD_MIN_LENGTH),
        ({"password": "A" * 121 + "Pass123!"}, "password", messages.PASSWORD_MAX_LENGTH),
        ({"password": "password123!"}, "password", messages.PASSWORD_INVALID_FORMAT),
        ({"password": "Pass 123!"}, "password", messages.PASSWORD_INVALID_FORMAT),
    ],
)
def test_each_constraint_reports_its_own_message(overrides: dict[str, Any], field: str, message: str) -> None:
    error = _validation_error(_register_payload(**overrides))

    assert error.field == field
    assert error.message == message


def test_first_violation_wins() -> None:
    error = _validation_error(_register_payload(name="J", email="nope", password="x"))

    assert error.field == "name"


@pytest.mark.parametrize("raw", [{}, None, [], "not-an-object", 42])
def test_empty_or_non_object_input_fails_like_incomplete_object(raw: Any) -> None:
    error = _validation_error(raw)

    assert error.field == "name"
    assert error.message == messages.NAME_REQUIRED


@pytest.mark.parametrize("missing", ["name", "lastname", "email", "password"])
def test_missing_required_field_never_returns_dto(missing: str) -> None:
    payload = _register_payload()
    payload.pop(missing)

    error = _validation_error(payload)

    assert error.field == missing


def test_non_string_field_is_a_validation_error() -> None:
    error = _validation_error(_register_payload(lastname=12345))

    assert error.field == "lastname"
    assert error.message == messages.INVALID_FIELDS


def test_unknown_fields_are_ignored() -> None:
    dto = RegisterValidator.validate(_register_payload(role="admin"))

    assert not hasattr(dto, "role")


def test_dto_rejection_surfaces_as_bad_request(monkeypatch: pytest.MonkeyPatch) -> None:
    def reject(_: Any) -> RegisterDto:
        raise DtoCreationError()

    monkeypatch.setattr(RegisterDto, "create_from", staticmethod(reject))

    with pytest.raises(BadRequestError) as exc_info:
        RegisterValidator.validate(_register_payload())

    assert exc_info.value.message == messages.INVALID_DATA
    assert status_of(exc_info.value) == 400


def test_typed_errors_from_dto_construction_pass_through(monkeypatch: pytest.MonkeyPatch) -> None:
    original = ValidationError("Custom validation error", field="email", code="CUSTOM_CODE")

    def reject(_: Any) -> RegisterDto:
        raise original

    monkeypatch.setattr(RegisterDto, "create_from", staticmethod(reject))

    with pytest.raises(ValidationError) as exc_info:
        RegisterValidator.validate(_register_payload())

    assert exc_info.value is original


def test_unexpected_failures_become_unknown_validation_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def explode(_: Any) -> RegisterDto:
        raise KeyError("surprise")

    monkeypatch.setattr(RegisterDto, "create_from", staticmethod(explode))

    with pytest.raises(BadRequestError) as exc_info:
        RegisterValidator.validate(_register_payload())

    assert exc_info.value.message == messages.UNKNOWN_VALIDATION_ERROR


def test_process_validation_error_rejects_empty_issue_list() -> None:
    empty = pydantic.ValidationError.from_exception_data("RegisterSchema", [])

    with pytest.raises(BadRequestError) as exc_info:
        process_validation_error(empty)

    assert exc_info.value.message == messages.UNKNOWN_VALIDATION_ERROR


def test_process_validation_error_keeps_typed_errors() -> None:
    original = UnauthorizedError("Invalid credentials")

    with pytest.raises(UnauthorizedError) as exc_info:
        process_validation_error(original)

    assert exc_info.value is original


def test_login_returns_dto_with_lowercased_email() -> None:
    dto = LoginValidator.validate({"email": "John.Doe@Example.COM", "password": "SecurePass123!"})

    assert dto == LoginDto(email="john.doe@example.com", password="SecurePass123!")


def test_login_missing_password_is_field_tagged() -> None:
    error = _validation_error({"email": "john@example.com"}, validator=LoginValidator)

    assert error.field == "password"
    assert error.message == messages.PASSWORD_REQUIRED


def test_login_invalid_email_reports_format_message() -> None:
    error = _validation_error({"email": "user@@example.com", "password": "SecurePass123!"}, validator=LoginValidator)

    assert error.field == "email"
    assert error.message == messages.EMAIL_INVALID_FORMAT
