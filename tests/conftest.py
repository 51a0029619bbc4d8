"""Shared pytest fixtures for the auth API test suites."""

from collections.abc import Generator
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.domain.dtos import LoginDto  # noqa: E402
from app.domain.dtos import RegisterDto  # noqa: E402
from app.domain.entities import AuthUserEntity  # noqa: E402
from app.domain.entities import UserEntity  # noqa: E402
from app.domain.repository import AuthRepository  # noqa: E402


def make_user(**overrides) -> UserEntity:
    values = {
        "id": "user-1",
        "email": "john.doe@example.com",
        "name": "John Doe",
        "email_verified": True,
    }
    values.update(overrides)
    return UserEntity(**values)


def make_auth_user(**overrides) -> AuthUserEntity:
    return AuthUserEntity(
        user=overrides.pop("user", make_user()),
        access_token=overrides.pop("access_token", "access-token"),
        refresh_token=overrides.pop("refresh_token", "refresh-token"),
    )


class FakeAuthRepository(AuthRepository):
    """In-memory repository recording calls and replaying canned outcomes."""

    def __init__(self) -> None:
        self.register_calls: list[RegisterDto] = []
        self.login_calls: list[LoginDto] = []
        self.register_result: UserEntity | AuthUserEntity = make_auth_user()
        self.login_result: AuthUserEntity = make_auth_user()
        self.error: BaseException | None = None

    async def register(self, dto: RegisterDto) -> UserEntity | AuthUserEntity:
        self.register_calls.append(dto)
        if self.error is not None:
            raise self.error
        return self.register_result

    async def login(self, dto: LoginDto) -> AuthUserEntity:
        self.login_calls.append(dto)
        if self.error is not None:
            raise self.error
        return self.login_result


@pytest.fixture
def fake_repository() -> FakeAuthRepository:
    return FakeAuthRepository()


@pytest.fixture
def client(fake_repository: FakeAuthRepository) -> Generator[TestClient, None, None]:
    """Provide an API test client with the identity backend replaced by a fake."""
    from app.api.auth import get_auth_repository
    from app.main import app

    app.dependency_overrides[get_auth_repository] = lambda: fake_repository
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
