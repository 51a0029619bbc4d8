"""Single-operation use-cases injected into the auth controller."""

from __future__ import annotations

from app.domain.dtos import LoginDto
from app.domain.dtos import RegisterDto
from app.domain.entities import AuthUserEntity
from app.domain.entities import UserEntity
from app.domain.repository import AuthRepository


class RegisterUser:
    def __init__(self, repository: AuthRepository) -> None:
        self._repository = repository

    async def execute(self, dto: RegisterDto) -> UserEntity | AuthUserEntity:
        return await self._repository.register(dto)


class LoginUser:
    def __init__(self, repository: AuthRepository) -> None:
        self._repository = repository

    async def execute(self, dto: LoginDto) -> AuthUserEntity:
        return await self._repository.login(dto)
