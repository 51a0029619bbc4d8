"""Identity backend port implemented by the infrastructure layer."""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod

from app.domain.dtos import LoginDto
from app.domain.dtos import RegisterDto
from app.domain.entities import AuthUserEntity
from app.domain.entities import UserEntity


class AuthRepository(ABC):
    """Sign-up and sign-in operations against an identity provider."""

    @abstractmethod
    async def register(self, dto: RegisterDto) -> UserEntity | AuthUserEntity:
        """Create an account; returns a session when the provider issues one immediately."""

    @abstractmethod
    async def login(self, dto: LoginDto) -> AuthUserEntity:
        """Authenticate with email and password."""
