"""Supabase-backed implementation of the auth repository."""

from __future__ import annotations

import asyncio
import logging

from supabase_auth.errors import AuthApiError
from supabase_auth.errors import AuthWeakPasswordError

from app.auth.client import SupabaseAuthClient
from app.auth.client import SupabaseAuthResponseError
from app.core import messages
from app.core.errors import BadRequestError
from app.core.errors import UnauthorizedError
from app.domain.dtos import LoginDto
from app.domain.dtos import RegisterDto
from app.domain.entities import AuthUserEntity
from app.domain.entities import UserEntity
from app.domain.repository import AuthRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_STATUSES = frozenset({400, 401})

# Weak-password rejections are raised outside the AuthApiError hierarchy.
PROVIDER_REJECTIONS = (AuthApiError, AuthWeakPasswordError)


class AuthDatasource(AuthRepository):
    """Run sign-up and sign-in through the blocking client on a worker thread."""

    def __init__(self, client: SupabaseAuthClient) -> None:
        self._client = client

    async def register(self, dto: RegisterDto) -> UserEntity | AuthUserEntity:
        try:
            payload = await asyncio.to_thread(
                self._client.sign_up,
                dto.email,
                dto.password,
                {"display_name": dto.display_name},
            )
        except PROVIDER_REJECTIONS as exc:
            logger.warning("Sign-up rejected by identity provider: status=%s code=%s", exc.status, exc.code)
            raise BadRequestError(exc.message or messages.USER_NOT_CREATED, code=exc.code) from exc

        if not payload.get("user"):
            raise SupabaseAuthResponseError(messages.USER_NOT_CREATED)

        user = UserEntity.create_from(payload["user"])
        session = payload.get("session")
        logger.info("User registered id=%s session_issued=%s", user.id, bool(session))
        if not session:
            return user
        return AuthUserEntity.create_from(user, session)

    async def login(self, dto: LoginDto) -> AuthUserEntity:
        try:
            payload = await asyncio.to_thread(self._client.sign_in_with_password, dto.email, dto.password)
        except PROVIDER_REJECTIONS as exc:
            logger.warning("Sign-in rejected by identity provider: status=%s code=%s", exc.status, exc.code)
            if exc.status in INVALID_CREDENTIALS_STATUSES:
                raise UnauthorizedError(
                    messages.INVALID_CREDENTIALS,
                    code=exc.code or "INVALID_CREDENTIALS",
                ) from exc
            raise BadRequestError(exc.message or messages.INVALID_CREDENTIALS, code=exc.code) from exc

        session = payload.get("session")
        if not payload.get("user") or not session:
            raise SupabaseAuthResponseError(messages.INVALID_DATA_RECEIVED)

        user = UserEntity.create_from(payload["user"])
        logger.info("User logged in id=%s", user.id)
        return AuthUserEntity.create_from(user, session)
