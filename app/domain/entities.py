"""Identity entities returned by the auth use-cases."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from app.core import messages


class EntityCreationError(ValueError):
    """Raised when identity-provider data cannot be mapped to an entity."""


class UserEntity(BaseModel):
    """Registered user as seen by API clients."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    email: str
    name: str
    email_verified: bool = Field(default=False, alias="emailVerified")
    phone: str | None = None

    @classmethod
    def create_from(cls, raw: Mapping[str, Any]) -> UserEntity:
        """Map a provider user object, reading the display name from user metadata."""
        metadata = raw.get("user_metadata") or {}
        user_id = raw.get("id")
        email = raw.get("email")
        name = raw.get("name") or metadata.get("display_name")

        if not user_id or not email or not name:
            raise EntityCreationError(messages.INVALID_DATA_RECEIVED)

        return cls(
            id=str(user_id),
            email=str(email),
            name=str(name),
            email_verified=bool(raw.get("email_confirmed_at") or raw.get("email_verified")),
            phone=raw.get("phone") or None,
        )


class AuthUserEntity(BaseModel):
    """User plus the session tokens issued by the identity provider."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user: UserEntity
    access_token: str = Field(alias="accessToken")
    refresh_token: str = Field(alias="refreshToken")

    @classmethod
    def create_from(cls, user: UserEntity, session: Mapping[str, Any]) -> AuthUserEntity:
        access_token = session.get("access_token")
        refresh_token = session.get("refresh_token")
        if not access_token or not refresh_token or not isinstance(user, UserEntity):
            raise EntityCreationError(messages.INVALID_AUTH_USER_DATA)

        return cls(user=user, access_token=access_token, refresh_token=refresh_token)
