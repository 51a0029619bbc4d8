"""Auth API routes and the controller that orchestrates them."""

from __future__ import annotations

from functools import lru_cache
import json
from typing import Any
from typing import Protocol

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Request
from fastapi.responses import JSONResponse

from app.auth.client import SupabaseAuthClient
from app.auth.datasource import AuthDatasource
from app.core import messages
from app.core.config import get_settings
from app.core.errors import BadRequestError
from app.core.request_id import RequestContext
from app.core.request_id import get_request_context
from app.core.response import send_success
from app.domain.repository import AuthRepository
from app.domain.use_cases import LoginUser
from app.domain.use_cases import RegisterUser
from app.validators.auth import LoginValidator
from app.validators.auth import RegisterValidator

router = APIRouter(prefix="/api/auth", tags=["auth"])


class UseCase(Protocol):
    async def execute(self, dto: Any) -> Any: ...


class AuthController:
    """Validate, execute, respond.

    Errors from either stage are never caught here; they propagate to the
    registered exception handlers, which own the error envelope.
    """

    def __init__(self, register_user: UseCase, login_user: UseCase) -> None:
        self._register_user = register_user
        self._login_user = login_user

    async def register(self, raw: Any, context: RequestContext) -> JSONResponse:
        dto = RegisterValidator.validate(raw)
        user = await self._register_user.execute(dto)
        return send_success(user, context, status_code=201)

    async def login(self, raw: Any, context: RequestContext) -> JSONResponse:
        dto = LoginValidator.validate(raw)
        session = await self._login_user.execute(dto)
        return send_success(session, context, status_code=200)


@lru_cache(maxsize=1)
def get_auth_repository() -> AuthRepository:
    """Build the Supabase-backed repository from settings."""
    settings = get_settings()
    client = SupabaseAuthClient(
        url=settings.supabase_url,
        anon_key=settings.supabase_anon_key,
        timeout_seconds=settings.http_timeout_seconds,
        max_retries=settings.http_max_retries,
        backoff_seconds=settings.http_backoff_seconds,
    )
    return AuthDatasource(client)


def get_auth_controller(repository: AuthRepository = Depends(get_auth_repository)) -> AuthController:
    return AuthController(RegisterUser(repository), LoginUser(repository))


async def read_json_body(request: Request) -> Any:
    """Return the decoded JSON body, ``None`` when empty."""
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError as exc:
        raise BadRequestError(messages.MALFORMED_JSON_BODY, code="INVALID_JSON") from exc


@router.post("/register", status_code=201)
async def register_endpoint(
    request: Request,
    context: RequestContext = Depends(get_request_context),
    controller: AuthController = Depends(get_auth_controller),
) -> JSONResponse:
    """Register a user with name, lastname, email and password."""
    return await controller.register(await read_json_body(request), context)


@router.post("/login")
async def login_endpoint(
    request: Request,
    context: RequestContext = Depends(get_request_context),
    controller: AuthController = Depends(get_auth_controller),
) -> JSONResponse:
    """Authenticate with email and password."""
    return await controller.login(await read_json_body(request), context)
