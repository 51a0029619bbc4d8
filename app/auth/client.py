"""Supabase Auth access through the official SDK with bounded retries on network failures."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterator
from collections.abc import Mapping
from contextlib import AbstractContextManager
from contextlib import contextmanager
from typing import Any
from typing import TypeVar
import logging
import time

import httpx
from supabase import Client
from supabase import ClientOptions
from supabase import create_client
from supabase_auth.errors import AuthRetryableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ClientFactory = Callable[[], AbstractContextManager[Client]]


class SupabaseAuthClientError(RuntimeError):
    """Base error raised by identity-provider client operations."""


class SupabaseAuthRequestError(SupabaseAuthClientError):
    """Raised when the provider stays unreachable after the retry budget is exhausted."""


class SupabaseAuthResponseError(SupabaseAuthClientError):
    """Raised when provider responses are malformed."""


def is_network_error(error: BaseException) -> bool:
    """Return whether an auth failure is transient transport trouble worth retrying."""
    # The SDK wraps transport failures in AuthRetryableError; raw httpx errors can still escape it.
    return isinstance(error, (httpx.TimeoutException, httpx.NetworkError, AuthRetryableError))


class SupabaseAuthClient:
    """Sign users up and in against a Supabase project.

    Every operation runs on a short-lived SDK client so concurrent worker
    threads never share an HTTP connection pool. Provider rejections
    (``AuthApiError``) propagate unchanged for the caller to map.
    """

    def __init__(
        self,
        *,
        url: str,
        anon_key: str,
        timeout_seconds: float = 10.0,
        max_retries: int = 2,
        backoff_seconds: float = 0.5,
        client_factory: ClientFactory | None = None,
        sleep_fn: Callable[[float], None] = time.sleep,
    ) -> None:
        if not url:
            raise ValueError("url is required")
        if not anon_key:
            raise ValueError("anon_key is required")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if backoff_seconds <= 0:
            raise ValueError("backoff_seconds must be positive")

        self._url = url
        self._anon_key = anon_key
        self._timeout_seconds = timeout_seconds
        self._max_retries = max_retries
        self._backoff_seconds = backoff_seconds
        self._client_factory = client_factory or self._sdk_client
        self._sleep_fn = sleep_fn

    def sign_up(
        self,
        email: str,
        password: str,
        metadata: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Create a user. The payload holds a session when email confirmation is disabled."""
        credentials: dict[str, Any] = {"email": email, "password": password}
        if metadata:
            credentials["options"] = {"data": dict(metadata)}

        response = self._run("sign_up", lambda client: client.auth.sign_up(credentials))
        return self._normalize(response)

    def sign_in_with_password(self, email: str, password: str) -> dict[str, Any]:
        """Exchange email and password for a session."""
        response = self._run(
            "sign_in_with_password",
            lambda client: client.auth.sign_in_with_password({"email": email, "password": password}),
        )
        return self._normalize(response)

    @contextmanager
    def _sdk_client(self) -> Iterator[Client]:
        http_client = httpx.Client(timeout=httpx.Timeout(self._timeout_seconds))
        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
            httpx_client=http_client,
        )
        try:
            yield create_client(self._url, self._anon_key, options=options)
        finally:
            http_client.close()

    def _run(self, operation_name: str, operation: Callable[[Client], T]) -> T:
        for attempt in range(self._max_retries + 1):
            try:
                with self._client_factory() as client:
                    return operation(client)
            except Exception as exc:
                if not is_network_error(exc):
                    raise
                if attempt >= self._max_retries:
                    raise SupabaseAuthRequestError(
                        f"Auth operation {operation_name} failed after retry budget was exhausted",
                    ) from exc
                delay = self._backoff_seconds * (2**attempt)
                logger.warning(
                    "Auth operation %s failed (%s); retry %s/%s in %.1fs",
                    operation_name,
                    exc,
                    attempt + 1,
                    self._max_retries,
                    delay,
                )
                self._sleep_fn(delay)

        raise SupabaseAuthRequestError(f"Auth operation {operation_name} failed")

    @staticmethod
    def _normalize(response: Any) -> dict[str, Any]:
        user = getattr(response, "user", None)
        session = getattr(response, "session", None)
        if user is not None and not hasattr(user, "model_dump"):
            raise SupabaseAuthResponseError("Auth response field `user` must be a model")

        return {
            "user": user.model_dump() if user is not None else None,
            "session": session.model_dump() if session is not None else None,
        }
