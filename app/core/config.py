"""Application configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import find_dotenv
from dotenv import load_dotenv

API_VERSION = "1.0.0"

DEFAULT_ENVIRONMENT = "development"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0
DEFAULT_HTTP_MAX_RETRIES = 2
DEFAULT_HTTP_BACKOFF_SECONDS = 0.5

ENVIRONMENTS = frozenset({"development", "production", "test"})


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    return float(raw)


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw)


def _get_environment() -> str:
    environment = os.getenv("APP_ENV", DEFAULT_ENVIRONMENT).strip().lower()
    if environment not in ENVIRONMENTS:
        allowed = ", ".join(sorted(ENVIRONMENTS))
        raise ValueError(f"APP_ENV must be one of: {allowed}")
    return environment


def redact_secret(secret: str) -> str:
    """Return a non-recoverable placeholder for sensitive values."""
    if not secret:
        return "<empty>"
    return "<redacted>"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the auth API and its identity backend."""

    environment: str
    port: int
    supabase_url: str
    supabase_anon_key: str
    api_version: str
    log_level: str
    http_timeout_seconds: float
    http_max_retries: int
    http_backoff_seconds: float

    def safe_for_logging(self) -> dict[str, str | int | float]:
        """Return settings safe for logs."""
        return {
            "environment": self.environment,
            "port": self.port,
            "supabase_url": self.supabase_url,
            "supabase_anon_key": redact_secret(self.supabase_anon_key),
            "api_version": self.api_version,
            "log_level": self.log_level,
            "http_timeout_seconds": self.http_timeout_seconds,
            "http_max_retries": self.http_max_retries,
            "http_backoff_seconds": self.http_backoff_seconds,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from the environment, reading a local .env file first."""
    load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        environment=_get_environment(),
        port=_get_int_env("PORT", DEFAULT_PORT),
        supabase_url=os.getenv("SUPABASE_URL", ""),
        supabase_anon_key=os.getenv("SUPABASE_ANON_KEY", ""),
        api_version=os.getenv("API_VERSION", API_VERSION),
        log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        http_timeout_seconds=_get_float_env("AUTH_HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS),
        http_max_retries=_get_int_env("AUTH_HTTP_MAX_RETRIES", DEFAULT_HTTP_MAX_RETRIES),
        http_backoff_seconds=_get_float_env("AUTH_HTTP_BACKOFF_SECONDS", DEFAULT_HTTP_BACKOFF_SECONDS),
    )
