"""FastAPI application entrypoint for the auth API."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import APIRouter
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.auth import router as auth_router
from app.core.config import get_settings
from app.core.errors import register_error_handlers
from app.core.logging import configure_logging
from app.core.request_id import RequestIdMiddleware
from app.core.request_logging import RequestLoggingMiddleware
from app.core.response import utc_timestamp

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the application with middleware, error handlers and routes."""
    settings = get_settings()
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title="Auth API",
        description="User registration and login backed by Supabase Auth",
        version=settings.api_version,
    )
    app.state.api_version = settings.api_version

    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.add_middleware(RequestLoggingMiddleware)
    # Added last so it wraps every other middleware.
    app.add_middleware(RequestIdMiddleware)

    register_error_handlers(app)

    api_router = APIRouter(prefix="/api")

    @api_router.get("/")
    def api_index() -> dict[str, str]:
        """API liveness banner."""
        return {"message": "API is running", "version": settings.api_version}

    app.include_router(api_router)
    app.include_router(auth_router)

    @app.get("/health")
    def health() -> dict[str, str]:
        """Health check endpoint for service readiness."""
        return {"status": "ok", "timestamp": utc_timestamp()}

    logger.info("Auth API configured with settings=%s", settings.safe_for_logging())
    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured port."""
    settings = get_settings()
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
