# app/middleware/middleware.py
"""
Middleware components for the blog API.

This module contains middleware for security headers, request logging
and CORS handling, plus the lifespan handler that builds and tears down
process-wide services.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.configs import file_logger, settings
from app.db import close_db, init_db
from app.monitoring import bind_request_id, clear_context, configure_logging, get_logger
from app.services import MediaSigner
from app.utils.helpers import get_summary, host

logger = file_logger(getLogger(__name__))
access_logger = get_logger("app.access")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Manage application startup and shutdown events with service initialization."""
    configure_logging()
    logger.info(f"Starting {app.title}...")

    try:
        await init_db()

        signer = MediaSigner.from_settings(settings)
        app.state.media_signer = signer
        if signer.is_configured:
            logger.info("Media signer initialized")
        else:
            logger.warning("Cloudinary credentials missing, upload signing disabled")

        logger.info("Services initialized successfully")
    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info(f"Shutting down {app.title}...")
    try:
        app.state.media_signer = None
        await close_db()
        logger.info("Services cleaned up successfully")
    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:5173",  # Vite development
        "http://127.0.0.1:5173",
    ]

    if client_url := settings.CLIENT_URL:
        allowed_origins.append(client_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing information under a request id."""

        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        bind_request_id(request_id)
        start_time = perf_counter()

        route_info = get_summary(request) or f"{request.method} {request.url.path}"
        access_logger.info("request", route=route_info, ip=host(request))

        try:
            response = await call_next(request)
            duration = perf_counter() - start_time
            access_logger.info(
                "response",
                status=response.status_code,
                method=request.method,
                path=request.url.path,
                duration=f"{duration:.3f}s",
            )
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_context()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
