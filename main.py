from __future__ import annotations

"""Storytime Backend - Main Application Entry Point
FastAPI application factory for the story narration service.
Architecture Overview:
    - Long stories are split into token-bounded chunks, narrated one chunk at a
      time, merged with ffmpeg and stored in S3-compatible object storage
    - Feature-based modular architecture (see features/ directory)
    - Provider registry for the speech synthesis backend
Entry Points:
    - /health - Health check endpoint
    - /tts, /tts/single, /voices - Narration endpoints
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from core.utils.env import is_production
# Track startup time in non-production environments
start_time = time.time() if not is_production() else None

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.tts.defaults import TEMP_MAX_AGE_SECONDS
from core.clients.ai import close_ai_clients
from core.http.errors import client_error_body
from core.logging import setup_logging
from features.tts import router as tts_router
from services.temporary_storage import sweep_stale_workspaces

APP_VERSION = "1.0.0"

setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events."""
    # Startup: remove workspaces orphaned by a previous process
    sweep_stale_workspaces(TEMP_MAX_AGE_SECONDS)
    yield
    # Shutdown
    logger.info("Application shutting down...")
    close_ai_clients()
    logger.info("Shutdown complete")


def _describe_request_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def create_app() -> FastAPI:
    """Application factory returning a configured FastAPI instance."""

    app = FastAPI(
        title="Storytime Backend",
        description="Long-form story narration service",
        version=APP_VERSION,
        lifespan=lifespan,
    )

    # Configure CORS based on environment
    if is_production():
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        # Development: allow any localhost port
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=r"^http://(localhost|127\.0\.0\.1)(:\d+)?$",
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        """Return the flat ``{"error": ...}`` body for malformed request bodies."""

        message = _describe_request_error(exc)
        logger.warning("Rejected request to %s: %s", request.url.path, message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=client_error_body(message),
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "version": APP_VERSION}

    app.include_router(tts_router)

    timing_info = ""
    if start_time is not None:
        elapsed = time.time() - start_time
        timing_info = f" (loaded in {elapsed:.2f}s)"

    logger.info(f"Application created with TTS router{timing_info}")
    return app


app = create_app()


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
