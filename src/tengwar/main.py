from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from . import __version__
from .config import settings
from .logging import configure_logging, logger
from .middleware import AccessLogAndMetricsMiddleware, RequestIDMiddleware
from .routers import health, transcribe


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    configure_logging()
    logger.info(
        "app_init",
        environment=settings.environment,
        pronunciation_source=settings.pronunciation_source,
        cache_enabled=settings.transcription_cache_enabled,
    )
    app = FastAPI(title="Tengwar Transcriber API", version=__version__)

    configured_origins = list(settings.allowed_cors_origins)
    allow_credentials = bool(configured_origins)
    if not configured_origins:
        configured_origins = ["*"]

    # ワイルドカード許可時は資格情報付きの CORS を無効にする
    app.add_middleware(
        CORSMiddleware,
        allow_origins=configured_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Middleware stack (inner → outer): CORS → AccessLog → RequestID
    app.add_middleware(AccessLogAndMetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health.router)
    app.include_router(transcribe.router)
    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn (`tengwar-serve`)."""
    uvicorn.run(
        "tengwar.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
