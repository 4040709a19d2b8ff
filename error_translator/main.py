"""FastAPI application entrypoint wired with the error translator."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from error_translator.core.config import ErrorSettings
from error_translator.core.config import get_error_settings
from error_translator.core.errors import ErrorTranslator
from error_translator.core.errors import register_error_handlers
from error_translator.core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: ErrorSettings | None = None) -> FastAPI:
    """Build a FastAPI app whose failures are all answered with the error envelope."""
    settings = settings or get_error_settings()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        logger.info("Starting with error settings=%s", settings.safe_for_logging())
        yield

    app = FastAPI(title="Error Translator", lifespan=lifespan)
    register_error_handlers(app, ErrorTranslator(settings))

    @app.get("/health")
    def health() -> dict[str, str]:
        """Health check stub endpoint for service readiness."""
        return {"status": "ok"}

    return app


app = create_app()
