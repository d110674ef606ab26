from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from metriker.api.middleware.metrics import MetrikerMiddleware
from metriker.api.v1.routers import demo, health
from metriker.application.ports.sink import Sink, TokenCallback
from metriker.config import Settings, settings as default_settings
from metriker.infrastructure.sinks import LoggingSink

logger = logging.getLogger(__name__)


def _log_tokens(tokens: dict[str, str]) -> None:
    logger.debug("Request metrics: %s", tokens)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    logger.info("Metriker demo started")
    yield
    logger.info("Metriker demo stopped")


def create_app(
    settings: Settings | None = None,
    *,
    output: Sink | None = None,
    callback: TokenCallback | None = None,
) -> FastAPI:
    settings = settings or default_settings
    if output is None:
        output = LoggingSink("metriker.access")

    app = FastAPI(
        title="Metriker Demo",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        MetrikerMiddleware,
        format=settings.METRIKER_FORMAT,
        blacklist=settings.METRIKER_BLACKLIST,
        output=output,
        callback=callback or _log_tokens,
    )

    app.include_router(health.router)
    app.include_router(demo.router)

    return app
