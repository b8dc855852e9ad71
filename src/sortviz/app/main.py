from __future__ import annotations

import asyncio

import structlog
from fastapi import FastAPI

from sortviz.api import router as api_router
from sortviz.core.config.settings import EngineSettings
from sortviz.core.config.settings import settings as default_settings
from sortviz.core.engine.engine import SortController
from sortviz.core.logging.setup import configure_logging
from sortviz.rendering.sink import RecordingSink

log = structlog.get_logger()


def create_app(*, settings: EngineSettings | None = None) -> FastAPI:
    """
    Application factory.

    The single place where the FastAPI app and its SortController are
    created and wired together.
    """
    settings = settings if settings is not None else default_settings

    # Initialize structured logging
    configure_logging(settings)

    app = FastAPI(
        title="Sortviz Engine",
        version="0.1.0",
    )

    app.state.controller = SortController(settings=settings, sink=RecordingSink())
    app.state.run_task = None

    @app.on_event("startup")
    async def on_startup() -> None:
        log.info(
            "app.startup",
            environment=settings.env,
        )

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        controller: SortController = app.state.controller
        controller.stop()

        task: asyncio.Task | None = app.state.run_task
        if task is not None and not task.done():
            await task

        log.info("app.shutdown")

    # Mount API
    app.include_router(api_router, prefix="/api")

    return app


# ASGI entrypoint
app = create_app()
