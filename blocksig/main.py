"""FastAPI entrypoint for the block signature service."""

from __future__ import annotations

from fastapi import FastAPI

from blocksig import __version__
from blocksig.api.routes import router
from blocksig.core.config import Settings, settings as default_settings
from blocksig.core.lifespan import lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""

    app = FastAPI(
        title="blocksig",
        description="Fixed-size block SHA-256 signatures over multipart uploads",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings or default_settings
    app.include_router(router)
    return app


app = create_app()
