"""FastAPI application entry point."""
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.error_handlers import register_error_handlers
from api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from api.routers import bookmarks, health
from core.config import Settings, get_settings
from core.logging_config import setup_logging
from db.session import dispose_engine


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:  # noqa: ARG001
    """Release the database pool on shutdown."""
    yield
    await dispose_engine()
    logger.info("Database engine disposed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; ``settings`` defaults to the environment."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Bookmarks API",
        description="Create, list, fetch, update and delete rated bookmarks.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location"],
    )
    app.add_middleware(
        RequestLoggingMiddleware,
        log_format="tiny" if settings.is_production else "common",
    )

    register_error_handlers(app, settings)

    app.include_router(health.router)
    app.include_router(bookmarks.router, prefix="/api")
    return app


app = create_app()
