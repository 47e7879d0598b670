"""
Main Application - Main Layer

This module serves as the entry point for the FastAPI application.
It initializes the container, creates the FastAPI app, and includes
the API routers.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cdnrelay.main.config import get_settings
from cdnrelay.main.container import app_lifespan, init_container
from cdnrelay.presentation.controllers import (
    assets_fallback_router,
    assets_router,
    system_router,
)
from cdnrelay.shared import configure_logging, get_logger, update_logging_from_settings

# Configure logging from the environment first so that settings loading
# itself can log.
configure_logging()

settings = get_settings()
update_logging_from_settings(settings)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management.

    Starts the origin health monitor when the application starts and
    stops it when the application shuts down.
    """
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("Application starting up")

    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("Application shutting down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application
    """
    settings = get_settings()

    init_container(settings)

    app = FastAPI(
        title=settings.server.title,
        description=settings.server.description,
        version=settings.server.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Assets are loaded cross-origin by pages served from other hosts.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.include_router(system_router)
    app.include_router(assets_router)
    app.include_router(assets_fallback_router)

    return app


app = create_app()
