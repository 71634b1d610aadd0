"""
Palette Playlist - Main application entry point.

Turns the color mood of an image into Spotify audio targets and playlists.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware

from palette_playlist import __version__
from palette_playlist.infrastructure.config.settings import get_settings
from palette_playlist.web.controllers.catalog import router as catalog_router
from palette_playlist.web.controllers.health import SERVICE_NAME, router as health_router
from palette_playlist.web.controllers.mood import router as mood_router
from palette_playlist.web.controllers.playlists import router as playlists_router
from palette_playlist.web.middleware.logging import LoggingMiddleware


# Configure structured logging
def configure_logging() -> None:
    """Configure structured logging with correlation IDs."""
    settings = get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper()),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan events."""
    logger = structlog.get_logger()
    settings = get_settings()

    logger.info(
        "Palette Playlist service ready",
        version=__version__,
        environment=settings.environment,
        spotify_api_base_url=settings.spotify_api_base_url,
    )

    yield

    logger.info("Palette Playlist service stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging()
    settings = get_settings()

    app = FastAPI(
        title="Palette Playlist",
        description="Maps the color mood of an image to Spotify audio targets and playlists",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # Add custom logging middleware
    app.add_middleware(LoggingMiddleware)

    # Security middleware
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.allowed_hosts
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Include routers
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(mood_router, prefix="/api/v1/mood")
    app.include_router(playlists_router, prefix="/api/v1/playlists")
    app.include_router(catalog_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": SERVICE_NAME,
            "version": __version__,
            "description": "Color-to-mood playlist generation",
            "docs_url": "/docs" if settings.debug else None
        }

    return app


def main() -> None:
    """Main entry point for the application."""
    settings = get_settings()

    uvicorn.run(
        "palette_playlist.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
