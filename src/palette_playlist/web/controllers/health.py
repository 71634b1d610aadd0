"""
Health check endpoints for monitoring and load balancer probes.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from palette_playlist import __version__
from palette_playlist.infrastructure.config.settings import Settings, get_settings
from palette_playlist.infrastructure.monitoring.metrics import get_metrics_collector


SERVICE_NAME = "palette-playlist"

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: datetime
    service: str
    version: str
    checks: Dict[str, Any]


class DetailedHealthResponse(HealthResponse):
    """Detailed health check response with runtime metrics."""
    environment: str
    metrics: Dict[str, Any]


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Returns basic service health status for load balancer probes.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        service=SERVICE_NAME,
        version=__version__,
        checks={"api": "healthy"},
    )


@router.get("/health/detailed", response_model=DetailedHealthResponse)
async def detailed_health_check(settings: Settings = Depends(get_settings)):
    """Health status plus mood, playlist and error metrics."""
    metrics = get_metrics_collector().get_all_metrics()

    return DetailedHealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        service=SERVICE_NAME,
        version=__version__,
        checks={
            "api": "healthy",
            "spotify_api_base_url": settings.spotify_api_base_url,
        },
        environment=settings.environment,
        metrics=metrics,
    )
