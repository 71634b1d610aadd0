"""
Catalog endpoints: genre seeds and track search.
"""

from typing import List

import structlog
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from palette_playlist.infrastructure.clients.spotify_client import SpotifyAPIError, Track
from palette_playlist.infrastructure.service_factory import ServiceFactory, get_service_factory
from palette_playlist.web.controllers.playlists import spotify_error_to_http
from palette_playlist.web.dependencies import get_access_token


router = APIRouter(tags=["catalog"])


class GenresResponse(BaseModel):
    """Available recommendation genre seeds."""
    genres: List[str]


class TrackSearchResponse(BaseModel):
    """Track search results."""
    tracks: List[Track]


@router.get("/genres", response_model=GenresResponse)
async def list_genres(
    access_token: str = Depends(get_access_token),
    factory: ServiceFactory = Depends(get_service_factory),
):
    """List the genre seeds accepted for playlist generation."""
    try:
        genres = await factory.create_spotify_client(access_token).get_genres()
    except SpotifyAPIError as e:
        factory.metrics.record_error(f"spotify_{e.status}")
        structlog.get_logger().error("Failed to fetch genres", status=e.status)
        raise spotify_error_to_http(e)

    return GenresResponse(genres=genres)


@router.get("/tracks/search", response_model=TrackSearchResponse)
async def search_tracks(
    q: str = Query(..., min_length=1, description="Search query"),
    limit: int = Query(10, ge=1, le=50),
    access_token: str = Depends(get_access_token),
    factory: ServiceFactory = Depends(get_service_factory),
):
    """Search the Spotify catalog for tracks."""
    try:
        tracks = await factory.create_spotify_client(access_token).search_tracks(q, limit)
    except SpotifyAPIError as e:
        factory.metrics.record_error(f"spotify_{e.status}")
        structlog.get_logger().error("Track search failed", status=e.status, query=q)
        raise spotify_error_to_http(e)

    return TrackSearchResponse(tracks=tracks)
