"""
Pytest configuration and shared fixtures for Palette Playlist tests.

This module sets up test configuration and provides shared fixtures and
in-memory fakes for the external collaborators.
"""

import os
from typing import Any, Dict, List, Optional

import pytest


# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from palette_playlist.domain.services.palette_extractor import PaletteExtractor  # noqa: E402
from palette_playlist.domain.value_objects.palette import PaletteColor  # noqa: E402
from palette_playlist.infrastructure.clients.spotify_client import (  # noqa: E402
    RecommendationRequest,
    Track,
)
from palette_playlist.infrastructure.monitoring.metrics import MetricsCollector  # noqa: E402


class FakePaletteExtractor(PaletteExtractor):
    """Extractor returning a fixed palette and recording its calls."""

    def __init__(self, palette: Optional[List[PaletteColor]] = None, error: Exception = None):
        self.palette = palette or []
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def extract(self, image_url=None, image_base64=None):
        self.calls.append({"image_url": image_url, "image_base64": image_base64})
        if self.error:
            raise self.error
        return list(self.palette)


class FakeSpotifyClient:
    """In-memory stand-in for SpotifyClient."""

    def __init__(self, tracks: Optional[List[Track]] = None, error: Exception = None):
        self.tracks = tracks if tracks is not None else [
            Track(id="track1", name="Sunrise", artists=[{"name": "Band"}]),
            Track(id=None, name="Local file"),
            Track(id="track2", name="Dusk", artists=[{"name": "Duo"}]),
        ]
        self.error = error
        self.recommendation_requests: List[RecommendationRequest] = []
        self.created_playlists: List[Dict[str, Any]] = []
        self.added_tracks: Dict[str, List[str]] = {}

    async def get_recommendations(self, request):
        if self.error:
            raise self.error
        self.recommendation_requests.append(request)
        return list(self.tracks)

    async def get_current_user(self):
        return {"id": "user-1", "display_name": "Test User"}

    async def create_playlist(self, user_id, name, description, public=False):
        self.created_playlists.append(
            {"user_id": user_id, "name": name, "description": description, "public": public}
        )
        return "playlist-1"

    async def add_tracks_to_playlist(self, playlist_id, track_uris):
        self.added_tracks.setdefault(playlist_id, []).extend(track_uris)

    async def get_genres(self):
        if self.error:
            raise self.error
        return ["ambient", "jazz", "pop"]

    async def search_tracks(self, query, limit=10):
        if self.error:
            raise self.error
        return list(self.tracks)[:limit]


@pytest.fixture
def metrics() -> MetricsCollector:
    """Fresh metrics collector isolated from the global one."""
    return MetricsCollector()


@pytest.fixture
def warm_palette() -> List[PaletteColor]:
    """Orange-dominated palette."""
    return [
        PaletteColor(hex="#FF4500", population=120),
        PaletteColor(hex="#FFA500", population=60),
        PaletteColor(hex="#8B0000", population=20),
    ]


@pytest.fixture
def fake_spotify() -> FakeSpotifyClient:
    """Fake Spotify client with three canned tracks."""
    return FakeSpotifyClient()


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring external services"
    )
