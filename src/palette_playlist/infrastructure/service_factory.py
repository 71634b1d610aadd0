"""
Service factory for dependency injection.

Creates application services with their infrastructure dependencies.
"""

from typing import Optional

from fastapi import Depends

from palette_playlist.application.services.mood_analyzer import MoodAnalyzerService
from palette_playlist.application.services.playlist_generator import PlaylistGeneratorService
from palette_playlist.domain.services.palette_extractor import PaletteExtractor
from palette_playlist.infrastructure.clients.spotify_client import SpotifyClient
from palette_playlist.infrastructure.config.settings import Settings, get_settings
from palette_playlist.infrastructure.monitoring.metrics import get_metrics_collector
from palette_playlist.infrastructure.services.image_palette_extractor import (
    ImagePaletteExtractor,
)


class ServiceFactory:
    """
    Factory for creating and configuring application services.

    Controllers receive a factory per request; tests substitute one that
    returns fakes.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize service factory.

        Args:
            settings: Application settings (uses default if None)
        """
        self.settings = settings or get_settings()
        self.metrics = get_metrics_collector()

    def create_palette_extractor(self) -> PaletteExtractor:
        """Create the image palette extractor."""
        return ImagePaletteExtractor(self.settings)

    def create_mood_analyzer(self) -> MoodAnalyzerService:
        """Create the mood analyzer service."""
        return MoodAnalyzerService(self.create_palette_extractor(), metrics=self.metrics)

    def create_playlist_generator(self) -> PlaylistGeneratorService:
        """Create the playlist generator service."""
        return PlaylistGeneratorService(
            self.create_mood_analyzer(),
            settings=self.settings,
            metrics=self.metrics,
        )

    def create_spotify_client(self, access_token: str) -> SpotifyClient:
        """Create a Spotify client bound to a user access token."""
        return SpotifyClient(access_token, self.settings)


def get_service_factory(settings: Settings = Depends(get_settings)) -> ServiceFactory:
    """FastAPI dependency providing the service factory."""
    return ServiceFactory(settings)
