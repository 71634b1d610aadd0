"""
Playlist generation application service.

Orchestrates mood analysis, track recommendations and playlist creation.
"""

import time
from typing import Any, Dict, List, Optional

import structlog
from pydantic import BaseModel

from palette_playlist.application.commands.generate_playlist import GeneratePlaylistCommand
from palette_playlist.application.services.mood_analyzer import (
    MoodAnalyzerService,
    has_mood_signal,
    resolve_targets,
)
from palette_playlist.infrastructure.clients.spotify_client import (
    MAX_SEEDS,
    RecommendationRequest,
    SpotifyClient,
    Track,
)
from palette_playlist.infrastructure.config.settings import Settings, get_settings
from palette_playlist.infrastructure.monitoring.metrics import (
    MetricsCollector,
    get_metrics_collector,
)


PLAYLIST_URL_TEMPLATE = "https://open.spotify.com/playlist/{playlist_id}"


class PlaylistGenerationResult(BaseModel):
    """Outcome of a playlist generation."""
    playlist_id: str
    playlist_url: str
    tracks: List[Track]
    track_count: int
    derived_targets: Optional[Dict[str, float]] = None
    analysis: Optional[Dict[str, Any]] = None


class PlaylistGeneratorService:
    """
    Application service for building mood playlists.

    Derives audio targets from the request, asks Spotify for matching
    recommendations and saves them to a new playlist of the current user.
    """

    def __init__(
        self,
        mood_analyzer: MoodAnalyzerService,
        settings: Optional[Settings] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        """
        Initialize playlist generator.

        Args:
            mood_analyzer: Service deriving targets from images or palettes
            settings: Application settings (uses default if None)
            metrics: Metrics collector (uses global collector if None)
        """
        self.mood_analyzer = mood_analyzer
        self.settings = settings or get_settings()
        self.metrics = metrics or get_metrics_collector()
        self.logger = structlog.get_logger()

    async def generate(
        self,
        command: GeneratePlaylistCommand,
        spotify: SpotifyClient,
    ) -> PlaylistGenerationResult:
        """
        Generate a playlist for the owner of the Spotify client's token.

        Args:
            command: Playlist generation command
            spotify: Spotify client bound to the user's access token

        Returns:
            PlaylistGenerationResult: Created playlist and the tracks added
        """
        start_time = time.time()
        self.metrics.record_playlist_request()

        try:
            mapping = await self.mood_analyzer.analyze(command)
            targets = resolve_targets(
                mapping.targets if mapping else None,
                command.target_overrides(),
            )

            logger = self.logger.bind(targets=targets)
            if not has_mood_signal(targets):
                logger.warning("All audio targets are default values")

            recommendations = await spotify.get_recommendations(
                RecommendationRequest(
                    seed_genres=(command.seed_genres or [])[:MAX_SEEDS],
                    seed_artists=(command.seed_artists or [])[:MAX_SEEDS],
                    limit=self.settings.recommendation_limit,
                    **targets,
                )
            )

            user = await spotify.get_current_user()
            playlist_id = await spotify.create_playlist(
                user["id"],
                command.playlist_name or self.settings.default_playlist_name,
                command.playlist_description or self.settings.default_playlist_description,
                self.settings.playlist_public,
            )
            logger.info("Playlist created", playlist_id=playlist_id, user_id=user["id"])

            track_uris = [track.uri for track in recommendations if track.uri]
            if track_uris:
                await spotify.add_tracks_to_playlist(playlist_id, track_uris)

        except Exception as e:
            self.metrics.record_playlist_failure(type(e).__name__)
            self.logger.error("Playlist generation failed", error=str(e), exc_info=True)
            raise

        generation_time_ms = round((time.time() - start_time) * 1000, 2)
        self.metrics.record_playlist_success(generation_time_ms, len(track_uris))
        logger.info(
            "Playlist generation completed",
            playlist_id=playlist_id,
            track_count=len(recommendations),
            generation_time_ms=generation_time_ms,
        )

        return PlaylistGenerationResult(
            playlist_id=playlist_id,
            playlist_url=PLAYLIST_URL_TEMPLATE.format(playlist_id=playlist_id),
            tracks=recommendations,
            track_count=len(recommendations),
            derived_targets=mapping.targets.to_dict() if mapping else None,
            analysis=mapping.analysis.to_dict() if mapping else None,
        )
