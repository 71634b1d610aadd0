"""
Commands for mood analysis and playlist generation.

Lightweight command objects shared by the API controllers and the
application services.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from palette_playlist.domain.value_objects.audio_targets import (
    LOUDNESS_MAX,
    LOUDNESS_MIN,
    TARGET_BOUNDS,
    TEMPO_MAX,
    TEMPO_MIN,
)


class AnalyzeMoodCommand(BaseModel):
    """
    Command to derive audio targets from an image or a hex palette.

    An image (URL or base64) takes precedence over palette_hex.
    """

    image_url: Optional[str] = Field(None, description="URL of the image to analyze")
    image_base64: Optional[str] = Field(None, description="Base64 image payload or data URL")
    palette_hex: Optional[List[str]] = Field(None, description="Ranked hex colors, dominant first")

    def has_image(self) -> bool:
        """Check if an image source was provided."""
        return bool(self.image_url or self.image_base64)

    def has_palette(self) -> bool:
        """Check if a non-empty hex palette was provided."""
        return bool(self.palette_hex)

    def has_mood_source(self) -> bool:
        """Check if any input a mood can be derived from was provided."""
        return self.has_image() or self.has_palette()


class GeneratePlaylistCommand(AnalyzeMoodCommand):
    """
    Command to build a playlist from mood targets.

    Explicit target_* values override the targets derived from the image
    or palette.
    """

    # Recommendation seeds
    seed_genres: Optional[List[str]] = Field(None, description="Genre seeds (max 5 used)")
    seed_artists: Optional[List[str]] = Field(None, description="Artist id seeds (max 5 used)")

    # Explicit target overrides
    target_energy: Optional[float] = Field(None, ge=0.0, le=1.0)
    target_valence: Optional[float] = Field(None, ge=0.0, le=1.0)
    target_danceability: Optional[float] = Field(None, ge=0.0, le=1.0)
    target_acousticness: Optional[float] = Field(None, ge=0.0, le=1.0)
    target_instrumentalness: Optional[float] = Field(None, ge=0.0, le=1.0)
    target_tempo: Optional[float] = Field(None, ge=TEMPO_MIN, le=TEMPO_MAX)
    target_loudness: Optional[float] = Field(None, ge=LOUDNESS_MIN, le=LOUDNESS_MAX)

    # Playlist details
    playlist_name: Optional[str] = Field(None, description="Name of the new playlist")
    playlist_description: Optional[str] = Field(None, description="Description of the new playlist")

    def target_overrides(self) -> Dict[str, Optional[float]]:
        """Caller-specified targets keyed by parameter name."""
        return {name: getattr(self, name) for name in TARGET_BOUNDS}
