"""
Audio target value objects.

Bounded audio parameters used to bias track recommendations, plus the
descriptive analysis that accompanies them.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Tuple

from palette_playlist.domain.value_objects.palette import PaletteColor


TEMPO_MIN = 60.0
TEMPO_MAX = 180.0
LOUDNESS_MIN = -60.0
LOUDNESS_MAX = 0.0

RATIO_TARGETS = (
    "target_energy",
    "target_valence",
    "target_danceability",
    "target_acousticness",
    "target_instrumentalness",
)

# Inclusive bounds per target, shared with request validation
TARGET_BOUNDS: Dict[str, Tuple[float, float]] = {
    **{name: (0.0, 1.0) for name in RATIO_TARGETS},
    "target_tempo": (TEMPO_MIN, TEMPO_MAX),
    "target_loudness": (LOUDNESS_MIN, LOUDNESS_MAX),
}


@dataclass(frozen=True)
class AudioTargets:
    """Immutable audio targets derived from a mood vector."""

    target_energy: float
    target_valence: float
    target_danceability: float
    target_acousticness: float
    target_instrumentalness: float
    target_tempo: float
    target_loudness: float

    def __post_init__(self):
        """Validate every target against its range."""
        for name, (low, high) in TARGET_BOUNDS.items():
            value = getattr(self, name)
            if not low <= value <= high:
                raise ValueError(f"{name} must be between {low} and {high}, got {value}")

    def is_floor(self) -> bool:
        """Check whether every target sits at its lower bound."""
        return all(getattr(self, name) == TARGET_BOUNDS[name][0] for name in TARGET_BOUNDS)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary keyed by recommendation parameter name."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class Analysis:
    """Descriptive summary of a palette-to-mood mapping."""

    palette: Tuple[PaletteColor, ...]
    averages: Dict[str, float]
    explanations: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "palette": [color.to_dict() for color in self.palette],
            "averages": dict(self.averages),
            "explanations": list(self.explanations),
        }


@dataclass(frozen=True)
class MoodMapping:
    """Result of mapping a palette: targets plus their analysis."""

    targets: AudioTargets
    analysis: Analysis

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "targets": self.targets.to_dict(),
            "analysis": self.analysis.to_dict(),
        }
