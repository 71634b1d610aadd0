"""
Domain value objects for palette-to-mood mapping.
"""

from .audio_targets import AudioTargets, Analysis, MoodMapping
from .mood import ColorMetrics, MergedMoodVector
from .palette import InvalidColorError, PaletteColor, WeightedColor

__all__ = [
    "AudioTargets",
    "Analysis",
    "MoodMapping",
    "ColorMetrics",
    "MergedMoodVector",
    "InvalidColorError",
    "PaletteColor",
    "WeightedColor",
]
