"""
Mood value objects.

Per-color metrics and the weighted mood vector merged from a palette.
"""

from dataclasses import astuple, dataclass, fields
from typing import Dict


@dataclass(frozen=True)
class ColorMetrics:
    """
    Mood-correlated metrics for a single color.

    Every field is a ratio in [0, 1].
    """

    warmth: float
    saturation: float
    lightness: float
    energy: float
    valence: float
    danceability: float
    acousticness: float
    instrumentalness: float

    @classmethod
    def field_names(cls):
        """Names of the metric fields in declaration order."""
        return tuple(f.name for f in fields(cls))

    @classmethod
    def zero(cls):
        """All-zero metrics, the value of an empty palette."""
        return cls(*(0.0 for _ in cls.field_names()))

    def is_zero(self) -> bool:
        """Check whether every metric is zero (no usable signal)."""
        return all(value == 0.0 for value in astuple(self))

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return {name: getattr(self, name) for name in self.field_names()}


@dataclass(frozen=True)
class MergedMoodVector(ColorMetrics):
    """Weighted average of the metrics of every palette color."""

    def averages(self) -> Dict[str, float]:
        """Raw color averages reported alongside the targets."""
        return {
            "warmth": self.warmth,
            "saturation": self.saturation,
            "lightness": self.lightness,
        }
