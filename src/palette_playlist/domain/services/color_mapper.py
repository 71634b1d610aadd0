"""
Color-to-mood mapping engine.

Pure domain service turning a ranked palette into audio targets and a
qualitative explanation. Pipeline:

    weight_palette -> color_metrics (per color) -> merge_metrics
        -> synthesize_targets
        -> explain_mood

Every function is deterministic and side-effect free.
"""

import colorsys
import math
from typing import Iterable, List, Sequence, Tuple

from palette_playlist.domain.value_objects.audio_targets import (
    LOUDNESS_MAX,
    LOUDNESS_MIN,
    TEMPO_MAX,
    TEMPO_MIN,
    Analysis,
    AudioTargets,
    MoodMapping,
)
from palette_playlist.domain.value_objects.mood import ColorMetrics, MergedMoodVector
from palette_playlist.domain.value_objects.palette import (
    MAX_COLORS,
    PaletteColor,
    WeightedColor,
    parse_hex,
)


DOMINANT_WEIGHT = 0.45
WARMTH_PEAK_HUE = 30.0

WARM_NOTE = "warm colors dominant, energy and valence skew higher"
COOL_NOTE = "cool colors dominant, more melancholic mood"
BALANCED_NOTE = "balanced warmth, intermediate mood"
HIGH_SATURATION_NOTE = "high saturation, elevated danceability"
LOW_SATURATION_NOTE = "low saturation, moderate danceability"
LOW_LIGHTNESS_NOTE = "low lightness, higher acousticness and instrumentalness"
HIGH_LIGHTNESS_NOTE = "high lightness, more open and bright mood"


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def _finite_or_zero(value: float) -> float:
    return 0.0 if math.isnan(value) else value


def weight_palette(palette: Sequence[PaletteColor]) -> Tuple[WeightedColor, ...]:
    """
    Assign an influence weight to every color of a ranked palette.

    The dominant (first) color always receives DOMINANT_WEIGHT; the rest of
    the weight is shared by the other colors in proportion to their
    population, or equally when their populations sum to zero.

    Args:
        palette: Colors ordered by dominance

    Returns:
        Weighted colors in the same order, weights summing to 1
    """
    if not palette:
        return ()
    if len(palette) == 1:
        return (WeightedColor(palette[0], 1.0),)

    dominant, rest = palette[0], palette[1:]
    rest_total = sum(color.population for color in rest)
    remaining = 1.0 - DOMINANT_WEIGHT

    weighted = [WeightedColor(dominant, DOMINANT_WEIGHT)]
    for color in rest:
        if rest_total > 0:
            weight = (color.population / rest_total) * remaining
        else:
            weight = remaining / len(rest)
        weighted.append(WeightedColor(color, weight))

    return tuple(weighted)


def normalize_hue(hue: float) -> float:
    """Normalize a hue angle into [0, 360); NaN becomes 0."""
    if math.isnan(hue):
        return 0.0
    normalized = math.fmod(hue, 360.0)
    return normalized + 360.0 if normalized < 0 else normalized


def warmth_from_hue(hue: float) -> float:
    """Cosine warmth curve: 1 at 30 degrees (orange), 0 at 210 (cyan-blue)."""
    radians = math.radians(normalize_hue(hue) - WARMTH_PEAK_HUE)
    return clamp01((math.cos(radians) + 1.0) / 2.0)


def hex_to_hsl(hex_code: str) -> Tuple[float, float, float]:
    """
    Decompose a hex color into hue (degrees), saturation and lightness.

    Raises:
        InvalidColorError: If the hex string is malformed
    """
    red, green, blue = parse_hex(hex_code)
    hue, lightness, saturation = colorsys.rgb_to_hls(red / 255.0, green / 255.0, blue / 255.0)
    return hue * 360.0, saturation, lightness


def metrics_from_hsl(hue: float, saturation: float, lightness: float) -> ColorMetrics:
    """Compute mood metrics from hue/saturation/lightness components."""
    saturation = clamp01(_finite_or_zero(saturation))
    lightness = clamp01(_finite_or_zero(lightness))
    warmth = warmth_from_hue(hue)

    return ColorMetrics(
        warmth=warmth,
        saturation=saturation,
        lightness=lightness,
        energy=clamp01(0.15 + 0.55 * warmth + 0.2 * saturation + 0.1 * lightness),
        valence=clamp01(0.1 + 0.6 * warmth + 0.2 * saturation + 0.1 * lightness),
        danceability=clamp01(0.15 + 0.75 * saturation + 0.1 * lightness),
        acousticness=clamp01(0.1 + 0.6 * (1 - saturation) + 0.3 * (1 - lightness)),
        instrumentalness=clamp01(
            0.05 + 0.5 * (1 - warmth) + 0.25 * (1 - saturation) + 0.2 * (1 - lightness)
        ),
    )


def color_metrics(hex_code: str) -> ColorMetrics:
    """Compute mood metrics for a single hex color."""
    return metrics_from_hsl(*hex_to_hsl(hex_code))


def merge_metrics(items: Iterable[Tuple[float, ColorMetrics]]) -> MergedMoodVector:
    """
    Combine per-color metrics into one weighted mood vector.

    Weights are re-normalized by their total so the result stays a convex
    combination even when the caller's weights do not sum to 1.
    """
    items = list(items)
    if not items:
        return MergedMoodVector.zero()

    names = ColorMetrics.field_names()
    total = sum(weight for weight, _ in items) or 1.0

    merged = dict.fromkeys(names, 0.0)
    for weight, metrics in items:
        factor = weight / total
        for name in names:
            merged[name] += getattr(metrics, name) * factor

    # Float summation can overshoot 1 by an ulp
    return MergedMoodVector(**{name: clamp01(value) for name, value in merged.items()})


def synthesize_targets(merged: MergedMoodVector) -> AudioTargets:
    """Map a merged mood vector onto bounded audio targets."""
    tempo_base = clamp01(0.6 * merged.energy + 0.4 * merged.danceability)

    return AudioTargets(
        target_energy=clamp01(merged.energy),
        target_valence=clamp01(merged.valence),
        target_danceability=clamp01(merged.danceability),
        target_acousticness=clamp01(merged.acousticness),
        target_instrumentalness=clamp01(merged.instrumentalness),
        target_tempo=clamp(TEMPO_MIN + tempo_base * (TEMPO_MAX - TEMPO_MIN), TEMPO_MIN, TEMPO_MAX),
        target_loudness=clamp(LOUDNESS_MIN + merged.energy * 60.0, LOUDNESS_MIN, LOUDNESS_MAX),
    )


def explain_mood(merged: MergedMoodVector) -> Tuple[str, ...]:
    """
    Describe a mood vector in a few qualitative notes.

    Order: one warmth note, then an optional saturation note, then an
    optional lightness note. Mid-range saturation and lightness are silent.
    """
    notes: List[str] = []

    if merged.warmth >= 0.6:
        notes.append(WARM_NOTE)
    elif merged.warmth <= 0.4:
        notes.append(COOL_NOTE)
    else:
        notes.append(BALANCED_NOTE)

    if merged.saturation >= 0.6:
        notes.append(HIGH_SATURATION_NOTE)
    elif merged.saturation <= 0.35:
        notes.append(LOW_SATURATION_NOTE)

    if merged.lightness <= 0.4:
        notes.append(LOW_LIGHTNESS_NOTE)
    elif merged.lightness >= 0.65:
        notes.append(HIGH_LIGHTNESS_NOTE)

    return tuple(notes)


def map_palette(palette: Sequence[PaletteColor]) -> MoodMapping:
    """Run the full pipeline on a ranked palette."""
    palette = tuple(palette)
    weighted = weight_palette(palette)
    merged = merge_metrics(
        (item.weight, color_metrics(item.hex)) for item in weighted
    )

    analysis = Analysis(
        palette=palette,
        averages=merged.averages(),
        # An empty palette carries no mood to describe
        explanations=() if merged.is_zero() else explain_mood(merged),
    )
    return MoodMapping(targets=synthesize_targets(merged), analysis=analysis)


def map_palette_from_hex_list(hex_colors: Iterable[str]) -> MoodMapping:
    """
    Map caller-supplied hex colors, ranked by position.

    Non-string and empty entries are skipped; the first MAX_COLORS remaining
    colors are used, with synthetic populations MAX_COLORS, MAX_COLORS - 1, ...
    """
    usable = [hex_code for hex_code in hex_colors if isinstance(hex_code, str) and hex_code]
    palette = [
        PaletteColor(hex=hex_code, population=float(MAX_COLORS - index))
        for index, hex_code in enumerate(usable[:MAX_COLORS])
    ]
    return map_palette(palette)


def map_palette_from_extraction(palette: Sequence[PaletteColor]) -> MoodMapping:
    """Map a palette produced by an image extractor (first MAX_COLORS used)."""
    return map_palette(tuple(palette)[:MAX_COLORS])
