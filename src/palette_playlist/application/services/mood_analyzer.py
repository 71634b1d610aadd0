"""
Mood analysis application service.

Chooses the mood source of a request (image or hex palette), runs the
color-to-mood mapping and merges the result with caller overrides.
"""

import time
from typing import Dict, Mapping, Optional

import structlog

from palette_playlist.application.commands.generate_playlist import AnalyzeMoodCommand
from palette_playlist.domain.services.color_mapper import (
    map_palette_from_extraction,
    map_palette_from_hex_list,
)
from palette_playlist.domain.services.palette_extractor import PaletteExtractor
from palette_playlist.domain.value_objects.audio_targets import (
    TARGET_BOUNDS,
    AudioTargets,
    MoodMapping,
)
from palette_playlist.infrastructure.monitoring.metrics import (
    MetricsCollector,
    get_metrics_collector,
)


def resolve_targets(
    derived: Optional[AudioTargets],
    overrides: Mapping[str, Optional[float]],
) -> Dict[str, float]:
    """
    Merge derived targets with caller overrides.

    An explicit override always wins. Targets with neither an override nor
    a derived value are left out.
    """
    derived_values = derived.to_dict() if derived else {}
    resolved = {}
    for name in TARGET_BOUNDS:
        value = overrides.get(name)
        if value is None:
            value = derived_values.get(name)
        if value is not None:
            resolved[name] = value
    return resolved


def has_mood_signal(targets: Mapping[str, float]) -> bool:
    """False when every resolved target sits at its lower bound."""
    return any(value != TARGET_BOUNDS[name][0] for name, value in targets.items())


class MoodAnalyzerService:
    """
    Application service deriving audio targets from a request.

    Uses the image path when an image is supplied, otherwise the hex
    palette path.
    """

    def __init__(
        self,
        palette_extractor: PaletteExtractor,
        metrics: Optional[MetricsCollector] = None,
    ):
        """
        Initialize mood analyzer.

        Args:
            palette_extractor: Extractor used for image inputs
            metrics: Metrics collector (uses global collector if None)
        """
        self.palette_extractor = palette_extractor
        self.metrics = metrics or get_metrics_collector()
        self.logger = structlog.get_logger()

    async def analyze(self, command: AnalyzeMoodCommand) -> Optional[MoodMapping]:
        """
        Derive targets and analysis for a command.

        Returns:
            MoodMapping, or None when the command has no mood source

        Raises:
            PaletteExtractionError: When the image cannot be fetched or decoded
            InvalidColorError: When palette_hex holds a malformed color
        """
        start_time = time.time()

        if command.has_image():
            self.logger.info(
                "Analyzing image",
                has_image_url=bool(command.image_url),
                has_image_base64=bool(command.image_base64),
            )
            palette = await self.palette_extractor.extract(
                image_url=command.image_url,
                image_base64=command.image_base64,
            )
            if not palette:
                self.logger.warning("Palette extraction returned no colors")
            mapping = map_palette_from_extraction(palette)
            source = "image"
        elif command.has_palette():
            self.logger.info("Using provided palette", palette_size=len(command.palette_hex))
            mapping = map_palette_from_hex_list(command.palette_hex)
            source = "palette"
        else:
            return None

        has_signal = not mapping.targets.is_floor()
        analysis_time_ms = round((time.time() - start_time) * 1000, 2)
        self.metrics.record_mood_analysis(source, analysis_time_ms, has_signal)

        self.logger.info(
            "Mood analysis completed",
            source=source,
            targets=mapping.targets.to_dict(),
            explanations=list(mapping.analysis.explanations),
            analysis_time_ms=analysis_time_ms,
        )
        return mapping
