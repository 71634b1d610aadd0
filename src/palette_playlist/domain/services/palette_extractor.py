"""
Domain service interface for image palette extraction.

Defines the contract for turning an image into a ranked palette without
exposing decoding or download details to the domain layer.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from palette_playlist.domain.value_objects.palette import PaletteColor


class PaletteExtractor(ABC):
    """
    Extracts the dominant colors of an image.

    Implementations return at most MAX_COLORS colors ordered by pixel
    population, most dominant first.
    """

    @abstractmethod
    async def extract(
        self,
        image_url: Optional[str] = None,
        image_base64: Optional[str] = None,
    ) -> List[PaletteColor]:
        """
        Extract a ranked palette from an image.

        Args:
            image_url: URL of the image to download
            image_base64: Base64 image payload, optionally a data URL

        Returns:
            List[PaletteColor]: Ranked palette, empty when no image is given

        Raises:
            PaletteExtractionError: When the image cannot be fetched or decoded
        """
        pass
