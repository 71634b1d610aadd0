"""
Infrastructure services implementing domain contracts.
"""

from .image_palette_extractor import (
    ImageDecodeError,
    ImageDownloadError,
    ImagePaletteExtractor,
    ImageTooLargeError,
    PaletteExtractionError,
)

__all__ = [
    'ImageDecodeError',
    'ImageDownloadError',
    'ImagePaletteExtractor',
    'ImageTooLargeError',
    'PaletteExtractionError',
]
