"""
Domain services: the color-to-mood mapping engine and extraction contract.
"""

from .color_mapper import (
    map_palette,
    map_palette_from_extraction,
    map_palette_from_hex_list,
)
from .palette_extractor import PaletteExtractor

__all__ = [
    "map_palette",
    "map_palette_from_extraction",
    "map_palette_from_hex_list",
    "PaletteExtractor",
]
