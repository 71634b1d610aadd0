"""
Palette Playlist: color-to-mood mapping and mood playlist generation.
"""

__version__ = "0.1.0"
