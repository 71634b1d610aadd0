"""
Palette value objects.

Represents ranked image colors and their aggregation weights.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Tuple


MAX_COLORS = 5

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_hex(hex_code: str) -> Tuple[int, int, int]:
    """
    Parse a CSS hex color into an RGB triple.

    Args:
        hex_code: Color such as "#FF4500", "ff4500" or "#f40"

    Returns:
        Tuple of red, green and blue channels (0-255)

    Raises:
        InvalidColorError: If the value is not a hex color
    """
    if not isinstance(hex_code, str):
        raise InvalidColorError(f"Hex color must be a string, got {type(hex_code).__name__}")

    match = _HEX_PATTERN.match(hex_code.strip())
    if not match:
        raise InvalidColorError(f"Invalid hex color: {hex_code!r}")

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)

    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


@dataclass(frozen=True)
class PaletteColor:
    """Single palette entry with its relative pixel population."""

    hex: str
    population: float

    def __post_init__(self):
        """Validate hex format and population."""
        parse_hex(self.hex)
        if self.population < 0:
            raise ValueError("Population must be non-negative")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"hex": self.hex, "population": self.population}


@dataclass(frozen=True)
class WeightedColor:
    """Palette color with its normalized influence weight."""

    color: PaletteColor
    weight: float

    @property
    def hex(self) -> str:
        return self.color.hex

    @property
    def population(self) -> float:
        return self.color.population

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {**self.color.to_dict(), "weight": self.weight}


class InvalidColorError(ValueError):
    """Raised when a color string cannot be parsed as hex."""
