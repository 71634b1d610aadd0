"""
Image palette extractor backed by Pillow.

Downloads or decodes an image and reduces it to its most populated colors,
ranked by pixel count.
"""

import base64
import binascii
import io
from typing import List, Optional

import aiohttp
import structlog
from PIL import Image, UnidentifiedImageError

from palette_playlist.domain.services.palette_extractor import PaletteExtractor
from palette_playlist.domain.value_objects.palette import MAX_COLORS, PaletteColor
from palette_playlist.infrastructure.config.settings import Settings, get_settings


DOWNLOAD_CHUNK_SIZE = 64 * 1024


def decode_base64_image(image_base64: str) -> bytes:
    """
    Decode a base64 image payload.

    Accepts raw base64 as well as data URLs ("data:image/png;base64,...").

    Raises:
        ImageDecodeError: If the payload is not valid base64
    """
    payload = image_base64.strip()
    if payload.startswith("data:"):
        _, _, payload = payload.partition(",")
    payload = "".join(payload.split())

    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Invalid base64 image payload: {e}") from e


class ImagePaletteExtractor(PaletteExtractor):
    """
    Palette extractor using median-cut quantization.

    The image is downsampled, quantized into a small number of buckets and
    the buckets with the largest pixel counts become the palette.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize palette extractor.

        Args:
            settings: Application settings (uses default if None)
        """
        self.settings = settings or get_settings()
        self.logger = structlog.get_logger()

    async def extract(
        self,
        image_url: Optional[str] = None,
        image_base64: Optional[str] = None,
    ) -> List[PaletteColor]:
        """Extract a ranked palette from a URL or base64 payload."""
        if not image_url and not image_base64:
            self.logger.info("No image provided, returning empty palette")
            return []

        if image_base64:
            image_data = decode_base64_image(image_base64)
            source = "base64"
        else:
            image_data = await self.download_image(image_url)
            source = "url"

        if len(image_data) > self.settings.max_image_size_bytes:
            raise self._too_large(len(image_data))

        palette = self.palette_from_bytes(image_data)

        self.logger.info(
            "Palette extracted",
            source=source,
            image_bytes=len(image_data),
            colors=[color.hex for color in palette],
        )
        return palette

    async def download_image(self, image_url: str) -> bytes:
        """
        Download raw image bytes.

        The body is streamed and abandoned as soon as it passes the size limit.

        Raises:
            ImageDownloadError: If the request fails or returns a non-200 status
            ImageTooLargeError: If the body exceeds max_image_size_bytes
        """
        logger = self.logger.bind(image_url=image_url)
        timeout = aiohttp.ClientTimeout(total=self.settings.image_download_timeout_seconds)
        limit = self.settings.max_image_size_bytes

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(image_url) as response:
                    if response.status != 200:
                        raise ImageDownloadError(
                            f"Failed to fetch image: HTTP {response.status}"
                        )
                    if response.content_length is not None and response.content_length > limit:
                        raise self._too_large(response.content_length)

                    buffer = bytearray()
                    async for chunk in response.content.iter_chunked(DOWNLOAD_CHUNK_SIZE):
                        buffer.extend(chunk)
                        if len(buffer) > limit:
                            raise self._too_large(len(buffer))
                    image_data = bytes(buffer)
        except aiohttp.ClientError as e:
            logger.error("Image download failed", error=str(e))
            raise ImageDownloadError(f"Failed to fetch image: {e}") from e

        if not image_data:
            raise ImageDownloadError("Downloaded image is empty")

        logger.debug("Image downloaded", image_bytes=len(image_data))
        return image_data

    def _too_large(self, size: int) -> "ImageTooLargeError":
        return ImageTooLargeError(
            f"Image too large: {size / (1024 * 1024):.1f}MB > {self.settings.max_image_size_mb}MB"
        )

    def palette_from_bytes(self, image_data: bytes) -> List[PaletteColor]:
        """
        Reduce encoded image bytes to a ranked palette.

        Raises:
            ImageDecodeError: If Pillow cannot decode the bytes
        """
        try:
            image = Image.open(io.BytesIO(image_data))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise ImageDecodeError(f"Unsupported or corrupt image: {e}") from e

        if image.mode != "RGB":
            image = image.convert("RGB")

        size = self.settings.palette_sample_size
        image.thumbnail((size, size), Image.Resampling.LANCZOS)

        quantized = image.quantize(
            colors=self.settings.palette_quantize_colors,
            method=Image.Quantize.MEDIANCUT,
        )
        flat_palette = quantized.getpalette() or []
        counts = quantized.getcolors() or []

        colors = []
        for population, index in counts:
            red, green, blue = flat_palette[index * 3:index * 3 + 3]
            colors.append(
                PaletteColor(hex=f"#{red:02X}{green:02X}{blue:02X}", population=float(population))
            )

        colors.sort(key=lambda color: color.population, reverse=True)
        return colors[:MAX_COLORS]


class PaletteExtractionError(Exception):
    """Raised when an image palette cannot be extracted."""


class ImageDownloadError(PaletteExtractionError):
    """Raised when an image cannot be fetched."""


class ImageTooLargeError(PaletteExtractionError):
    """Raised when an image exceeds the configured size limit."""


class ImageDecodeError(PaletteExtractionError):
    """Raised when image bytes or payload cannot be decoded."""
