"""Resize to exact dimensions and aspect-ratio locking."""

from __future__ import annotations

import logging
import math

from ..codec import decode_image, encode_image
from ..config import Config
from ..exceptions import EncodeError
from ..models import ImageDimensions, ProcessedImageResult, ResizeSettings

logger = logging.getLogger("imagepro.processing.resize")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def scale_to_width(original: ImageDimensions, width: int) -> ImageDimensions:
    """Dimensions with the given width and the original aspect ratio."""
    height = max(1, _round_half_up(width / original.aspect_ratio))
    return ImageDimensions(width=width, height=height)


def scale_to_height(original: ImageDimensions, height: int) -> ImageDimensions:
    """Dimensions with the given height and the original aspect ratio."""
    width = max(1, _round_half_up(height * original.aspect_ratio))
    return ImageDimensions(width=width, height=height)


def resize_image(data: bytes, settings: ResizeSettings) -> ProcessedImageResult:
    """Resample an image to exactly ``settings.width`` x ``settings.height``.

    The output is always PNG, whatever format the source had.

    Args:
        data: Encoded source image.
        settings: Target dimensions.

    Returns:
        PNG result with the requested dimensions and no quality.

    Raises:
        DecodeError: If the source cannot be decoded.
        EncodeError: If the target canvas has no area.
    """
    raster = decode_image(data)
    try:
        width, height = int(settings.width), int(settings.height)
        if width <= 0 or height <= 0:
            raise EncodeError(f"Cannot encode a zero-area canvas ({width}x{height})")

        resized = raster.resize((width, height), Config.RESIZE_FILTER)
        try:
            encoded = encode_image(resized, Config.LOSSLESS_FORMAT)
        finally:
            resized.close()
    finally:
        raster.close()

    logger.info(
        "Resized to %dx%d (%s, %d bytes)",
        width, height, Config.LOSSLESS_FORMAT.value, len(encoded),
    )
    return ProcessedImageResult(
        data=encoded,
        width=width,
        height=height,
        format=Config.LOSSLESS_FORMAT,
        quality=None,
    )
