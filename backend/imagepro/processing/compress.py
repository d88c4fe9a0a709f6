"""Re-encode at native size with a caller-chosen quality and format."""

from __future__ import annotations

import logging

from ..codec import decode_image, encode_image
from ..enums import ImageFormat
from ..models import CompressionSettings, ProcessedImageResult

logger = logging.getLogger("imagepro.processing.compress")


def compress_image(data: bytes, settings: CompressionSettings) -> ProcessedImageResult:
    """Re-encode an image at its original dimensions.

    Args:
        data: Encoded source image.
        settings: Quality in [0, 1] and output format.

    Returns:
        Result in the requested format. ``quality`` is None for PNG.

    Raises:
        UnsupportedFormatError: If the format is not JPEG, PNG or WebP.
        DecodeError: If the source cannot be decoded.
        EncodeError: If the encoder rejects the quality.
    """
    fmt = ImageFormat.parse(settings.format)

    raster = decode_image(data)
    try:
        width, height = raster.size
        encoded = encode_image(raster, fmt, settings.quality)
    finally:
        raster.close()

    quality = None if fmt.is_lossless else settings.quality
    logger.info(
        "Compressed %dx%d as %s (quality=%s): %d -> %d bytes",
        width, height, fmt.value, quality, len(data), len(encoded),
    )
    return ProcessedImageResult(
        data=encoded,
        width=width,
        height=height,
        format=fmt,
        quality=quality,
    )
