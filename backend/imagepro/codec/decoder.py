"""Raster decoding for ImagePro."""

from __future__ import annotations

import io
import logging

import numpy as np
from PIL import Image, ImageOps

from ..exceptions import DecodeError
from ..models import ImageDimensions

logger = logging.getLogger("imagepro.codec.decoder")


def _to_8bit(img: Image.Image) -> Image.Image:
    """Scale 16-bit and 32-bit integer rasters down to 8 bits per sample.

    A plain ``convert`` clips these modes, so mid-grey would become white.
    """
    if img.mode != "I" and not img.mode.startswith("I;16"):
        return img
    samples = np.clip(np.asarray(img, dtype=np.int64), 0, 65535) >> 8
    return Image.fromarray(samples.astype(np.uint8))


def decode_image(data: bytes) -> Image.Image:
    """Decode raw bytes into an RGBA raster.

    EXIF orientation is applied, matching how a browser draws the image.

    Args:
        data: Encoded image bytes.

    Returns:
        Fully loaded RGBA image owned by the caller.

    Raises:
        DecodeError: If the bytes are empty or not a decodable raster.
    """
    if not data:
        raise DecodeError("Cannot decode an empty buffer")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            oriented = ImageOps.exif_transpose(img)
            raster = _to_8bit(oriented).convert("RGBA")
    except Exception as e:
        raise DecodeError(f"Failed to decode image: {e}") from e

    logger.debug("Decoded %d bytes into %dx%d raster", len(data), *raster.size)
    return raster


def probe_dimensions(data: bytes) -> ImageDimensions:
    """Report the width and height of an encoded image.

    Raises:
        DecodeError: If the bytes are not a decodable raster.
    """
    raster = decode_image(data)
    try:
        width, height = raster.size
    finally:
        raster.close()
    return ImageDimensions(width=width, height=height)
