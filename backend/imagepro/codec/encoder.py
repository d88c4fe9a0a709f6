"""Raster encoding for ImagePro."""

from __future__ import annotations

import io
import logging

from PIL import Image

from ..config import Config
from ..enums import ImageFormat
from ..exceptions import EncodeError

logger = logging.getLogger("imagepro.codec.encoder")


def pil_quality(quality: float) -> int:
    """Map a [0, 1] quality onto Pillow's 0-100 scale."""
    return int(round(quality * 100))


def flatten_on_black(image: Image.Image) -> Image.Image:
    """Composite a raster onto opaque black, as a canvas does for JPEG."""
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    flat = Image.new("RGB", rgba.size, (0, 0, 0))
    flat.paste(rgba, mask=rgba.split()[3])
    return flat


def encode_image(
    image: Image.Image,
    image_format: ImageFormat | str,
    quality: float = Config.MAX_QUALITY,
) -> bytes:
    """Encode a raster in the given format.

    ``quality`` applies to JPEG and WebP and is ignored by PNG.

    Args:
        image: Source raster (any mode; RGBA expected).
        image_format: Output format.
        quality: Encoder quality in [0, 1].

    Returns:
        Encoded bytes.

    Raises:
        UnsupportedFormatError: If the format is not JPEG, PNG or WebP.
        EncodeError: If the canvas has no area, the quality is out of
            range, or Pillow fails to write the image.
    """
    fmt = ImageFormat.parse(image_format)

    width, height = image.size
    if width <= 0 or height <= 0:
        raise EncodeError(f"Cannot encode a zero-area canvas ({width}x{height})")
    if not Config.MIN_QUALITY <= quality <= Config.MAX_QUALITY:
        raise EncodeError(f"Quality must be within [0, 1], got {quality}")

    if fmt is ImageFormat.JPEG and image.mode != "RGB":
        image = flatten_on_black(image)

    params: dict = {}
    if not fmt.is_lossless:
        params["quality"] = pil_quality(quality)

    buffer = io.BytesIO()
    try:
        image.save(buffer, format=fmt.pil_format, **params)
    except (KeyError, OSError, ValueError) as e:
        raise EncodeError(f"Failed to encode {fmt.value}: {e}") from e

    data = buffer.getvalue()
    logger.debug(
        "Encoded %dx%d as %s (quality=%s): %d bytes",
        width, height, fmt.value, params.get("quality", "n/a"), len(data),
    )
    return data
