"""Size-targeting enhancement: quality search with a noise fallback."""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np
from PIL import Image

from ..codec import decode_image, encode_image
from ..config import Config
from ..enums import ImageFormat
from ..models import EnhanceSettings, ProcessedImageResult
from ..validators import validate_target_size
from .noise import add_noise_padding

logger = logging.getLogger("imagepro.processing.enhance")

Encoder = Callable[[Image.Image, ImageFormat, float], bytes]
NoisePadder = Callable[[Image.Image, np.random.Generator | None], Image.Image]


class SizeTargetingEnhancer:
    """Grow an image's encoded size up to a target byte count.

    Quality starts at ``start_quality`` and climbs by ``quality_step`` while
    the encoding is short of the target. Once quality hits the ceiling and
    the output is still too small, one pass of noise padding is applied and
    the image is re-encoded at maximum quality.

    With the default start of 1.0 the search makes a single attempt: it never
    steps downward looking for the lowest quality that still meets the target.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        start_quality: float = Config.ENHANCE_START_QUALITY,
        quality_step: float = Config.QUALITY_STEP,
        encoder: Encoder = encode_image,
        noise_padder: NoisePadder = add_noise_padding,
    ) -> None:
        if not Config.MIN_QUALITY <= start_quality <= Config.MAX_QUALITY:
            raise ValueError(f"start_quality must be within [0, 1], got {start_quality}")
        if quality_step <= 0:
            raise ValueError(f"quality_step must be positive, got {quality_step}")

        self.rng = rng
        self.start_quality = start_quality
        self.quality_step = quality_step
        self.encoder = encoder
        self.noise_padder = noise_padder

    def _next_quality(self, quality: float) -> float:
        # Rounding keeps 0.1 steps from drifting to 0.30000000000000004
        return round(min(quality + self.quality_step, Config.MAX_QUALITY), 10)

    def enhance(self, data: bytes, settings: EnhanceSettings) -> ProcessedImageResult:
        """Encode ``data`` at or above ``settings.target_size`` kilobytes.

        Args:
            data: Encoded source image.
            settings: Target size (KB) and output format.

        Returns:
            Result with the source dimensions and the quality that was used.
            The fallback path reports quality 1.0 even if it fell short.

        Raises:
            UnsupportedFormatError: If the format is not JPEG, PNG or WebP.
            ValidationError: If the target size is negative or not an integer.
            DecodeError: If the source cannot be decoded.
            EncodeError: If the encoder rejects the parameters.
        """
        fmt = ImageFormat.parse(settings.format)
        validate_target_size(settings.target_size)
        target = settings.target_bytes

        raster = decode_image(data)
        try:
            width, height = raster.size
            encoded, quality = self._search_quality(raster, fmt, target)

            if len(encoded) < target:
                logger.info(
                    "Quality %.1f gives %d bytes, short of %d; applying noise padding",
                    quality, len(encoded), target,
                )
                padded = self.noise_padder(raster, self.rng)
                try:
                    encoded = self.encoder(padded, fmt, Config.MAX_QUALITY)
                finally:
                    padded.close()
                quality = Config.MAX_QUALITY
        finally:
            raster.close()

        logger.info(
            "Enhanced %dx%d as %s (quality=%.1f): %d bytes for target %d",
            width, height, fmt.value, quality, len(encoded), target,
        )
        return ProcessedImageResult(
            data=encoded,
            width=width,
            height=height,
            format=fmt,
            quality=quality,
        )

    def _search_quality(
        self, raster: Image.Image, fmt: ImageFormat, target: int
    ) -> tuple[bytes, float]:
        """Climb from the start quality until the target or the ceiling is hit."""
        quality = self.start_quality
        while True:
            encoded = self.encoder(raster, fmt, quality)
            logger.debug("Quality %.1f -> %d bytes (target %d)", quality, len(encoded), target)
            if len(encoded) >= target or quality >= Config.MAX_QUALITY:
                return encoded, quality
            quality = self._next_quality(quality)


def enhance_image(
    data: bytes,
    settings: EnhanceSettings,
    rng: np.random.Generator | None = None,
) -> ProcessedImageResult:
    """Run the enhancer with default search parameters."""
    return SizeTargetingEnhancer(rng=rng).enhance(data, settings)
