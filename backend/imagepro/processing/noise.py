"""Sub-visible pixel noise used to inflate encoded size."""

from __future__ import annotations

import logging

import numpy as np
from PIL import Image

from ..config import Config

logger = logging.getLogger("imagepro.processing.noise")


def perturb_pixels(
    pixels: np.ndarray,
    rng: np.random.Generator,
    amplitude: float = Config.NOISE_AMPLITUDE,
) -> np.ndarray:
    """Add independent uniform noise in (-amplitude, amplitude) to R, G and B.

    Values are rounded to the nearest integer and clamped to [0, 255], the way
    a canvas stores them. The alpha channel is copied through unchanged.

    Args:
        pixels: ``(H, W, 4)`` uint8 RGBA array.
        rng: Source of randomness.
        amplitude: Maximum absolute perturbation per channel.

    Returns:
        New ``(H, W, 4)`` uint8 array.
    """
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(f"Expected an (H, W, 4) RGBA array, got shape {pixels.shape}")

    out = pixels.copy()
    rgb = pixels[:, :, :3].astype(np.float32)
    noise = rng.uniform(-amplitude, amplitude, size=rgb.shape).astype(np.float32)
    out[:, :, :3] = np.clip(np.rint(rgb + noise), 0, 255).astype(np.uint8)
    return out


def add_noise_padding(
    image: Image.Image, rng: np.random.Generator | None = None
) -> Image.Image:
    """Return a copy of ``image`` with one pass of sub-visible noise applied."""
    if rng is None:
        rng = np.random.default_rng()

    if image.mode != "RGBA":
        image = image.convert("RGBA")

    pixels = np.asarray(image, dtype=np.uint8)
    padded = perturb_pixels(pixels, rng)
    logger.debug("Applied noise padding to %dx%d raster", *image.size)
    return Image.fromarray(padded)
