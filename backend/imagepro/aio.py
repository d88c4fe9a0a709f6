"""Awaitable wrappers around the image operations.

Each call runs the synchronous operation in the event loop's default
executor and resolves to a single result or raises the operation's error.
"""

from __future__ import annotations

import asyncio
import functools

import numpy as np

from .codec import probe_dimensions as _probe_dimensions
from .models import (
    CompressionSettings,
    EnhanceSettings,
    ImageDimensions,
    ProcessedImageResult,
    ResizeSettings,
)
from .processing import compress_image as _compress_image
from .processing import enhance_image as _enhance_image
from .processing import resize_image as _resize_image

__all__ = ["compress_image", "enhance_image", "probe_dimensions", "resize_image"]


async def _run(func, *args):
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(func, *args))


async def probe_dimensions(data: bytes) -> ImageDimensions:
    return await _run(_probe_dimensions, data)


async def resize_image(data: bytes, settings: ResizeSettings) -> ProcessedImageResult:
    return await _run(_resize_image, data, settings)


async def compress_image(
    data: bytes, settings: CompressionSettings
) -> ProcessedImageResult:
    return await _run(_compress_image, data, settings)


async def enhance_image(
    data: bytes,
    settings: EnhanceSettings,
    rng: np.random.Generator | None = None,
) -> ProcessedImageResult:
    return await _run(_enhance_image, data, settings, rng)
