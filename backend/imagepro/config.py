"""Global configuration for ImagePro."""

from __future__ import annotations

from PIL import Image

from .enums import ImageFormat


class Config:
    """Global configuration."""

    # Defaults shown in the controls
    DEFAULT_COMPRESS_QUALITY = 0.8
    DEFAULT_FORMAT = ImageFormat.JPEG
    DEFAULT_TARGET_KB = 100

    # Quality search
    ENHANCE_START_QUALITY = 1.0
    QUALITY_STEP = 0.1
    MIN_QUALITY = 0.0
    MAX_QUALITY = 1.0

    # Noise padding (max absolute change per channel)
    NOISE_AMPLITUDE = 1.0

    # Resize always writes a lossless file
    RESIZE_FILTER = Image.Resampling.BILINEAR
    LOSSLESS_FORMAT = ImageFormat.PNG

    # Upload limit enforced by the session, not the core
    MAX_UPLOAD_BYTES = 50 * 1024 * 1024

    # Web interface
    SERVER_HOST = "0.0.0.0"
    SERVER_PORT = 7860
