"""Data structures for ImagePro."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .config import Config
from .enums import ImageFormat


@dataclass(frozen=True)
class ImageDimensions:
    """Pixel size of a decoded raster."""
    width: int
    height: int

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def to_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass
class ResizeSettings:
    """Target size for the resizer.

    ``maintain_aspect_ratio`` is advisory: the caller applies it when it
    picks ``width``/``height``. The resizer honours the numbers as given.
    """
    width: int
    height: int
    maintain_aspect_ratio: bool = True


@dataclass
class CompressionSettings:
    """Quality in [0, 1] and output format for the compressor."""
    quality: float = Config.DEFAULT_COMPRESS_QUALITY
    format: ImageFormat = Config.DEFAULT_FORMAT


@dataclass
class EnhanceSettings:
    """Minimum output size (KB) and format for the enhancer."""
    target_size: int = Config.DEFAULT_TARGET_KB
    format: ImageFormat = Config.DEFAULT_FORMAT

    @property
    def target_bytes(self) -> int:
        return self.target_size * 1024


@dataclass(frozen=True)
class ProcessedImageResult:
    """Encoded output of one operation.

    ``size`` is derived from ``data`` so the two can never disagree.
    ``quality`` is None when the encoding had no meaningful quality setting.
    """
    data: bytes = field(repr=False)
    width: int
    height: int
    format: ImageFormat
    quality: float | None = None

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def mime_type(self) -> str:
        return self.format.mime_type

    @property
    def dimensions(self) -> ImageDimensions:
        return ImageDimensions(self.width, self.height)

    def to_dict(self) -> dict[str, Any]:
        """Metadata for display, without the encoded bytes."""
        return {
            "width": self.width,
            "height": self.height,
            "size": self.size,
            "format": self.format.value,
            "quality": self.quality,
        }
