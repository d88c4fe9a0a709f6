"""Editing session: one uploaded image, one operation at a time."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from . import aio
from .codec import probe_dimensions
from .enums import Operation
from .exceptions import ValidationError
from .helpers import download_filename, format_file_size
from .models import (
    CompressionSettings,
    EnhanceSettings,
    ImageDimensions,
    ProcessedImageResult,
    ResizeSettings,
)
from .processing import compress_image, enhance_image, resize_image
from .processing.resize import scale_to_height, scale_to_width
from .validators import validate_upload

logger = logging.getLogger("imagepro.session")

Settings = ResizeSettings | CompressionSettings | EnhanceSettings

_SETTINGS_TYPES: dict[Operation, type] = {
    Operation.RESIZE: ResizeSettings,
    Operation.COMPRESS: CompressionSettings,
    Operation.ENHANCE: EnhanceSettings,
}


class ImageSession:
    """Holds the uploaded image and the latest result for one user.

    The session owns the in-flight flag: a second operation requested while
    one is running is rejected rather than queued.
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self.rng = rng
        self.data: bytes | None = None
        self.name: str | None = None
        self.dimensions: ImageDimensions | None = None
        self.resize_settings: ResizeSettings | None = None
        self.result: ProcessedImageResult | None = None
        self.is_processing = False

    def load(self, data: bytes, name: str = "image") -> dict[str, Any]:
        """Load an uploaded image and reset the previous result.

        Args:
            data: Raw uploaded bytes.
            name: Original file name, used for the download name.

        Returns:
            Dict describing the original image for display.

        Raises:
            ValidationError: If the upload is empty or too large.
            DecodeError: If the bytes are not a decodable image.
        """
        validate_upload(data)
        dimensions = probe_dimensions(data)

        self.data = data
        self.name = name
        self.dimensions = dimensions
        self.resize_settings = ResizeSettings(
            width=dimensions.width, height=dimensions.height
        )
        self.result = None
        logger.info(
            "Loaded %s: %dx%d, %s",
            name, dimensions.width, dimensions.height, format_file_size(len(data)),
        )
        return {
            "file": name,
            "width": dimensions.width,
            "height": dimensions.height,
            "size": len(data),
        }

    def reset(self) -> None:
        """Forget the current image and result."""
        self.data = None
        self.name = None
        self.dimensions = None
        self.resize_settings = None
        self.result = None
        self.is_processing = False

    def resize_settings_for(
        self,
        width: int | None = None,
        height: int | None = None,
        maintain_aspect_ratio: bool = True,
    ) -> ResizeSettings:
        """Build resize settings, deriving the other side when aspect is locked.

        When both sides are given with the lock on, ``width`` wins.
        """
        self._require_image()
        dims = self.dimensions
        if maintain_aspect_ratio and width is not None:
            dims = scale_to_width(self.dimensions, width)
        elif maintain_aspect_ratio and height is not None:
            dims = scale_to_height(self.dimensions, height)
        else:
            dims = ImageDimensions(
                width=width if width is not None else dims.width,
                height=height if height is not None else dims.height,
            )

        self.resize_settings = ResizeSettings(
            width=dims.width,
            height=dims.height,
            maintain_aspect_ratio=maintain_aspect_ratio,
        )
        return self.resize_settings

    @property
    def download_name(self) -> str | None:
        if self.result is None:
            return None
        return download_filename(self.name or "image", self.result.format)

    def run(self, operation: Operation, settings: Settings) -> ProcessedImageResult:
        """Run one operation on the loaded image and keep its result.

        Raises:
            ValidationError: If no image is loaded, an operation is already
                running, or the settings don't match the operation.
            ImageProError: Whatever the operation raises.
        """
        self._begin(operation, settings)
        try:
            if operation is Operation.RESIZE:
                result = resize_image(self.data, settings)
            elif operation is Operation.COMPRESS:
                result = compress_image(self.data, settings)
            else:
                result = enhance_image(self.data, settings, self.rng)
        except Exception as e:
            logger.error("%s failed: %s", operation.value.capitalize(), e)
            raise
        finally:
            self.is_processing = False

        self.result = result
        return result

    async def arun(
        self, operation: Operation, settings: Settings
    ) -> ProcessedImageResult:
        """Awaitable variant of :meth:`run`."""
        self._begin(operation, settings)
        try:
            if operation is Operation.RESIZE:
                result = await aio.resize_image(self.data, settings)
            elif operation is Operation.COMPRESS:
                result = await aio.compress_image(self.data, settings)
            else:
                result = await aio.enhance_image(self.data, settings, self.rng)
        except Exception as e:
            logger.error("%s failed: %s", operation.value.capitalize(), e)
            raise
        finally:
            self.is_processing = False

        self.result = result
        return result

    def _require_image(self) -> None:
        if self.data is None or self.dimensions is None:
            raise ValidationError("No image loaded")

    def _begin(self, operation: Operation, settings: Settings) -> None:
        self._require_image()
        if self.is_processing:
            raise ValidationError("Another operation is already in progress")
        expected = _SETTINGS_TYPES[operation]
        if not isinstance(settings, expected):
            raise ValidationError(
                f"{operation.value} expects {expected.__name__}, "
                f"got {type(settings).__name__}"
            )
        self.is_processing = True
