"""Custom exception hierarchy for ImagePro."""

from __future__ import annotations


class ImageProError(Exception):
    """Base exception for all ImagePro errors."""


class DecodeError(ImageProError):
    """Raised when input bytes cannot be decoded as a raster image."""


class EncodeError(ImageProError):
    """Raised when the encoder rejects the requested format, quality or size."""


class UnsupportedFormatError(EncodeError):
    """Raised when the requested output format is not JPEG, PNG or WebP."""


class ValidationError(ImageProError):
    """Raised when caller input validation fails."""
