"""Output formats and operations for ImagePro."""

from __future__ import annotations

from enum import Enum

from .exceptions import UnsupportedFormatError


class ImageFormat(Enum):
    """Encodable output formats."""
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"

    @classmethod
    def parse(cls, value: ImageFormat | str) -> ImageFormat:
        """Resolve a format from an enum member, a name, ``jpg`` or a MIME type.

        Raises:
            UnsupportedFormatError: If the value names no supported format.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise UnsupportedFormatError(f"Unsupported format: {value!r}")

        key = value.strip().lower()
        if key.startswith("image/"):
            key = key[len("image/"):]
        key = key.lstrip(".")
        if key == "jpg":
            key = "jpeg"

        for member in cls:
            if member.value == key:
                return member
        raise UnsupportedFormatError(
            f"Unsupported format '{value}'. Allowed: jpeg, png, webp"
        )

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def pil_format(self) -> str:
        return self.name

    @property
    def is_lossless(self) -> bool:
        return self is ImageFormat.PNG


class Operation(Enum):
    """Operations a session can run."""
    RESIZE = "resize"
    COMPRESS = "compress"
    ENHANCE = "enhance"
