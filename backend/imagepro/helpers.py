"""Display helpers shared by the session and the web interface."""

from __future__ import annotations

from .enums import ImageFormat

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_file_size(num_bytes: int) -> str:
    """Human-readable size with base-1024 units, e.g. ``1536 -> "1.5 KB"``."""
    if num_bytes <= 0:
        return "0 Bytes"
    exponent = 0
    while exponent < len(_SIZE_UNITS) - 1 and num_bytes >= 1024 ** (exponent + 1):
        exponent += 1
    value = round(num_bytes / 1024 ** exponent, 2)
    return f"{value:g} {_SIZE_UNITS[exponent]}"


def size_change_percent(original_size: int, processed_size: int) -> float:
    """Signed percentage change from ``original_size`` to ``processed_size``."""
    if original_size <= 0:
        return 0.0
    return (processed_size - original_size) / original_size * 100


def format_size_change(original_size: int, processed_size: int) -> str:
    """Size change rendered as ``-12.5%``, ``+3.0%`` or ``0.0%``."""
    percent = abs(size_change_percent(original_size, processed_size))
    if processed_size < original_size:
        sign = "-"
    elif processed_size > original_size:
        sign = "+"
    else:
        sign = ""
    return f"{sign}{percent:.1f}%"


def download_filename(original_name: str, image_format: ImageFormat | str) -> str:
    """``photo.final.jpg`` becomes ``processed_photo.png`` for PNG output."""
    fmt = ImageFormat.parse(image_format)
    stem = original_name.split(".")[0] or "image"
    return f"processed_{stem}.{fmt.extension}"
