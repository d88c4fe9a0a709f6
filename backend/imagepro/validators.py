"""Input validation for ImagePro."""

from __future__ import annotations

from .config import Config
from .exceptions import ValidationError


def validate_target_size(target_kb: int) -> None:
    """Validate an enhancement target size.

    Args:
        target_kb: Target size in kilobytes.

    Raises:
        ValidationError: If the target is not a non-negative integer.
    """
    if isinstance(target_kb, bool) or not isinstance(target_kb, int):
        raise ValidationError(
            f"Target size must be an integer, got {type(target_kb).__name__}"
        )
    if target_kb < 0:
        raise ValidationError(f"Target size must be non-negative, got {target_kb}")


def validate_upload(data: bytes) -> None:
    """Validate an uploaded file before it is decoded.

    Args:
        data: Raw uploaded bytes.

    Raises:
        ValidationError: If the upload is empty or exceeds the size limit.
    """
    if not data:
        raise ValidationError("Uploaded file is empty")
    if len(data) > Config.MAX_UPLOAD_BYTES:
        limit_mb = Config.MAX_UPLOAD_BYTES // (1024 * 1024)
        raise ValidationError(
            f"File exceeds maximum {limit_mb}MB, got {len(data)} bytes"
        )
