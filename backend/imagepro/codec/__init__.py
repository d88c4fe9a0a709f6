"""Decode/encode plumbing for ImagePro."""

from .decoder import decode_image, probe_dimensions
from .encoder import encode_image

__all__ = ["decode_image", "encode_image", "probe_dimensions"]
