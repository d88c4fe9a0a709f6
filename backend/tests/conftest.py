"""Shared pytest fixtures for ImagePro tests."""

from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image


def encode(img: Image.Image, fmt: str, **params) -> bytes:
    """Save a PIL image to bytes in the given Pillow format."""
    buffer = io.BytesIO()
    img.save(buffer, format=fmt, **params)
    return buffer.getvalue()


@pytest.fixture
def black_png_bytes() -> bytes:
    """100x100 solid black PNG."""
    return encode(Image.new("RGB", (100, 100), (0, 0, 0)), "PNG")


@pytest.fixture
def noisy_image() -> Image.Image:
    """200x150 RGB image of random pixels (hard to compress)."""
    rng = np.random.default_rng(1234)
    arr = rng.integers(0, 256, size=(150, 200, 3), dtype=np.uint8)
    return Image.fromarray(arr)


@pytest.fixture
def noisy_jpeg_bytes(noisy_image) -> bytes:
    return encode(noisy_image, "JPEG", quality=95)


@pytest.fixture
def transparent_png_bytes() -> bytes:
    """80x60 RGBA PNG with a half-transparent left side."""
    img = Image.new("RGBA", (80, 60), (10, 200, 30, 255))
    img.paste((10, 200, 30, 0), (0, 0, 40, 60))
    return encode(img, "PNG")


@pytest.fixture
def flat_png_bytes() -> bytes:
    """Tiny flat-colour PNG that no quality setting can inflate much."""
    return encode(Image.new("RGB", (8, 8), (120, 120, 120)), "PNG")


@pytest.fixture
def garbage_bytes() -> bytes:
    return b"this is definitely not an image" * 10


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def to_bytes():
    """Factory fixture: ``to_bytes(img, "PNG", **params) -> bytes``."""
    return encode
