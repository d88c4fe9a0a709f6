"""Tests for the resizer and aspect-ratio locking."""

import io

import numpy as np
import pytest
from PIL import Image

from backend.imagepro.enums import ImageFormat
from backend.imagepro.exceptions import DecodeError, EncodeError
from backend.imagepro.models import ImageDimensions, ResizeSettings
from backend.imagepro.processing import resize, resize_image, scale_to_height, scale_to_width


class TestResizeImage:
    def test_black_png_to_half_size(self, black_png_bytes):
        result = resize_image(
            black_png_bytes, ResizeSettings(width=50, height=50, maintain_aspect_ratio=True)
        )
        assert (result.width, result.height) == (50, 50)
        assert result.format is ImageFormat.PNG
        assert result.size > 0
        assert result.quality is None

    def test_output_bytes_match_reported_dimensions(self, noisy_jpeg_bytes):
        result = resize_image(noisy_jpeg_bytes, ResizeSettings(width=37, height=91))
        with Image.open(io.BytesIO(result.data)) as img:
            assert img.format == "PNG"
            assert img.size == (37, 91)

    def test_jpeg_source_still_outputs_png(self, noisy_jpeg_bytes):
        result = resize_image(noisy_jpeg_bytes, ResizeSettings(width=100, height=75))
        assert result.data.startswith(b"\x89PNG")
        assert result.mime_type == "image/png"

    def test_upscale(self, black_png_bytes):
        result = resize_image(black_png_bytes, ResizeSettings(width=300, height=120))
        assert (result.width, result.height) == (300, 120)

    def test_aspect_flag_is_not_enforced(self, black_png_bytes):
        result = resize_image(
            black_png_bytes, ResizeSettings(width=80, height=20, maintain_aspect_ratio=True)
        )
        assert (result.width, result.height) == (80, 20)

    def test_transparency_survives(self, transparent_png_bytes):
        result = resize_image(transparent_png_bytes, ResizeSettings(width=40, height=30))
        with Image.open(io.BytesIO(result.data)) as img:
            assert img.mode == "RGBA"
            assert img.getpixel((2, 15))[3] == 0

    def test_intermediate_raster_is_closed(self, black_png_bytes, monkeypatch):
        encoded_images = []

        def fake_encode(image, image_format, quality=1.0):
            encoded_images.append(image)
            return b"png"

        monkeypatch.setattr(resize, "encode_image", fake_encode)
        resize_image(black_png_bytes, ResizeSettings(width=20, height=20))

        assert len(encoded_images) == 1
        with pytest.raises(ValueError):
            encoded_images[0].getpixel((0, 0))

    def test_16bit_source_keeps_its_tone(self, to_bytes):
        samples = np.full((40, 40), 32768, dtype=np.uint16)
        data = to_bytes(Image.fromarray(samples), "PNG")

        result = resize_image(data, ResizeSettings(width=20, height=20))
        with Image.open(io.BytesIO(result.data)) as img:
            assert img.convert("RGB").getpixel((10, 10)) == (128, 128, 128)

    @pytest.mark.parametrize("width,height", [(0, 50), (50, 0), (-10, 20)])
    def test_zero_area_raises(self, black_png_bytes, width, height):
        with pytest.raises(EncodeError):
            resize_image(black_png_bytes, ResizeSettings(width=width, height=height))

    def test_unreadable_input_raises(self, garbage_bytes):
        with pytest.raises(DecodeError):
            resize_image(garbage_bytes, ResizeSettings(width=10, height=10))


class TestAspectRatioLocking:
    def test_scale_to_width(self):
        assert scale_to_width(ImageDimensions(1920, 1080), 960) == ImageDimensions(960, 540)

    def test_scale_to_height(self):
        assert scale_to_height(ImageDimensions(1920, 1080), 100) == ImageDimensions(178, 100)

    def test_halves_round_up(self):
        # 1 * 2.5 = 2.5 rounds to 3, not to the even 2
        assert scale_to_height(ImageDimensions(5, 2), 1) == ImageDimensions(3, 1)

    def test_never_collapses_to_zero(self):
        assert scale_to_width(ImageDimensions(1000, 10), 10) == ImageDimensions(10, 1)
