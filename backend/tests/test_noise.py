"""Tests for noise padding."""

import numpy as np
import pytest
from PIL import Image

from backend.imagepro.processing import add_noise_padding, perturb_pixels


@pytest.fixture
def rgba_array() -> np.ndarray:
    """Random RGBA pixels including the 0/255 extremes."""
    rng = np.random.default_rng(7)
    arr = rng.integers(0, 256, size=(40, 50, 4), dtype=np.uint8)
    arr[0, :, :3] = 0
    arr[1, :, :3] = 255
    return arr


class TestPerturbPixels:
    def test_each_channel_moves_at_most_one(self, rgba_array, rng):
        out = perturb_pixels(rgba_array, rng)
        diff = np.abs(out.astype(np.int16) - rgba_array.astype(np.int16))
        assert diff.max() <= 1

    def test_values_stay_in_byte_range(self, rgba_array, rng):
        out = perturb_pixels(rgba_array, rng)
        assert out.dtype == np.uint8
        assert out.min() >= 0
        assert out.max() <= 255

    def test_alpha_is_untouched(self, rgba_array, rng):
        out = perturb_pixels(rgba_array, rng)
        np.testing.assert_array_equal(out[:, :, 3], rgba_array[:, :, 3])

    def test_some_pixels_change(self, rgba_array, rng):
        out = perturb_pixels(rgba_array, rng)
        assert not np.array_equal(out[:, :, :3], rgba_array[:, :, :3])

    def test_channels_are_perturbed_independently(self, rng):
        flat = np.full((64, 64, 4), 128, dtype=np.uint8)
        out = perturb_pixels(flat, rng)
        same_rgb = (out[:, :, 0] == out[:, :, 1]) & (out[:, :, 1] == out[:, :, 2])
        assert not same_rgb.all()

    def test_input_is_not_modified(self, rgba_array, rng):
        before = rgba_array.copy()
        perturb_pixels(rgba_array, rng)
        np.testing.assert_array_equal(rgba_array, before)

    def test_same_seed_same_output(self, rgba_array):
        a = perturb_pixels(rgba_array, np.random.default_rng(99))
        b = perturb_pixels(rgba_array, np.random.default_rng(99))
        np.testing.assert_array_equal(a, b)

    def test_rejects_non_rgba_shape(self, rng):
        with pytest.raises(ValueError, match="RGBA"):
            perturb_pixels(np.zeros((10, 10, 3), dtype=np.uint8), rng)


class TestAddNoisePadding:
    def test_returns_rgba_copy_of_same_size(self, rng):
        img = Image.new("RGBA", (30, 20), (100, 100, 100, 200))
        padded = add_noise_padding(img, rng)

        assert padded is not img
        assert padded.size == (30, 20)
        assert padded.mode == "RGBA"
        assert img.getpixel((0, 0)) == (100, 100, 100, 200)

    def test_converts_rgb_input(self, rng):
        padded = add_noise_padding(Image.new("RGB", (10, 10), (5, 5, 5)), rng)
        assert padded.mode == "RGBA"
        assert np.asarray(padded)[:, :, 3].min() == 255

    def test_works_without_explicit_rng(self):
        padded = add_noise_padding(Image.new("RGBA", (10, 10), (50, 50, 50, 255)))
        diff = np.abs(np.asarray(padded).astype(np.int16) - 50)
        assert diff[:, :, :3].max() <= 1
