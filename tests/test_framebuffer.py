"""Tests for the host-side Framebuffer."""

import numpy as np
import pytest

from whitted.core.framebuffer import Framebuffer


def _gradient_image(width, height):
    image = np.zeros((height, width, 3), dtype=np.float32)
    for j in range(height):
        for i in range(width):
            image[j, i] = (i / width, j / height, 0.5)
    return image


class TestFramebuffer:
    """Tests for pixel layout and conversions."""

    def test_from_image_layout(self):
        """Pixel (i, j) lives at index i + j * width."""
        framebuffer = Framebuffer.from_image(_gradient_image(4, 3))
        assert framebuffer.width == 4
        assert framebuffer.height == 3
        assert framebuffer.pixels.shape == (12, 3)
        np.testing.assert_allclose(framebuffer.pixels[1 + 2 * 4], (0.25, 2.0 / 3.0, 0.5), rtol=1e-6)

    def test_pixel_lookup(self):
        framebuffer = Framebuffer.from_image(_gradient_image(4, 3))
        r, g, b = framebuffer.pixel(3, 1)
        assert abs(r - 0.75) < 1e-6
        assert abs(g - 1.0 / 3.0) < 1e-6
        assert abs(b - 0.5) < 1e-6

    @pytest.mark.parametrize("i, j", [(-1, 0), (4, 0), (0, 3), (0, -1)])
    def test_pixel_out_of_range(self, i, j):
        framebuffer = Framebuffer.from_image(_gradient_image(4, 3))
        with pytest.raises(IndexError):
            framebuffer.pixel(i, j)

    def test_to_image_round_trip(self):
        image = _gradient_image(5, 2)
        np.testing.assert_array_equal(Framebuffer.from_image(image).to_image(), image)

    def test_rejects_wrong_pixel_shape(self):
        with pytest.raises(ValueError):
            Framebuffer(width=2, height=2, pixels=np.zeros((3, 3), dtype=np.float32))
