"""Framebuffer returned by the renderer.

The framebuffer is a host-side NumPy array of RGB triples in row-major
order: pixel (i, j) lives at ``pixels[i + j * width]`` with row 0 at the top
of the image. After a render every channel is in [0, 1].
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt


@dataclass
class Framebuffer:
    """Rendered image owned by the caller.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Float32 array of shape (width * height, 3).
    """

    width: int
    height: int
    pixels: npt.NDArray[np.float32]

    def __post_init__(self) -> None:
        expected = (self.width * self.height, 3)
        if self.pixels.shape != expected:
            raise ValueError(
                f"Framebuffer pixels must have shape {expected}, got {self.pixels.shape}"
            )

    @classmethod
    def from_image(cls, image: npt.NDArray[np.float32]) -> Framebuffer:
        """Build a framebuffer from an image array of shape (H, W, 3)."""
        height, width, _ = image.shape
        pixels = np.ascontiguousarray(image, dtype=np.float32).reshape(width * height, 3)
        return cls(width=width, height=height, pixels=pixels)

    def pixel(self, i: int, j: int) -> tuple[float, float, float]:
        """Get the colour of pixel column i, row j (row 0 is the top)."""
        if not (0 <= i < self.width and 0 <= j < self.height):
            raise IndexError(f"Pixel ({i}, {j}) is outside {self.width}x{self.height}")
        r, g, b = self.pixels[i + j * self.width]
        return float(r), float(g), float(b)

    def to_image(self) -> npt.NDArray[np.float32]:
        """Get the framebuffer as an image array of shape (H, W, 3)."""
        return self.pixels.reshape(self.height, self.width, 3)
