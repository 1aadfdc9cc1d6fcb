"""Image export utilities for rendered framebuffers.

The renderer hands back tone-mapped linear colours in [0, 1]. These helpers
convert them to 8-bit and write them with Pillow; the output format follows
the file extension (PNG, JPEG, ...).

Example:
    >>> from whitted.core.integrator import render
    >>> from whitted.preview.export import save_image
    >>> from whitted.scene.presets import create_demo_scene
    >>>
    >>> framebuffer = render(create_demo_scene(), 1024, 768)
    >>> save_image(framebuffer, "out.png")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from whitted.core.framebuffer import Framebuffer


def framebuffer_to_uint8(framebuffer: Framebuffer) -> npt.NDArray[np.uint8]:
    """Convert a framebuffer to an 8-bit image array.

    Channels are clamped to [0, 1] and scaled by 255 with truncation.

    Args:
        framebuffer: The rendered framebuffer.

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    image = np.clip(framebuffer.to_image(), 0.0, 1.0)
    return (image * 255).astype(np.uint8)


def save_image(framebuffer: Framebuffer, filepath: str) -> None:
    """Save a framebuffer as an 8-bit RGB image file.

    Args:
        framebuffer: The rendered framebuffer.
        filepath: Output file path; the extension selects the format.
    """
    pil_image = PILImage.fromarray(framebuffer_to_uint8(framebuffer))
    pil_image.save(filepath)
