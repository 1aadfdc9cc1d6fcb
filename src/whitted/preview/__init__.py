"""Preview module for output of rendered framebuffers.

Components:
    export: 8-bit conversion and image file export via Pillow
"""

from .export import framebuffer_to_uint8, save_image

__all__ = [
    "framebuffer_to_uint8",
    "save_image",
]
