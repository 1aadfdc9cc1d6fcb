"""Pinhole camera for primary ray generation.

The camera sits at the world origin and looks down the -z axis with +y up.
The image plane is at unit distance; a horizontal field of view angle of
``fov`` spans the width scaled by the aspect ratio, so pixel (i, j) maps to

    x =  (2 (i + 0.5) / width  - 1) * tan(fov / 2) * width / height
    y = -(2 (j + 0.5) / height - 1) * tan(fov / 2)
    direction = normalize(x, y, -1)

Row j = 0 is the top of the image.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.camera.pinhole import RenderSettings, primary_ray
    >>> settings = RenderSettings()
    >>> # Inside a kernel:
    >>> # ray = primary_ray(i, j, width, height, settings.tan_half_fov)
"""

import math
from dataclasses import dataclass

import taichi as ti

from whitted.core.vector import Ray, make_ray, normalize, vec3

# Default field of view: 90 degrees
DEFAULT_FOV = math.pi / 2.0


@dataclass
class RenderSettings:
    """Configuration for a render.

    Attributes:
        fov: Field of view in radians, strictly between 0 and pi.
        shadows: Cast shadow rays toward each light.
        secondary_rays: Trace reflection and refraction rays. When disabled
            only local shading is computed and the reflective and refractive
            albedo weights are ignored.
    """

    fov: float = DEFAULT_FOV
    shadows: bool = True
    secondary_rays: bool = True

    def __post_init__(self) -> None:
        if not 0.0 < self.fov < math.pi:
            raise ValueError(f"Field of view must be in (0, pi) radians, got {self.fov}")

    @classmethod
    def from_degrees(cls, fov_degrees: float, **kwargs: bool) -> "RenderSettings":
        """Create settings from a field of view given in degrees."""
        return cls(fov=math.radians(fov_degrees), **kwargs)

    @property
    def tan_half_fov(self) -> float:
        return math.tan(self.fov / 2.0)


@ti.func
def primary_ray(
    pixel_i: ti.i32,
    pixel_j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    tan_half_fov: ti.f32,
) -> Ray:
    """Generate the ray through the center of pixel (i, j).

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        tan_half_fov: tan(fov / 2) for the configured field of view.

    Returns:
        A Ray from the camera origin with unit direction.
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    x = (2.0 * (ti.cast(pixel_i, ti.f32) + 0.5) / w - 1.0) * tan_half_fov * w / h
    y = -(2.0 * (ti.cast(pixel_j, ti.f32) + 0.5) / h - 1.0) * tan_half_fov
    direction = normalize(vec3(x, y, -1.0))
    return make_ray(vec3(0.0, 0.0, 0.0), direction)
