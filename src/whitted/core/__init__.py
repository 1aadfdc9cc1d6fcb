"""Core rendering module.

Components:
    vector: Ray data structure and vector utilities
    shading: Local illumination with hard shadows
    integrator: Recursive ray caster, frame renderer and tone mapping
    framebuffer: Host-side framebuffer returned by the renderer

All compute-intensive operations use Taichi kernels.
"""

from .framebuffer import Framebuffer
from .vector import (
    SURFACE_OFFSET,
    Ray,
    dot,
    length,
    length_squared,
    make_ray,
    normalize,
    offset_origin,
    ray_at,
    reflect,
    refract,
    scale_to_length,
    vec3,
    vec4,
)

# Note: shading and integrator are NOT imported here because they declare
# Taichi fields (through the scene storage) and must be imported after ti.init.
# Import directly from whitted.core.integrator when needed.

__all__ = [
    "Framebuffer",
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "vec4",
    "dot",
    "length",
    "length_squared",
    "normalize",
    "scale_to_length",
    "reflect",
    "refract",
    "offset_origin",
    "SURFACE_OFFSET",
]
