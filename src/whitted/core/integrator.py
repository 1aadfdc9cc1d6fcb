"""Whitted-style recursive ray caster and frame renderer.

This module implements the rendering kernels: one primary ray per pixel,
local Phong shading with hard shadows at every hit, and a mirror reflection
ray plus a refraction ray spawned from every hit up to a fixed depth.

For a hit at recursion depth d the colour is

    local + reflect_color * albedo.z + refract_color * albedo.w

where both secondary colours are evaluated at depth d + 1. Rays deeper than
MAX_DEPTH and rays that escape the scene return BACKGROUND_COLOR. When Snell's
law admits no transmitted ray (total internal reflection) the reflection
colour stands in for the refraction colour.

Taichi functions cannot recurse, so the recursion runs on a small explicit
work stack. Because the colour is linear in the secondary colours, each
stack entry carries the product of the albedo weights from the primary ray
down to it, and every visited node adds its weighted local colour to a
single accumulator.

Key features:
    - Pixel-parallel frame kernel (no cross-pixel dependencies)
    - Hue-preserving tone mapping before display clamping
    - Single-ray entry point for testing in isolation

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.core.integrator import render
    >>> from whitted.scene.presets import create_demo_scene
    >>>
    >>> framebuffer = render(create_demo_scene(), 1024, 768)
    >>> framebuffer.pixel(512, 384)
"""

import math
from typing import Optional

import numpy as np
import taichi as ti
import taichi.math as tm

from whitted.camera.pinhole import RenderSettings, primary_ray
from whitted.core.framebuffer import Framebuffer
from whitted.core.shading import shade_local
from whitted.core.vector import length, normalize, offset_origin, reflect, refract
from whitted.materials.phong import get_phong_material
from whitted.scene.description import Scene
from whitted.scene.intersection import query_scene
from whitted.scene.manager import load_scene

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Rendering Constants
# =============================================================================

# Rays cast at a depth greater than this return the background
MAX_DEPTH = 5

# Colour of rays that escape the scene
BACKGROUND_COLOR = vec3(0.2, 0.7, 0.8)

# Refraction vectors no longer than this signal total internal reflection
TIR_THRESHOLD = 0.01

# Capacity of the per-ray work stack. Depth-first traversal keeps at most one
# pending sibling per level plus the two children of the deepest node.
STACK_SIZE = MAX_DEPTH + 3

# =============================================================================
# Render Target (Framebuffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

_framebuffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))


def _check_dimensions(width: int, height: int) -> None:
    """Validate image dimensions.

    Raises:
        ValueError: If a dimension is not positive or exceeds the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )


# =============================================================================
# Ray Casting Core
# =============================================================================


@ti.func
def trace_ray(
    origin: vec3,
    direction: vec3,
    depth: ti.i32,
    shadows: ti.i32,
    secondary_rays: ti.i32,
) -> vec3:
    """Compute the colour seen along a ray.

    Args:
        origin: The ray origin.
        direction: The unit ray direction.
        depth: Recursion depth of this ray (0 for primary rays). Must not be
            negative.
        shadows: 1 to cast shadow rays during local shading.
        secondary_rays: 1 to spawn reflection and refraction rays.

    Returns:
        The untone-mapped RGB colour.
    """
    color = vec3(0.0, 0.0, 0.0)

    stack_origins = ti.Matrix.zero(ti.f32, STACK_SIZE, 3)
    stack_directions = ti.Matrix.zero(ti.f32, STACK_SIZE, 3)
    stack_weights = ti.Vector.zero(ti.f32, STACK_SIZE)
    stack_depths = ti.Vector.zero(ti.i32, STACK_SIZE)

    for c in ti.static(range(3)):
        stack_origins[0, c] = origin[c]
        stack_directions[0, c] = direction[c]
    stack_weights[0] = 1.0
    stack_depths[0] = depth
    size = 1

    while size > 0:
        # Pop the top entry
        size -= 1
        ray_origin = vec3(0.0, 0.0, 0.0)
        ray_direction = vec3(0.0, 0.0, 0.0)
        weight = 0.0
        ray_depth = 0
        for k in ti.static(range(STACK_SIZE)):
            if k == size:
                ray_origin = vec3(stack_origins[k, 0], stack_origins[k, 1], stack_origins[k, 2])
                ray_direction = vec3(
                    stack_directions[k, 0], stack_directions[k, 1], stack_directions[k, 2]
                )
                weight = stack_weights[k]
                ray_depth = stack_depths[k]

        if ray_depth > MAX_DEPTH:
            color += weight * BACKGROUND_COLOR
        else:
            hit = query_scene(ray_origin, ray_direction)
            if hit.hit == 0:
                color += weight * BACKGROUND_COLOR
            else:
                material = get_phong_material(hit.material_id)
                color += weight * shade_local(
                    hit.point, hit.normal, ray_direction, material, shadows
                )

                if secondary_rays == 1:
                    reflect_direction = normalize(reflect(ray_direction, hit.normal))
                    reflect_origin = offset_origin(hit.point, hit.normal, reflect_direction)
                    reflect_weight = weight * material.albedo[2]

                    refract_direction = refract(
                        ray_direction, hit.normal, material.refractive_index
                    )
                    refract_origin = reflect_origin
                    refract_weight = weight * material.albedo[3]
                    if length(refract_direction) > TIR_THRESHOLD:
                        refract_direction = normalize(refract_direction)
                        refract_origin = offset_origin(hit.point, hit.normal, refract_direction)
                    else:
                        # Total internal reflection: the reflected colour is
                        # used in place of the refracted one
                        reflect_weight += refract_weight
                        refract_weight = 0.0

                    # Push both children; zero-weight children add nothing
                    for slot in ti.static(range(2)):
                        child_origin = reflect_origin
                        child_direction = reflect_direction
                        child_weight = reflect_weight
                        if ti.static(slot == 1):
                            child_origin = refract_origin
                            child_direction = refract_direction
                            child_weight = refract_weight
                        if child_weight != 0.0:
                            for k in ti.static(range(STACK_SIZE)):
                                if k == size:
                                    for c in ti.static(range(3)):
                                        stack_origins[k, c] = child_origin[c]
                                        stack_directions[k, c] = child_direction[c]
                                    stack_weights[k] = child_weight
                                    stack_depths[k] = ray_depth + 1
                            size += 1

    return color


@ti.func
def tone_map(color: vec3) -> vec3:
    """Compress and clamp a colour for display.

    If the brightest channel exceeds 1 all channels are divided by it, which
    keeps the hue; the result is then clamped to [0, 1].
    """
    max_channel = tm.max(color[0], tm.max(color[1], color[2]))
    result = color
    if max_channel > 1.0:
        result = color * (1.0 / max_channel)
    return tm.clamp(result, 0.0, 1.0)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_frame(
    width: ti.i32,
    height: ti.i32,
    tan_half_fov: ti.f32,
    shadows: ti.i32,
    secondary_rays: ti.i32,
):
    """Cast one primary ray per pixel into the framebuffer."""
    for i, j in ti.ndrange(width, height):
        ray = primary_ray(i, j, width, height, tan_half_fov)
        _framebuffer[i, j] = trace_ray(ray.origin, ray.direction, 0, shadows, secondary_rays)


@ti.kernel
def _tone_map_frame(width: ti.i32, height: ti.i32):
    """Tone map every pixel of the framebuffer in place."""
    for i, j in ti.ndrange(width, height):
        _framebuffer[i, j] = tone_map(_framebuffer[i, j])


@ti.kernel
def _cast_single_ray(
    origin: vec3,
    direction: vec3,
    depth: ti.i32,
    shadows: ti.i32,
    secondary_rays: ti.i32,
) -> vec3:
    """Trace a single ray; used for testing and debugging."""
    return trace_ray(origin, direction, depth, shadows, secondary_rays)


def _framebuffer_numpy(width: int, height: int) -> Framebuffer:
    """Copy the active region of the render target into a Framebuffer."""
    # Field layout is (width, height, 3); images are (height, width, 3)
    full_image = _framebuffer.to_numpy()
    image = np.transpose(full_image[:width, :height, :], (1, 0, 2))
    return Framebuffer.from_image(image.astype(np.float32))


# =============================================================================
# Public Rendering API
# =============================================================================


def cast_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    scene: Scene,
    depth: int = 0,
    settings: Optional[RenderSettings] = None,
) -> tuple[float, float, float]:
    """Compute the colour seen along a single ray.

    The scene is uploaded first, replacing whatever scene was loaded. The
    returned colour is not tone mapped.

    Args:
        origin: The ray origin.
        direction: The ray direction (unit length).
        scene: The scene to trace against.
        depth: Recursion depth to start at. Any depth above MAX_DEPTH yields
            the background colour.
        settings: Shadow and secondary ray switches; the field of view is
            unused here.

    Returns:
        Tuple of (R, G, B) colour values.

    Raises:
        ValueError: If depth is negative or direction has zero length.
    """
    if depth < 0:
        raise ValueError(f"Ray depth must be non-negative, got {depth}")
    if math.hypot(*direction) == 0.0:
        raise ValueError("Ray direction must not be zero-length")
    settings = settings or RenderSettings()

    load_scene(scene)
    color = _cast_single_ray(
        vec3(*origin),
        vec3(*direction),
        depth,
        int(settings.shadows),
        int(settings.secondary_rays),
    )
    return (float(color[0]), float(color[1]), float(color[2]))


def render(
    scene: Scene,
    width: int,
    height: int,
    settings: Optional[RenderSettings] = None,
) -> Framebuffer:
    """Render a scene into a new framebuffer.

    Uploads the scene, casts one primary ray per pixel from a pinhole camera
    at the origin looking down -z, and tone maps the result.

    Args:
        scene: The scene to render.
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).
        settings: Field of view and feature switches. Defaults to a 90 degree
            field of view with shadows and secondary rays enabled.

    Returns:
        The tone-mapped framebuffer, owned by the caller.

    Raises:
        ValueError: If the dimensions are invalid.
        RuntimeError: If the scene exceeds the storage capacity.
    """
    _check_dimensions(width, height)
    settings = settings or RenderSettings()

    load_scene(scene)
    _render_frame(
        width,
        height,
        settings.tan_half_fov,
        int(settings.shadows),
        int(settings.secondary_rays),
    )
    _tone_map_frame(width, height)

    return _framebuffer_numpy(width, height)
