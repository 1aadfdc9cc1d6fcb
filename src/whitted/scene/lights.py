"""Point light storage.

Lights are kept in Taichi fields so the shading model can loop over them
inside kernels. Every light contributes independently; occlusion is decided
per light by a shadow ray.
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.dataclass
class PointLight:
    """A point light as seen inside kernels.

    Attributes:
        position: World-space position.
        intensity: Scalar intensity (positive).
    """

    position: vec3
    intensity: ti.f32


# Maximum number of point lights in the scene
MAX_LIGHTS = 64

light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def clear_lights() -> None:
    """Remove all lights from the scene."""
    num_lights[None] = 0


def add_point_light(position: tuple[float, float, float], intensity: float) -> int:
    """Add a point light to the scene.

    Args:
        position: World-space position of the light.
        intensity: Scalar intensity (must be positive).

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
        ValueError: If the intensity is not positive.
    """
    if intensity <= 0.0:
        raise ValueError(f"Light intensity must be positive, got {intensity}")

    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_positions[idx] = [position[0], position[1], position[2]]
    light_intensities[idx] = intensity
    num_lights[None] = idx + 1
    return idx


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


@ti.func
def get_point_light(light_idx: ti.i32) -> PointLight:
    return PointLight(position=light_positions[light_idx], intensity=light_intensities[light_idx])
