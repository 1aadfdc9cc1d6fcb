"""Scene-level sphere storage and nearest-hit query.

The scene stores spheres in Taichi fields for efficient access inside
kernels. Each sphere carries the index of its material in the Phong material
registry.

The same query serves primary rays, reflection and refraction rays, and
shadow rays; shadow tests compare the returned hit distance against the
light distance themselves.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.scene.intersection import add_sphere, clear_scene, query_scene
    >>> clear_scene()
    >>> add_sphere((0.0, 0.0, -5.0), 1.0, material_id=0)
    >>> # Use query_scene within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from whitted.geometry.sphere import Sphere, ray_intersect, sphere_normal

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Hits at or beyond this distance are treated as misses
FAR_PLANE = 1000.0


@ti.dataclass
class SceneHit:
    """Record of a ray-scene intersection.

    Attributes:
        hit: 1 if the ray hit a sphere closer than FAR_PLANE, 0 otherwise.
        t: The ray parameter of the hit. Only valid if hit == 1.
        point: The 3D hit point. Only valid if hit == 1.
        normal: The outward unit normal of the sphere at the hit point,
            regardless of which side the ray came from. Only valid if hit == 1.
        material_id: Material index of the hit sphere, -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    material_id: ti.i32


# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_material_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all spheres from the scene.

    Resets the sphere count to zero. The field data is overwritten when new
    spheres are added.
    """
    num_spheres[None] = 0


def add_sphere(center: tuple[float, float, float], radius: float, material_id: int = 0) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (must be positive).
        material_id: The material index to associate with this sphere.

    Returns:
        The index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
        ValueError: If the radius is not positive.
    """
    if radius <= 0.0:
        raise ValueError(f"Sphere radius must be positive, got {radius}")

    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = [center[0], center[1], center[2]]
    sphere_radii[idx] = radius
    sphere_material_ids[idx] = material_id
    num_spheres[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


@ti.func
def _make_miss_record() -> SceneHit:
    return SceneHit(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        material_id=-1,
    )


@ti.func
def query_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHit:
    """Find the nearest sphere hit along a ray.

    Iterates through all spheres in order and keeps the smallest t below
    FAR_PLANE. On equal distances the earlier sphere wins.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.

    Returns:
        A SceneHit for the closest intersection, or a miss record.
    """
    nearest_t = FAR_PLANE
    nearest_idx = -1

    # Serial: the nearest hit is a reduction over all spheres
    ti.loop_config(serialize=True)
    for i in range(num_spheres[None]):
        sphere = Sphere(center=sphere_centers[i], radius=sphere_radii[i])
        did_hit, t = ray_intersect(ray_origin, ray_direction, sphere)
        if did_hit == 1 and t < nearest_t:
            nearest_t = t
            nearest_idx = i

    result = _make_miss_record()
    if nearest_idx >= 0:
        point = ray_origin + ray_direction * nearest_t
        sphere = Sphere(center=sphere_centers[nearest_idx], radius=sphere_radii[nearest_idx])
        result = SceneHit(
            hit=1,
            t=nearest_t,
            point=point,
            normal=sphere_normal(point, sphere),
            material_id=sphere_material_ids[nearest_idx],
        )

    return result
