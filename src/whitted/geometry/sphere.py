"""Sphere primitive with geometric ray-sphere intersection.

The intersection uses the geometric formulation: project the sphere center
onto the ray, compare the squared distance from the center to the ray line
against the squared radius, and step back along the ray by the half chord.

    L   = center - origin
    tca = L . direction
    d2  = L . L - tca^2
    thc = sqrt(radius^2 - d2)
    t0, t1 = tca - thc, tca + thc

The ray direction must be unit length for ``t`` to be a distance.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.geometry.sphere import Sphere, ray_intersect
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -5), radius=1.0)
    >>> # Use ray_intersect within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from whitted.core.vector import normalize, vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.func
def ray_intersect(ray_origin: vec3, ray_direction: vec3, sphere: Sphere):
    """Find the nearest non-negative intersection of a ray with a sphere.

    A ray starting inside the sphere (or whose entry point lies behind the
    origin) reports the exit point. A tangent ray yields a single-point hit.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        sphere: The sphere to test against.

    Returns:
        A tuple of (hit, t) where:
        - hit: 1 if the ray intersects the sphere at t >= 0, 0 otherwise.
        - t: The ray parameter of the intersection. Only valid if hit == 1.
    """
    to_center = sphere.center - ray_origin
    tca = tm.dot(to_center, ray_direction)
    d2 = tm.dot(to_center, to_center) - tca * tca
    r2 = sphere.radius * sphere.radius

    did_hit = 0
    t = 0.0
    if d2 <= r2:
        thc = tm.sqrt(r2 - d2)
        t = tca - thc
        if t < 0.0:
            t = tca + thc
        if t >= 0.0:
            did_hit = 1

    return did_hit, t


@ti.func
def sphere_normal(point: vec3, sphere: Sphere) -> vec3:
    """Outward unit normal of the sphere at a surface point."""
    return normalize(point - sphere.center)
