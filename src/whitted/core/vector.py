"""Ray data structure and vector utilities for Whitted-style ray tracing.

This module provides the Ray dataclass and the vector helpers shared by the
intersection, shading and integrator code: dot products, normalization,
mirror reflection and Snell refraction. All operations are Taichi functions
and run inside kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Type aliases for 3D and 4D vectors using Taichi's math module
vec3 = tm.vec3
vec4 = tm.vec4

# Distance secondary ray origins are pushed off a surface
SURFACE_OFFSET = 1e-3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Intersection and
            shading assume unit length; callers normalize after arithmetic.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t."""
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    return tm.dot(a, b)


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean norm of a vector."""
    return tm.sqrt(tm.dot(v, v))


@ti.func
def length_squared(v: vec3) -> ti.f32:
    return tm.dot(v, v)


@ti.func
def scale_to_length(v: vec3, target: ti.f32) -> vec3:
    """Rescale a vector so that its norm equals ``target``.

    Args:
        v: The input vector. Must not be zero-length.
        target: The desired length of the result.

    Returns:
        The vector pointing along v with norm ``target``.
    """
    norm = length(v)
    assert norm > 0.0, "cannot normalize a zero-length vector"
    return v * (target / norm)


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    Zero-length input is a caller error; it trips the assertion when Taichi
    runs in debug mode and yields non-finite components otherwise.
    """
    return scale_to_length(v, 1.0)


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    Computes ``I - N * 2 * (I . N)``. The normal should be unit length.

    Args:
        incident: The incoming direction vector.
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction vector.
    """
    return incident - normal * 2.0 * tm.dot(incident, normal)


@ti.func
def refract(incident: vec3, normal: vec3, refractive_index: ti.f32) -> vec3:
    """Refract an incident vector through a surface using Snell's law.

    The normal is the outward normal of the surface. When the incident
    direction and the normal point the same way the ray is leaving the
    medium: the indices are swapped and the normal is flipped.

    Args:
        incident: The incoming direction vector (should be normalized).
        normal: The outward surface normal (should be normalized).
        refractive_index: Index of refraction of the material; the outside
            medium is vacuum (index 1).

    Returns:
        The refracted direction (not normalized), or the zero vector on
        total internal reflection.
    """
    cosi = tm.clamp(tm.dot(incident, normal), -1.0, 1.0)
    etai = 1.0
    etat = refractive_index
    n = normal
    # Grazing incidence (I . N == 0) takes the leaving branch
    if cosi < 0.0:
        # Ray is outside the surface, entering the medium
        cosi = -cosi
    else:
        # Ray is inside the medium, leaving it
        etai = refractive_index
        etat = 1.0
        n = -normal
    eta = etai / etat
    k = 1.0 - eta * eta * (1.0 - cosi * cosi)
    result = vec3(0.0, 0.0, 0.0)
    if k >= 0.0:
        result = incident * eta + n * (eta * cosi - tm.sqrt(k))
    return result


@ti.func
def offset_origin(point: vec3, normal: vec3, direction: vec3) -> vec3:
    """Offset a secondary ray origin to avoid self-intersection.

    Pushes the point along the normal toward the side of the surface the
    new ray travels into.

    Args:
        point: The intersection point.
        normal: The outward surface normal.
        direction: The direction of the secondary ray.

    Returns:
        The offset origin point.
    """
    offset = normal * SURFACE_OFFSET
    if tm.dot(direction, normal) < 0.0:
        offset = -offset
    return point + offset
