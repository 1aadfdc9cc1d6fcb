"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with geometric ray-sphere intersection

Intersection routines are Taichi functions (@ti.func) following the pattern:
    hit, t = ray_intersect(ray_origin, ray_direction, sphere)
"""

from .sphere import Sphere, ray_intersect, sphere_normal

__all__ = [
    "Sphere",
    "ray_intersect",
    "sphere_normal",
]
