"""Scene module for scene description, storage and queries.

Components:
    description: Immutable host-side Material, Light, Sphere and Scene values
    intersection: Sphere field storage and nearest-hit scene query
    lights: Point light field storage
    manager: Uploads a Scene into the fields, serialization to dicts
    presets: Ready-made scenes

Only the field-free modules are imported here; intersection, lights and
manager declare Taichi fields and must be imported after ``ti.init``.
"""

from .description import Light, Material, Scene, Sphere
from .presets import create_demo_scene, create_single_sphere_scene

__all__ = [
    "Material",
    "Light",
    "Sphere",
    "Scene",
    "create_demo_scene",
    "create_single_sphere_scene",
]
