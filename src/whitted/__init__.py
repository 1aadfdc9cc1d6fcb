"""Whitted-style ray tracer for spheres and point lights, built on Taichi.

This package renders still images of spheres lit by point lights with:
- Phong-style local shading (diffuse + specular + ambient)
- Hard shadows
- Mirror reflection and dielectric refraction, up to a fixed recursion depth
- Hue-preserving tone mapping

Subpackages:
    core: Vector utilities, shading model, ray caster and frame renderer
    geometry: Sphere primitive and ray-sphere intersection
    materials: Phong material storage
    scene: Scene description, field storage, scene queries and presets
    camera: Pinhole camera and render settings
    preview: Framebuffer export utilities

Modules that declare Taichi fields must be imported after ``ti.init``.
"""

__version__ = "0.1.0"
