"""Ready-made scenes.

The demo scene places four spheres in front of the camera: an ivory sphere,
a glass sphere, a red rubber sphere and a large mirror, lit by three point
lights. It exercises every optical feature of the renderer: diffuse and
specular shading, hard shadows, reflection and refraction.

Example:
    >>> from whitted.scene.presets import create_demo_scene
    >>> scene = create_demo_scene()
    >>> len(scene.spheres), len(scene.lights)
    (4, 3)
"""

from whitted.scene.description import Light, Material, Scene, Sphere

# =============================================================================
# Materials
# =============================================================================

IVORY = Material(
    refractive_index=1.0,
    albedo=(0.6, 0.3, 0.1, 0.0),
    diffuse_color=(0.4, 0.4, 0.3),
    specular_exponent=50.0,
)

GLASS = Material(
    refractive_index=1.5,
    albedo=(0.0, 0.5, 0.1, 0.8),
    diffuse_color=(0.6, 0.7, 0.8),
    specular_exponent=125.0,
)

RED_RUBBER = Material(
    refractive_index=1.0,
    albedo=(0.9, 0.1, 0.0, 0.0),
    diffuse_color=(0.3, 0.1, 0.1),
    specular_exponent=10.0,
)

MIRROR = Material(
    refractive_index=1.0,
    albedo=(0.0, 10.0, 0.8, 0.0),
    diffuse_color=(1.0, 1.0, 1.0),
    specular_exponent=1425.0,
)


def create_demo_scene() -> Scene:
    """Create the four-sphere, three-light demo scene."""
    spheres = [
        Sphere(center=(-3.0, 0.0, -16.0), radius=2.0, material=IVORY),
        Sphere(center=(-1.0, -1.5, -12.0), radius=2.0, material=GLASS),
        Sphere(center=(1.5, -0.5, -18.0), radius=3.0, material=RED_RUBBER),
        Sphere(center=(7.0, 5.0, -18.0), radius=4.0, material=MIRROR),
    ]
    lights = [
        Light(position=(-20.0, 20.0, 20.0), intensity=1.5),
        Light(position=(30.0, 50.0, -25.0), intensity=1.8),
        Light(position=(30.0, 20.0, 30.0), intensity=1.7),
    ]
    return Scene(spheres=spheres, lights=lights)


def create_single_sphere_scene() -> Scene:
    """Create a single unlit diffuse sphere, the simplest renderable scene."""
    sphere = Sphere(
        center=(3.0, 0.0, -16.0),
        radius=4.0,
        material=Material.diffuse_only((0.4, 0.4, 0.3)),
    )
    return Scene(spheres=[sphere], lights=[])
