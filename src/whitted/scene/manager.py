"""Scene manager uploading scene descriptions into Taichi fields.

The SceneManager takes a host-side ``Scene`` (spheres, point lights and the
materials they reference) and writes it into the field storage used by the
kernels. Identical materials are registered once and shared by every sphere
that uses them.

The manager also converts scenes to and from plain dictionaries, which is
convenient for storing scenes as JSON.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.scene.manager import SceneManager
    >>> from whitted.scene.presets import create_demo_scene
    >>> manager = SceneManager()
    >>> manager.load(create_demo_scene())
    >>> manager.get_sphere_count()
    4
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from whitted.materials.phong import add_phong_material, clear_phong_materials, get_material_count
from whitted.scene.description import Light, Material, Scene, Sphere
from whitted.scene.intersection import add_sphere, clear_scene, get_sphere_count
from whitted.scene.lights import add_point_light, clear_lights, get_light_count


@dataclass
class MaterialInfo:
    """Information about a registered material.

    Attributes:
        material_id: Index of the material in the field storage.
        material: The material value.
    """

    material_id: int
    material: Material


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: The index in the sphere storage arrays.
        center: The center of the sphere.
        radius: The radius of the sphere.
        material_id: The material index assigned to the sphere.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    material_id: int


@dataclass
class LightInfo:
    """Information about a point light in the scene."""

    light_index: int
    position: tuple[float, float, float]
    intensity: float


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        materials: List of material configurations.
        spheres: List of sphere configurations referencing materials by index.
        lights: List of light configurations.
    """

    materials: list[dict[str, Any]] = field(default_factory=list)
    spheres: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)


class SceneManager:
    """Uploads scenes into the field storage and tracks what was uploaded.

    Only one scene lives in the fields at a time; loading a scene replaces
    whatever was there before.

    Attributes:
        materials: MaterialInfo for all registered materials.
        spheres: SphereInfo for all spheres in the scene.
        lights: LightInfo for all lights in the scene.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.materials: list[MaterialInfo] = []
        self.spheres: list[SphereInfo] = []
        self.lights: list[LightInfo] = []
        self._material_ids: dict[Material, int] = {}
        self._clear_all()

    def _clear_all(self) -> None:
        """Clear all scene data including Taichi fields."""
        clear_scene()
        clear_phong_materials()
        clear_lights()
        self.materials.clear()
        self.spheres.clear()
        self.lights.clear()
        self._material_ids.clear()

    def clear(self) -> None:
        """Clear the entire scene (spheres, materials and lights)."""
        self._clear_all()

    # =========================================================================
    # Scene Upload
    # =========================================================================

    def add_material(self, material: Material) -> int:
        """Register a material, reusing the id of an identical one.

        Args:
            material: The material to register.

        Returns:
            The material index.

        Raises:
            RuntimeError: If the maximum number of materials is exceeded.
        """
        if material in self._material_ids:
            return self._material_ids[material]

        material_id = add_phong_material(
            material.refractive_index,
            material.albedo,
            material.diffuse_color,
            material.specular_exponent,
        )
        self._material_ids[material] = material_id
        self.materials.append(MaterialInfo(material_id=material_id, material=material))
        return material_id

    def add_sphere(self, sphere: Sphere) -> int:
        """Add a sphere and its material to the scene.

        Returns:
            The index of the added sphere.

        Raises:
            RuntimeError: If the maximum number of spheres or materials is exceeded.
        """
        material_id = self.add_material(sphere.material)
        sphere_index = add_sphere(sphere.center, sphere.radius, material_id)
        self.spheres.append(
            SphereInfo(
                sphere_index=sphere_index,
                center=sphere.center,
                radius=sphere.radius,
                material_id=material_id,
            )
        )
        return sphere_index

    def add_light(self, light: Light) -> int:
        """Add a point light to the scene.

        Returns:
            The index of the added light.

        Raises:
            RuntimeError: If the maximum number of lights is exceeded.
        """
        light_index = add_point_light(light.position, light.intensity)
        self.lights.append(
            LightInfo(light_index=light_index, position=light.position, intensity=light.intensity)
        )
        return light_index

    def load(self, scene: Scene) -> None:
        """Replace the current scene with ``scene``.

        Raises:
            RuntimeError: If the scene exceeds any storage capacity. The
                fields are left cleared in that case.
        """
        self.clear()
        try:
            for sphere in scene.spheres:
                self.add_sphere(sphere)
            for light in scene.lights:
                self.add_light(light)
        except RuntimeError:
            self.clear()
            raise

    # =========================================================================
    # Scene Queries
    # =========================================================================

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return get_sphere_count()

    def get_material_count(self) -> int:
        """Get the number of distinct materials in the scene."""
        return get_material_count()

    def get_light_count(self) -> int:
        """Get the number of lights in the scene."""
        return get_light_count()

    def to_scene(self) -> Scene:
        """Rebuild the host-side Scene from what was uploaded."""
        by_id = {info.material_id: info.material for info in self.materials}
        spheres = [Sphere(s.center, s.radius, by_id[s.material_id]) for s in self.spheres]
        lights = [Light(light.position, light.intensity) for light in self.lights]
        return Scene(spheres=spheres, lights=lights)

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig()

        for info in self.materials:
            mat = info.material
            config.materials.append(
                {
                    "refractive_index": mat.refractive_index,
                    "albedo": list(mat.albedo),
                    "diffuse_color": list(mat.diffuse_color),
                    "specular_exponent": mat.specular_exponent,
                }
            )

        for sphere in self.spheres:
            config.spheres.append(
                {
                    "center": list(sphere.center),
                    "radius": sphere.radius,
                    "material_id": sphere.material_id,
                }
            )

        for light in self.lights:
            config.lights.append(
                {
                    "position": list(light.position),
                    "intensity": light.intensity,
                }
            )

        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and loads the configuration.

        Args:
            config: The scene configuration to load.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        try:
            materials = [
                Material(
                    refractive_index=mat_config.get("refractive_index", 1.0),
                    albedo=mat_config.get("albedo", [1.0, 0.0, 0.0, 0.0]),
                    diffuse_color=mat_config["diffuse_color"],
                    specular_exponent=mat_config.get("specular_exponent", 0.0),
                )
                for mat_config in config.materials
            ]
        except KeyError as e:
            raise ValueError(f"Material configuration is missing {e}") from e

        spheres = []
        for sphere_config in config.spheres:
            material_id = sphere_config.get("material_id", 0)
            if not 0 <= material_id < len(materials):
                raise ValueError(f"Invalid material_id: {material_id}")
            spheres.append(
                Sphere(
                    center=sphere_config.get("center", [0.0, 0.0, 0.0]),
                    radius=sphere_config.get("radius", 1.0),
                    material=materials[material_id],
                )
            )

        lights = [
            Light(
                position=light_config.get("position", [0.0, 0.0, 0.0]),
                intensity=light_config.get("intensity", 1.0),
            )
            for light_config in config.lights
        ]

        self.load(Scene(spheres=spheres, lights=lights))

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {
            "materials": config.materials,
            "spheres": config.spheres,
            "lights": config.lights,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with 'materials', 'spheres', 'lights' keys.
        """
        config = SceneConfig(
            materials=data.get("materials", []),
            spheres=data.get("spheres", []),
            lights=data.get("lights", []),
        )
        self.from_config(config)


def load_scene(scene: Scene) -> SceneManager:
    """Upload ``scene`` into the field storage.

    Returns:
        The SceneManager tracking the uploaded scene.
    """
    manager = SceneManager()
    manager.load(scene)
    return manager
