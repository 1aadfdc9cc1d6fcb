"""Host-side scene description.

These immutable dataclasses are what scene-building code hands to the
renderer. They validate themselves on construction, so a malformed scene is
rejected before anything is uploaded to Taichi fields.

Example:
    >>> from whitted.scene.description import Light, Material, Scene, Sphere
    >>> ivory = Material(1.0, (0.6, 0.3, 0.1, 0.0), (0.4, 0.4, 0.3), 50.0)
    >>> scene = Scene(
    ...     spheres=[Sphere((-3.0, 0.0, -16.0), 2.0, ivory)],
    ...     lights=[Light((-20.0, 20.0, 20.0), 1.5)],
    ... )
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

Vector3 = tuple[float, float, float]
Vector4 = tuple[float, float, float, float]


def _as_vector(values: Sequence[float], size: int, name: str) -> tuple[float, ...]:
    """Convert a sequence to a tuple of finite floats of the given size.

    Raises:
        ValueError: If the sequence has the wrong length or a non-finite entry.
    """
    result = tuple(float(v) for v in values)
    if len(result) != size:
        raise ValueError(f"{name} must have {size} components, got {len(result)}")
    if not all(math.isfinite(v) for v in result):
        raise ValueError(f"{name} must be finite, got {result}")
    return result


@dataclass(frozen=True)
class Material:
    """Phong material with reflective and refractive weights.

    Attributes:
        refractive_index: Index of refraction (> 0). 1.0 means the material
            does not bend transmitted rays.
        albedo: Weights of the (diffuse, specular, reflective, refractive)
            contributions. Independent linear coefficients, need not sum to 1.
        diffuse_color: Base RGB colour scaled by the diffuse term.
        specular_exponent: Phong exponent (>= 0) controlling highlight size.
    """

    refractive_index: float
    albedo: Vector4
    diffuse_color: Vector3
    specular_exponent: float

    def __post_init__(self) -> None:
        if not self.refractive_index > 0.0:
            raise ValueError(f"refractive_index must be positive, got {self.refractive_index}")
        if not self.specular_exponent >= 0.0:
            raise ValueError(
                f"specular_exponent must be non-negative, got {self.specular_exponent}"
            )
        object.__setattr__(self, "refractive_index", float(self.refractive_index))
        object.__setattr__(self, "specular_exponent", float(self.specular_exponent))
        object.__setattr__(self, "albedo", _as_vector(self.albedo, 4, "albedo"))
        object.__setattr__(
            self, "diffuse_color", _as_vector(self.diffuse_color, 3, "diffuse_color")
        )

    @classmethod
    def diffuse_only(cls, color: Sequence[float]) -> Material:
        """Create a purely diffuse material of the given colour."""
        return cls(1.0, (1.0, 0.0, 0.0, 0.0), tuple(color), 0.0)


@dataclass(frozen=True)
class Light:
    """Point light.

    Attributes:
        position: World-space position of the light.
        intensity: Positive scalar intensity, in whatever units the scene uses.
    """

    position: Vector3
    intensity: float

    def __post_init__(self) -> None:
        if not self.intensity > 0.0:
            raise ValueError(f"Light intensity must be positive, got {self.intensity}")
        object.__setattr__(self, "position", _as_vector(self.position, 3, "position"))
        object.__setattr__(self, "intensity", float(self.intensity))


@dataclass(frozen=True)
class Sphere:
    """Sphere with its material.

    Attributes:
        center: World-space center.
        radius: Radius (> 0).
        material: Material shared by value with any other sphere using it.
    """

    center: Vector3
    radius: float
    material: Material

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        if not isinstance(self.material, Material):
            raise ValueError(f"Sphere material must be a Material, got {type(self.material)}")
        object.__setattr__(self, "center", _as_vector(self.center, 3, "center"))
        object.__setattr__(self, "radius", float(self.radius))


@dataclass(frozen=True)
class Scene:
    """Ordered spheres and ordered point lights.

    Read-only for the duration of a render.
    """

    spheres: tuple[Sphere, ...] = field(default_factory=tuple)
    lights: tuple[Light, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "spheres", tuple(self.spheres))
        object.__setattr__(self, "lights", tuple(self.lights))
