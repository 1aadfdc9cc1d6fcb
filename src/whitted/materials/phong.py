"""Phong material storage.

A Phong material combines four independently weighted contributions:

    color = diffuse  * albedo.x * diffuse_color
          + specular * albedo.y * (1, 1, 1)
          + reflected_color * albedo.z
          + refracted_color * albedo.w

where ``diffuse`` and ``specular`` are the light intensities gathered by the
shading model and the two colours come from the secondary rays. This module
only stores the parameters in Taichi fields; the shading happens in
``whitted.core.shading`` and ``whitted.core.integrator``.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.materials.phong import add_phong_material
    >>> glass = add_phong_material(1.5, (0.0, 0.5, 0.1, 0.8), (0.6, 0.7, 0.8), 125.0)
"""

import taichi as ti
import taichi.math as tm

# Type aliases for vectors
vec3 = tm.vec3
vec4 = tm.vec4


@ti.dataclass
class PhongMaterial:
    """Phong material properties as seen inside kernels.

    Attributes:
        refractive_index: Index of refraction (1.0 for no bending).
        albedo: Weights of (diffuse, specular, reflective, refractive).
        diffuse_color: Base RGB colour.
        specular_exponent: Phong exponent.
    """

    refractive_index: ti.f32
    albedo: vec4
    diffuse_color: vec3
    specular_exponent: ti.f32


# =============================================================================
# Material Field Storage
# =============================================================================

# Maximum number of distinct materials in the scene
MAX_MATERIALS = 256

# Storage for material properties (Structure of Arrays)
refractive_indices = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
albedos = ti.Vector.field(4, dtype=ti.f32, shape=MAX_MATERIALS)
diffuse_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
specular_exponents = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_phong_materials() -> None:
    """Clear all materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_phong_material(
    refractive_index: float,
    albedo: tuple[float, float, float, float],
    diffuse_color: tuple[float, float, float],
    specular_exponent: float,
) -> int:
    """Add a material to the material registry.

    Args:
        refractive_index: Index of refraction (must be positive).
        albedo: Weights of (diffuse, specular, reflective, refractive).
        diffuse_color: Base RGB colour.
        specular_exponent: Phong exponent (must be non-negative).

    Returns:
        The index of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If the refractive index or exponent is out of range.
    """
    if refractive_index <= 0.0:
        raise ValueError(f"Refractive index must be positive, got {refractive_index}")
    if specular_exponent < 0.0:
        raise ValueError(f"Specular exponent must be non-negative, got {specular_exponent}")

    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    refractive_indices[idx] = refractive_index
    albedos[idx] = [albedo[0], albedo[1], albedo[2], albedo[3]]
    diffuse_colors[idx] = [diffuse_color[0], diffuse_color[1], diffuse_color[2]]
    specular_exponents[idx] = specular_exponent
    num_materials[None] = idx + 1
    return idx


def get_material_count() -> int:
    """Get the number of materials in the registry."""
    return int(num_materials[None])


@ti.func
def get_phong_material(material_idx: ti.i32) -> PhongMaterial:
    """Look up a material by index.

    Args:
        material_idx: The index of the material in the registry.

    Returns:
        The PhongMaterial stored at that index.
    """
    return PhongMaterial(
        refractive_index=refractive_indices[material_idx],
        albedo=albedos[material_idx],
        diffuse_color=diffuse_colors[material_idx],
        specular_exponent=specular_exponents[material_idx],
    )
