"""Local illumination with hard shadows.

For every point light the shading model casts a shadow ray toward the light.
An occluded light contributes nothing; a visible light adds a Lambert term to
the diffuse intensity and a Phong term to the specular intensity:

    diffuse  += I * max(0, L . N)
    specular += I * max(0, -reflect(-L, N) . V) ^ specular_exponent

A constant ambient term is added to the diffuse intensity once all lights
have been gathered. The local colour is then

    diffuse * albedo.x * diffuse_color + specular * albedo.y * (1, 1, 1)

Example:
    >>> # Inside a Taichi kernel:
    >>> # diffuse, specular = light_intensities(point, normal, view_dir, 50.0, 1)
"""

import taichi as ti
import taichi.math as tm

from whitted.core.vector import length, normalize, offset_origin, reflect, vec3
from whitted.materials.phong import PhongMaterial
from whitted.scene.intersection import query_scene
from whitted.scene.lights import get_point_light, num_lights

# Constant ambient term added to the diffuse intensity
AMBIENT_INTENSITY = 0.05


@ti.func
def is_shadowed(point: vec3, normal: vec3, light_direction: vec3, light_distance: ti.f32) -> ti.i32:
    """Test whether a light is hidden from a surface point.

    The shadow ray starts just off the surface on the side the light
    direction points to, and any sphere hit closer than the light blocks it.

    Args:
        point: The surface point.
        normal: The outward unit normal at the point.
        light_direction: Unit direction from the point toward the light.
        light_distance: Distance from the point to the light.

    Returns:
        1 if the light is occluded, 0 otherwise.
    """
    shadow_origin = offset_origin(point, normal, light_direction)
    shadow_hit = query_scene(shadow_origin, light_direction)
    occluded = 0
    if shadow_hit.hit == 1 and length(shadow_hit.point - shadow_origin) < light_distance:
        occluded = 1
    return occluded


@ti.func
def light_intensities(
    point: vec3,
    normal: vec3,
    view_direction: vec3,
    specular_exponent: ti.f32,
    shadows: ti.i32,
):
    """Accumulate diffuse and specular intensities from all point lights.

    Args:
        point: The surface point being shaded.
        normal: The outward unit normal at the point.
        view_direction: The unit direction of the incoming ray.
        specular_exponent: Phong exponent of the surface material.
        shadows: 1 to cast shadow rays, 0 to treat every light as visible.

    Returns:
        A tuple of (diffuse, specular) intensities, ambient term included.
    """
    diffuse = 0.0
    specular = 0.0

    ti.loop_config(serialize=True)
    for i in range(num_lights[None]):
        light = get_point_light(i)
        to_light = light.position - point
        light_direction = normalize(to_light)
        light_distance = length(to_light)

        visible = 1
        if shadows == 1:
            visible = 1 - is_shadowed(point, normal, light_direction, light_distance)

        if visible == 1:
            diffuse += light.intensity * tm.max(0.0, tm.dot(light_direction, normal))
            reflected = reflect(-light_direction, normal)
            specular += light.intensity * ti.pow(
                tm.max(0.0, -tm.dot(reflected, view_direction)), specular_exponent
            )

    diffuse += AMBIENT_INTENSITY
    return diffuse, specular


@ti.func
def shade_local(
    point: vec3,
    normal: vec3,
    view_direction: vec3,
    material: PhongMaterial,
    shadows: ti.i32,
) -> vec3:
    """Compute the local (diffuse + specular) colour at a surface point."""
    diffuse, specular = light_intensities(
        point, normal, view_direction, material.specular_exponent, shadows
    )
    return (
        diffuse * material.albedo[0] * material.diffuse_color
        + specular * material.albedo[1] * vec3(1.0, 1.0, 1.0)
    )
