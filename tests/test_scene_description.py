"""Tests for host-side scene description dataclasses."""

import math

import pytest

from whitted.scene.description import Light, Material, Scene, Sphere


class TestMaterial:
    """Tests for Material validation."""

    def test_values_become_float_tuples(self):
        material = Material(1, [0.6, 0.3, 0.1, 0], [0.4, 0.4, 0.3], 50)
        assert material.refractive_index == 1.0
        assert material.albedo == (0.6, 0.3, 0.1, 0.0)
        assert material.diffuse_color == (0.4, 0.4, 0.3)
        assert isinstance(material.specular_exponent, float)

    def test_diffuse_only(self):
        material = Material.diffuse_only((0.4, 0.4, 0.3))
        assert material.refractive_index == 1.0
        assert material.albedo == (1.0, 0.0, 0.0, 0.0)
        assert material.specular_exponent == 0.0

    def test_equal_materials_hash_equal(self):
        a = Material(1.5, (0.0, 0.5, 0.1, 0.8), (0.6, 0.7, 0.8), 125.0)
        b = Material(1.5, [0.0, 0.5, 0.1, 0.8], [0.6, 0.7, 0.8], 125)
        assert a == b
        assert hash(a) == hash(b)

    @pytest.mark.parametrize("refractive_index", [0.0, -1.5])
    def test_rejects_non_positive_index(self, refractive_index):
        with pytest.raises(ValueError):
            Material(refractive_index, (1.0, 0.0, 0.0, 0.0), (1.0, 1.0, 1.0), 0.0)

    def test_rejects_negative_exponent(self):
        with pytest.raises(ValueError):
            Material(1.0, (1.0, 0.0, 0.0, 0.0), (1.0, 1.0, 1.0), -1.0)

    def test_rejects_wrong_albedo_size(self):
        with pytest.raises(ValueError):
            Material(1.0, (1.0, 0.0, 0.0), (1.0, 1.0, 1.0), 0.0)

    def test_rejects_non_finite_color(self):
        with pytest.raises(ValueError):
            Material(1.0, (1.0, 0.0, 0.0, 0.0), (1.0, math.nan, 1.0), 0.0)


class TestSphereAndLight:
    """Tests for Sphere and Light validation."""

    def test_sphere(self):
        material = Material.diffuse_only((1.0, 1.0, 1.0))
        sphere = Sphere([0, 1, -5], 2, material)
        assert sphere.center == (0.0, 1.0, -5.0)
        assert sphere.radius == 2.0

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_sphere_rejects_non_positive_radius(self, radius):
        with pytest.raises(ValueError):
            Sphere((0.0, 0.0, -5.0), radius, Material.diffuse_only((1.0, 1.0, 1.0)))

    def test_sphere_requires_material(self):
        with pytest.raises(ValueError):
            Sphere((0.0, 0.0, -5.0), 1.0, None)

    def test_light(self):
        light = Light([-20, 20, 20], 1.5)
        assert light.position == (-20.0, 20.0, 20.0)
        assert light.intensity == 1.5

    @pytest.mark.parametrize("intensity", [0.0, -0.5])
    def test_light_rejects_non_positive_intensity(self, intensity):
        with pytest.raises(ValueError):
            Light((0.0, 0.0, 0.0), intensity)

    def test_light_rejects_wrong_position_size(self):
        with pytest.raises(ValueError):
            Light((0.0, 0.0), 1.0)


class TestScene:
    """Tests for the Scene container."""

    def test_empty_scene(self):
        scene = Scene()
        assert scene.spheres == ()
        assert scene.lights == ()

    def test_lists_become_tuples(self):
        material = Material.diffuse_only((1.0, 1.0, 1.0))
        scene = Scene(
            spheres=[Sphere((0.0, 0.0, -5.0), 1.0, material)],
            lights=[Light((0.0, 5.0, 0.0), 1.0)],
        )
        assert isinstance(scene.spheres, tuple)
        assert isinstance(scene.lights, tuple)
