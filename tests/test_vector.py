"""Unit tests for ray and vector utilities.

Tests cover:
- Ray evaluation
- Length, normalization and rescaling
- Mirror reflection identities
- Snell refraction (entering, leaving, total internal reflection)
- Secondary ray origin offsetting
"""

import math

import pytest
import taichi as ti


def _assert_vec_close(actual, expected, tol=1e-5):
    for k in range(3):
        assert abs(actual[k] - expected[k]) < tol, f"component {k}: {actual} vs {expected}"


class TestRay:
    """Tests for the Ray dataclass."""

    def test_ray_at(self):
        """Test evaluating a point along a ray."""
        from whitted.core.vector import make_ray, ray_at, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(1.0, 2.0, 3.0), vec3(0.0, 0.0, -1.0))
            result[None] = ray_at(ray, 4.0)

        test_kernel()
        _assert_vec_close(result[None], (1.0, 2.0, -1.0))


class TestLengthAndNormalize:
    """Tests for norm and normalization helpers."""

    def test_length(self):
        from whitted.core.vector import length, length_squared, vec3

        norm = ti.field(dtype=ti.f32, shape=())
        norm_sq = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            v = vec3(3.0, 4.0, 0.0)
            norm[None] = length(v)
            norm_sq[None] = length_squared(v)

        test_kernel()
        assert abs(norm[None] - 5.0) < 1e-6
        assert abs(norm_sq[None] - 25.0) < 1e-5

    def test_normalize_produces_unit_vector(self):
        from whitted.core.vector import normalize, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = normalize(vec3(0.0, -3.0, 4.0))

        test_kernel()
        _assert_vec_close(result[None], (0.0, -0.6, 0.8))

    def test_scale_to_length(self):
        """Test normalization to an arbitrary target length."""
        from whitted.core.vector import scale_to_length, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = scale_to_length(vec3(3.0, 4.0, 0.0), 10.0)

        test_kernel()
        _assert_vec_close(result[None], (6.0, 8.0, 0.0))


class TestReflect:
    """Tests for mirror reflection."""

    def test_reflect_perpendicular_is_identity(self):
        """A vector perpendicular to the normal is unchanged."""
        from whitted.core.vector import reflect, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = reflect(vec3(1.0, 0.0, 0.0), vec3(0.0, 0.0, 1.0))

        test_kernel()
        _assert_vec_close(result[None], (1.0, 0.0, 0.0))

    def test_reflect_along_normal_flips(self):
        """A vector equal to the normal reflects to the negated normal."""
        from whitted.core.vector import reflect, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            n = vec3(0.0, 1.0, 0.0)
            result[None] = reflect(n, n)

        test_kernel()
        _assert_vec_close(result[None], (0.0, -1.0, 0.0))

    def test_reflect_oblique(self):
        from whitted.core.vector import reflect, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = reflect(vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        _assert_vec_close(result[None], (1.0, 1.0, 0.0))


class TestRefract:
    """Tests for Snell refraction."""

    def _refract(self, incident, normal, refractive_index):
        from whitted.core.vector import normalize, refract, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            i = normalize(vec3(incident[0], incident[1], incident[2]))
            n = vec3(normal[0], normal[1], normal[2])
            result[None] = refract(i, n, refractive_index)

        test_kernel()
        return result[None]

    def test_normal_incidence_passes_straight(self):
        """A ray hitting the surface head-on is not bent."""
        r = self._refract((0.0, 0.0, -1.0), (0.0, 0.0, 1.0), 1.5)
        _assert_vec_close(r, (0.0, 0.0, -1.0))

    def test_entering_bends_toward_normal(self):
        """Entering glass at 45 degrees obeys Snell's law."""
        r = self._refract((1.0, 0.0, -1.0), (0.0, 0.0, 1.0), 1.5)
        sin_t = math.sin(math.pi / 4.0) / 1.5
        _assert_vec_close(r, (sin_t, 0.0, -math.sqrt(1.0 - sin_t * sin_t)))

    def test_leaving_bends_away_from_normal(self):
        """Leaving glass flips the normal and swaps the indices."""
        # Incident direction points along the outward normal (inside the medium)
        r = self._refract((0.3, 0.0, 1.0), (0.0, 0.0, 1.0), 1.5)
        sin_i = 0.3 / math.sqrt(1.09)
        sin_t = sin_i * 1.5
        _assert_vec_close(r, (sin_t, 0.0, math.sqrt(1.0 - sin_t * sin_t)))

    def test_unit_index_is_identity(self):
        """An index of 1 leaves directions unchanged."""
        r = self._refract((0.2, -0.4, -1.0), (0.0, 0.0, 1.0), 1.0)
        expected = [c / math.sqrt(1.2) for c in (0.2, -0.4, -1.0)]
        _assert_vec_close(r, expected)

    def test_total_internal_reflection_returns_zero(self):
        """Beyond the critical angle the zero vector is returned."""
        r = self._refract((1.0, 0.0, 1.0), (0.0, 0.0, 1.0), 1.5)
        _assert_vec_close(r, (0.0, 0.0, 0.0), tol=1e-7)

    def test_grazing_incidence_is_treated_as_leaving(self):
        """A direction tangent to the surface uses the leaving indices."""
        # Leaving glass at 90 degrees is beyond the critical angle
        r = self._refract((1.0, 0.0, 0.0), (0.0, 0.0, 1.0), 1.5)
        _assert_vec_close(r, (0.0, 0.0, 0.0), tol=1e-7)


class TestOffsetOrigin:
    """Tests for pushing secondary ray origins off the surface."""

    @pytest.mark.parametrize(
        "direction, expected_z",
        [
            ((0.0, 0.0, 1.0), 1e-3),
            ((0.0, 0.6, -0.8), -1e-3),
            ((1.0, 0.0, 0.0), 1e-3),
        ],
    )
    def test_offset_follows_direction_side(self, direction, expected_z):
        from whitted.core.vector import offset_origin, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = offset_origin(
                vec3(0.0, 0.0, 0.0),
                vec3(0.0, 0.0, 1.0),
                vec3(direction[0], direction[1], direction[2]),
            )

        test_kernel()
        _assert_vec_close(result[None], (0.0, 0.0, expected_z), tol=1e-7)
