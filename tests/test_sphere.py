"""Unit tests for the Sphere shape and the shared Shape behaviour.

Tests cover:
- Ray-sphere intersection (hits, tangents, misses, inside, behind)
- Transformed spheres
- Surface normals
- Default transform and material
- The robust quadratic solver
"""

import math

import pytest


def assert_close(actual, expected, tol=1e-4):
    for a, e in zip(actual, expected):
        assert a == pytest.approx(e, abs=tol)


class TestSphereIntersection:
    """Tests for Sphere.intersect."""

    def test_two_points(self):
        """Test a ray through the center hits twice."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere

        xs = Sphere().intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert [i.t for i in xs] == pytest.approx([4.0, 6.0])

    def test_tangent_gives_two_equal_hits(self):
        """Test a tangent ray reports the same t twice."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere

        xs = Sphere().intersect(Ray(point(0, 1, -5), vector(0, 0, 1)))
        assert [i.t for i in xs] == pytest.approx([5.0, 5.0])

    def test_miss(self):
        """Test a ray passing above the sphere misses."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere

        assert Sphere().intersect(Ray(point(0, 2, -5), vector(0, 0, 1))) == []

    def test_origin_inside(self):
        """Test a ray starting inside has one hit behind and one ahead."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere

        xs = Sphere().intersect(Ray(point(0, 0, 0), vector(0, 0, 1)))
        assert [i.t for i in xs] == pytest.approx([-1.0, 1.0])

    def test_sphere_behind_ray(self):
        """Test a sphere entirely behind the ray gives negative t values."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere

        xs = Sphere().intersect(Ray(point(0, 0, 5), vector(0, 0, 1)))
        assert [i.t for i in xs] == pytest.approx([-6.0, -4.0])

    def test_intersect_records_shape(self):
        """Test each intersection refers to the sphere."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere

        s = Sphere()
        xs = s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert all(i.shape is s for i in xs)

    def test_scaled_sphere(self):
        """Test intersecting a scaled sphere."""
        from whitted.core.matrix import scaling
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere

        s = Sphere(transform=scaling(2, 2, 2))
        xs = s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert [i.t for i in xs] == pytest.approx([3.0, 7.0])

    def test_translated_sphere(self):
        """Test a translated sphere can be missed."""
        from whitted.core.matrix import translation
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere

        s = Sphere(transform=translation(5, 0, 0))
        assert s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1))) == []

    def test_unnormalized_direction(self):
        """Test t is measured in units of the ray direction."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere

        xs = Sphere().intersect(Ray(point(0, 0, -5), vector(0, 0, 2)))
        assert [i.t for i in xs] == pytest.approx([2.0, 3.0])


class TestSphereNormals:
    """Tests for Sphere.normal_at."""

    @pytest.mark.parametrize(
        "p",
        [(1, 0, 0), (0, 1, 0), (0, 0, 1)],
    )
    def test_normal_on_axis(self, p):
        """Test normals at points on the axes."""
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere

        assert Sphere().normal_at(point(*p)) == vector(*p)

    def test_normal_nonaxial_is_normalized(self):
        """Test the normal at a non-axial point is a unit vector."""
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere

        k = math.sqrt(3) / 3
        n = Sphere().normal_at(point(k, k, k))
        assert n == vector(k, k, k)
        assert n == n.normalize()

    def test_translated_sphere_normal(self):
        """Test the normal on a translated sphere."""
        from whitted.core.matrix import translation
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere

        s = Sphere(transform=translation(0, 1, 0))
        n = s.normal_at(point(0, 1.70711, -0.70711))
        assert_close(n, vector(0, 0.70711, -0.70711))

    def test_transformed_sphere_normal(self):
        """Test the normal on a scaled and rotated sphere."""
        from whitted.core.matrix import rotation_z, scaling
        from whitted.core.tuples import point, vector
        from whitted.geometry.sphere import Sphere

        s = Sphere(transform=scaling(1, 0.5, 1) @ rotation_z(math.pi / 5))
        n = s.normal_at(point(0, math.sqrt(2) / 2, -math.sqrt(2) / 2))
        assert_close(n, vector(0, 0.97014, -0.24254))


class TestShapeDefaults:
    """Tests for behaviour every shape inherits."""

    def test_default_transform_and_material(self):
        """Test new shapes use the identity transform and default material."""
        from whitted.core.matrix import identity
        from whitted.geometry.sphere import Sphere
        from whitted.materials.material import Material

        s = Sphere()
        assert s.transform == identity()
        assert s.material == Material()
        assert s.parent is None

    def test_assign_transform_updates_inverse(self):
        """Test assigning a transform recomputes the cached inverse."""
        from whitted.core.matrix import translation
        from whitted.geometry.sphere import Sphere

        s = Sphere()
        s.transform = translation(2, 3, 4)
        assert s.inverse == translation(-2, -3, -4)

    def test_singular_transform_rejected(self):
        """Test a singular transform raises ValueError."""
        from whitted.core.matrix import scaling
        from whitted.geometry.sphere import Sphere

        with pytest.raises(ValueError):
            Sphere(transform=scaling(0, 1, 1))

    def test_shapes_compare_by_identity(self):
        """Test two identical-looking shapes are distinct."""
        from whitted.geometry.sphere import Sphere

        assert Sphere() != Sphere()

    def test_glass_sphere(self):
        """Test the glass sphere helper."""
        from whitted.core.matrix import identity
        from whitted.geometry.sphere import glass_sphere

        s = glass_sphere()
        assert s.transform == identity()
        assert s.material.transparency == 1.0
        assert s.material.refractive_index == 1.5

    def test_bounds(self):
        """Test the unit sphere's bounding box."""
        from whitted.core.tuples import point
        from whitted.geometry.sphere import Sphere

        box = Sphere().bounds()
        assert box.minimum == point(-1, -1, -1)
        assert box.maximum == point(1, 1, 1)


class TestSolveQuadratic:
    """Tests for the numerically stable quadratic solver."""

    def test_two_roots_sorted(self):
        """Test roots come back in ascending order."""
        from whitted.geometry.sphere import solve_quadratic

        assert solve_quadratic(1, 0, -1) == pytest.approx((-1.0, 1.0))
        assert solve_quadratic(-1, 0, 1) == pytest.approx((-1.0, 1.0))

    def test_no_real_roots(self):
        """Test a negative discriminant returns None."""
        from whitted.geometry.sphere import solve_quadratic

        assert solve_quadratic(1, 0, 1) is None

    def test_double_root_at_zero(self):
        """Test b = c = 0 gives a double root at zero."""
        from whitted.geometry.sphere import solve_quadratic

        assert solve_quadratic(1, 0, 0) == (0.0, 0.0)

    def test_cancellation(self):
        """Test a tiny root is recovered accurately when b is large."""
        from whitted.geometry.sphere import solve_quadratic

        t0, t1 = solve_quadratic(1, -1e8, 1)
        assert t0 == pytest.approx(1e-8, rel=1e-6)
        assert t1 == pytest.approx(1e8, rel=1e-6)
