"""Unit tests for axis-aligned bounding boxes.

Tests cover:
- Empty and infinite boxes
- Growing a box by points and boxes, containment
- Transforming boxes
- Ray-box intersection (slab test)
- Shape bounds in parent space
"""

import math

import pytest


class TestBoundingBox:
    """Tests for building boxes."""

    def test_empty_box(self):
        """Test a new box is empty."""
        from whitted.geometry.bounds import BoundingBox

        box = BoundingBox()
        assert box.is_empty()
        assert box.minimum.x == math.inf
        assert box.maximum.x == -math.inf

    def test_add_points(self):
        """Test adding points grows the box."""
        from whitted.core.tuples import point
        from whitted.geometry.bounds import BoundingBox

        box = BoundingBox()
        box.add_point(point(-5, 2, 0))
        box.add_point(point(7, 0, -3))
        assert box.minimum == point(-5, 0, -3)
        assert box.maximum == point(7, 2, 0)
        assert not box.is_empty()

    def test_add_box(self):
        """Test merging two boxes."""
        from whitted.core.tuples import point
        from whitted.geometry.bounds import BoundingBox

        box = BoundingBox(point(-5, -2, 0), point(7, 4, 4))
        box.add_box(BoundingBox(point(8, -7, -2), point(14, 2, 8)))
        assert box.minimum == point(-5, -7, -2)
        assert box.maximum == point(14, 4, 8)

    def test_add_empty_box_is_noop(self):
        """Test merging an empty box changes nothing."""
        from whitted.core.tuples import point
        from whitted.geometry.bounds import BoundingBox

        box = BoundingBox(point(0, 0, 0), point(1, 1, 1))
        box.add_box(BoundingBox())
        assert box.minimum == point(0, 0, 0)
        assert box.maximum == point(1, 1, 1)

    @pytest.mark.parametrize(
        "p,inside",
        [
            ((5, -2, 0), True),
            ((11, 4, 7), True),
            ((8, 1, 3), True),
            ((3, 0, 3), False),
            ((8, -4, 3), False),
            ((8, 1, -1), False),
            ((13, 1, 3), False),
            ((8, 5, 3), False),
            ((8, 1, 8), False),
        ],
    )
    def test_contains_point(self, p, inside):
        """Test point containment, boundaries included."""
        from whitted.core.tuples import point
        from whitted.geometry.bounds import BoundingBox

        box = BoundingBox(point(5, -2, 0), point(11, 4, 7))
        assert box.contains_point(point(*p)) is inside

    def test_contains_box(self):
        """Test box containment."""
        from whitted.core.tuples import point
        from whitted.geometry.bounds import BoundingBox

        box = BoundingBox(point(5, -2, 0), point(11, 4, 7))
        assert box.contains_box(BoundingBox(point(6, -1, 1), point(10, 3, 6)))
        assert not box.contains_box(BoundingBox(point(4, -3, -1), point(10, 3, 6)))

    def test_transform(self):
        """Test the enclosing box of a rotated cube."""
        from whitted.core.matrix import rotation_x, rotation_y
        from whitted.core.tuples import point
        from whitted.geometry.bounds import BoundingBox

        box = BoundingBox(point(-1, -1, -1), point(1, 1, 1))
        result = box.transform(rotation_x(math.pi / 4) @ rotation_y(math.pi / 4))
        assert result.minimum == point(-1.41421, -1.70711, -1.70711)
        assert result.maximum == point(1.41421, 1.70711, 1.70711)

    def test_transform_infinite_box(self):
        """Test an infinite box stays infinite without producing NaN."""
        from whitted.core.matrix import rotation_y
        from whitted.geometry.bounds import BoundingBox

        result = BoundingBox.infinite().transform(rotation_y(0.5))
        assert not result.is_finite()
        assert not any(math.isnan(v) for v in (*result.minimum, *result.maximum))

    def test_transform_empty_box(self):
        """Test an empty box stays empty."""
        from whitted.core.matrix import translation
        from whitted.geometry.bounds import BoundingBox

        assert BoundingBox().transform(translation(1, 2, 3)).is_empty()


class TestRayBox:
    """Tests for slab intersection."""

    @pytest.mark.parametrize(
        "origin,direction,result",
        [
            ((15, 1, 2), (-1, 0, 0), True),
            ((-5, -1, 4), (1, 0, 0), True),
            ((7, 6, 5), (0, -1, 0), True),
            ((9, -5, 6), (0, 1, 0), True),
            ((8, 2, 12), (0, 0, -1), True),
            ((6, 0, -5), (0, 0, 1), True),
            ((8, 1, 3.5), (0, 0, 1), True),
            ((9, -1, -8), (2, 4, 6), False),
            ((8, 3, -4), (6, 2, 4), False),
            ((9, -1, -2), (4, 6, 2), False),
            ((4, 0, 9), (0, 0, -1), False),
            ((8, 6, -1), (0, -1, 0), False),
            ((12, 5, 4), (-1, 0, 0), False),
        ],
    )
    def test_intersects(self, origin, direction, result):
        """Test rays against a non-cubic box."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.bounds import BoundingBox

        box = BoundingBox(point(5, -2, 0), point(11, 4, 7))
        ray = Ray(point(*origin), vector(*direction).normalize())
        assert box.intersects(ray) is result

    def test_empty_box_never_hit(self):
        """Test an empty box is never intersected."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.bounds import BoundingBox

        assert not BoundingBox().intersects(Ray(point(0, 0, 0), vector(0, 0, 1)))

    def test_check_axis_parallel(self):
        """Test a parallel ray spans the whole line inside the slab and nothing outside."""
        from whitted.geometry.bounds import check_axis

        assert check_axis(-1, 1, 0.5, 0.0) == (-math.inf, math.inf)
        assert check_axis(-1, 1, 1.0, 0.0) == (-math.inf, math.inf)
        tmin, tmax = check_axis(-1, 1, 2.0, 0.0)
        assert tmin > tmax

    def test_check_axis_tiny_direction(self):
        """Test a tiny nonzero component still crosses the slab."""
        from whitted.geometry.bounds import check_axis

        tmin, tmax = check_axis(-1, 1, 1.01, -5e-6)
        assert tmin == pytest.approx(2000)
        assert tmax == pytest.approx(402000)

    def test_slab_intersect_returns_span(self):
        """Test the entry and exit parameters."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.bounds import slab_intersect

        span = slab_intersect(point(-1, -1, -1), point(1, 1, 1), Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert span == pytest.approx((4, 6))


class TestShapeBounds:
    """Tests for shape boxes in parent space."""

    def test_parent_space_bounds(self):
        """Test a transformed sphere's box in its parent's space."""
        from whitted.core.matrix import scaling, translation
        from whitted.core.tuples import point
        from whitted.geometry.sphere import Sphere

        s = Sphere(transform=translation(1, -3, 5) @ scaling(0.5, 2, 4))
        box = s.parent_space_bounds()
        assert box.minimum == point(0.5, -5, 1)
        assert box.maximum == point(1.5, -1, 9)

    def test_group_with_plane_is_unbounded(self):
        """Test a group holding a plane has an infinite box and is still hit."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.group import Group
        from whitted.geometry.plane import Plane

        g = Group([Plane()])
        assert not g.bounds().is_finite()
        assert len(g.intersect(Ray(point(0, 1, 0), vector(0, -1, 0)))) == 1
