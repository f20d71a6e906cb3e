"""Unit tests for the tuples module.

Tests cover:
- Points and vectors (construction, arithmetic, approximate equality)
- Vector operations (magnitude, normalize, dot, cross, reflect)
- Colors (arithmetic, Hadamard product, 8-bit construction)
"""

import math
import pickle

import pytest


class TestTupleBasics:
    """Tests for point and vector construction and arithmetic."""

    def test_point_has_w_one(self):
        """Test point() creates a tuple with w = 1."""
        from whitted.core.tuples import point

        p = point(4.3, -4.2, 3.1)
        assert p.w == 1.0
        assert p.is_point()
        assert not p.is_vector()

    def test_vector_has_w_zero(self):
        """Test vector() creates a tuple with w = 0."""
        from whitted.core.tuples import vector

        v = vector(4.3, -4.2, 3.1)
        assert v.w == 0.0
        assert v.is_vector()

    def test_point_minus_point_is_vector(self):
        """Test subtracting two points yields the vector between them."""
        from whitted.core.tuples import point, vector

        assert point(3, 2, 1) - point(5, 6, 7) == vector(-2, -4, -6)

    def test_point_minus_itself_is_zero(self):
        """Test P - P is the zero vector."""
        from whitted.core.tuples import point, vector

        p = point(1.5, -2.0, 7.25)
        assert p - p == vector(0, 0, 0)
        assert (p - p).is_vector()

    def test_point_plus_vector_is_point(self):
        """Test adding a vector to a point yields a point."""
        from whitted.core.tuples import point, vector

        result = point(3, -2, 5) + vector(-2, 3, 1)
        assert result == point(1, 1, 6)
        assert result.is_point()

    def test_point_minus_vector_is_point(self):
        """Test subtracting a vector from a point yields a point."""
        from whitted.core.tuples import point, vector

        assert point(3, 2, 1) - vector(5, 6, 7) == point(-2, -4, -6)

    def test_negate_and_scale(self):
        """Test negation, scalar multiplication and division."""
        from whitted.core.tuples import Tuple, vector

        v = vector(1, -2, 3)
        assert -v == vector(-1, 2, -3)
        assert v * 3.5 == vector(3.5, -7, 10.5)
        assert 0.5 * v == vector(0.5, -1, 1.5)
        assert Tuple(1, -2, 3, -4) / 2 == Tuple(0.5, -1, 1.5, -2)

    def test_approximate_equality(self):
        """Test equality tolerates differences below EPSILON."""
        from whitted.core.tuples import EPSILON, point

        assert point(1, 2, 3) == point(1 + EPSILON / 10, 2, 3)
        assert point(1, 2, 3) != point(1 + EPSILON * 10, 2, 3)

    def test_tuples_are_not_hashable(self):
        """Test tuples cannot be hashed since equality is approximate."""
        from whitted.core.tuples import point

        with pytest.raises(TypeError):
            hash(point(0, 0, 0))

    def test_pickle_round_trip(self):
        """Test tuples survive pickling (needed by worker processes)."""
        from whitted.core.tuples import point

        p = point(1, 2, 3)
        assert pickle.loads(pickle.dumps(p)) == p


class TestVectorOperations:
    """Tests for magnitude, normalize, dot, cross and reflect."""

    def test_magnitude(self):
        """Test magnitude of unit and general vectors."""
        from whitted.core.tuples import vector

        assert vector(0, 1, 0).magnitude() == 1.0
        assert vector(1, 2, 3).magnitude() == pytest.approx(math.sqrt(14))
        assert vector(-1, -2, -3).magnitude() == pytest.approx(math.sqrt(14))

    def test_normalize(self):
        """Test normalize yields a unit vector in the same direction."""
        from whitted.core.tuples import vector

        assert vector(4, 0, 0).normalize() == vector(1, 0, 0)
        n = vector(1, 2, 3).normalize()
        assert n == vector(1 / math.sqrt(14), 2 / math.sqrt(14), 3 / math.sqrt(14))
        assert n.magnitude() == pytest.approx(1.0)

    def test_dot(self):
        """Test the dot product."""
        from whitted.core.tuples import vector

        assert vector(1, 2, 3).dot(vector(2, 3, 4)) == 20.0

    def test_cross(self):
        """Test the cross product is anti-commutative."""
        from whitted.core.tuples import vector

        a = vector(1, 2, 3)
        b = vector(2, 3, 4)
        assert a.cross(b) == vector(-1, 2, -1)
        assert b.cross(a) == vector(1, -2, 1)

    def test_reflect_at_45_degrees(self):
        """Test reflecting a vector approaching at 45 degrees."""
        from whitted.core.tuples import vector

        assert vector(1, -1, 0).reflect(vector(0, 1, 0)) == vector(1, 1, 0)

    def test_reflect_off_slanted_surface(self):
        """Test reflecting off a slanted surface."""
        from whitted.core.tuples import vector

        n = vector(math.sqrt(2) / 2, math.sqrt(2) / 2, 0)
        assert vector(0, -1, 0).reflect(n) == vector(1, 0, 0)


class TestColor:
    """Tests for Color arithmetic."""

    def test_components(self):
        """Test red, green and blue accessors."""
        from whitted.core.tuples import Color

        c = Color(-0.5, 0.4, 1.7)
        assert (c.red, c.green, c.blue) == (-0.5, 0.4, 1.7)

    def test_add_subtract(self):
        """Test addition and subtraction."""
        from whitted.core.tuples import Color

        c1 = Color(0.9, 0.6, 0.75)
        c2 = Color(0.7, 0.1, 0.25)
        assert c1 + c2 == Color(1.6, 0.7, 1.0)
        assert c1 - c2 == Color(0.2, 0.5, 0.5)

    def test_scalar_multiply(self):
        """Test multiplication by a scalar from either side."""
        from whitted.core.tuples import Color

        assert Color(0.2, 0.3, 0.4) * 2 == Color(0.4, 0.6, 0.8)
        assert 2 * Color(0.2, 0.3, 0.4) == Color(0.4, 0.6, 0.8)

    def test_hadamard_product(self):
        """Test multiplying two colors component-wise."""
        from whitted.core.tuples import Color

        assert Color(1, 0.2, 0.4) * Color(0.9, 1, 0.1) == Color(0.9, 0.2, 0.04)

    def test_from_rgb255(self):
        """Test building a color from 8-bit channels."""
        from whitted.core.tuples import Color

        assert Color.from_rgb255(255, 0, 51) == Color(1.0, 0.0, 0.2)

    def test_channels_are_not_clamped(self):
        """Test values outside [0, 1] are kept."""
        from whitted.core.tuples import Color

        assert (Color(1, 1, 1) * 3).as_tuple() == (3.0, 3.0, 3.0)
