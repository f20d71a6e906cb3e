"""Unit tests for constructive solid geometry.

Tests cover:
- The 24-entry rule table for union, intersection and difference
- Filtering a merged hit list
- Intersecting CSG nodes, including nested groups as operands
- Construction errors
"""

import pickle

import pytest

RULE_ROWS = [
    # (operation, lhit, inl, inr, allowed)
    ("union", True, True, True, False),
    ("union", True, True, False, True),
    ("union", True, False, True, False),
    ("union", True, False, False, True),
    ("union", False, True, True, False),
    ("union", False, True, False, False),
    ("union", False, False, True, True),
    ("union", False, False, False, True),
    ("intersection", True, True, True, True),
    ("intersection", True, True, False, False),
    ("intersection", True, False, True, True),
    ("intersection", True, False, False, False),
    ("intersection", False, True, True, True),
    ("intersection", False, True, False, True),
    ("intersection", False, False, True, False),
    ("intersection", False, False, False, False),
    ("difference", True, True, True, False),
    ("difference", True, True, False, True),
    ("difference", True, False, True, False),
    ("difference", True, False, False, True),
    ("difference", False, True, True, True),
    ("difference", False, True, False, True),
    ("difference", False, False, True, False),
    ("difference", False, False, False, False),
]


class TestCsgRules:
    """Tests for the hit-filtering rules."""

    @pytest.mark.parametrize("op,lhit,inl,inr,allowed", RULE_ROWS)
    def test_rule(self, op, lhit, inl, inr, allowed):
        """Test each row of the rule table."""
        from whitted.geometry.csg import CsgOperation, intersection_allowed

        assert intersection_allowed(CsgOperation(op), lhit, inl, inr) is allowed

    def test_table_is_complete(self):
        """Test the table covers every operation and flag combination."""
        from whitted.geometry.csg import CSG_RULES

        assert len(CSG_RULES) == 24


class TestCsgNode:
    """Tests for building and intersecting CSG nodes."""

    def test_construction_links_operands(self):
        """Test the operands become children of the node."""
        from whitted.geometry.csg import Csg, CsgOperation
        from whitted.geometry.cube import Cube
        from whitted.geometry.sphere import Sphere

        s, c = Sphere(), Cube()
        node = Csg("union", s, c)
        assert node.operation is CsgOperation.UNION
        assert node.left is s and node.right is c
        assert s.parent is node and c.parent is node
        assert node.children == [s, c]

    def test_unknown_operation(self):
        """Test an unknown operation name raises ValueError."""
        from whitted.geometry.csg import Csg
        from whitted.geometry.cube import Cube
        from whitted.geometry.sphere import Sphere

        with pytest.raises(ValueError):
            Csg("xor", Sphere(), Cube())

    def test_same_operand_twice(self):
        """Test the two operands must be distinct shapes."""
        from whitted.geometry.csg import Csg
        from whitted.geometry.sphere import Sphere

        s = Sphere()
        with pytest.raises(ValueError, match="distinct"):
            Csg.union(s, s)

    def test_operand_with_parent_rejected(self):
        """Test an operand already in a group cannot join a CSG node."""
        from whitted.geometry.csg import Csg
        from whitted.geometry.group import Group
        from whitted.geometry.sphere import Sphere

        s = Sphere()
        g = Group([s])
        assert s.parent is g
        with pytest.raises(ValueError):
            Csg.union(s, Sphere())

    def test_parented_right_operand_leaves_left_untouched(self):
        """Test a rejected right operand does not attach the left one."""
        from whitted.geometry.csg import Csg
        from whitted.geometry.cube import Cube
        from whitted.geometry.group import Group
        from whitted.geometry.sphere import Sphere

        left, right = Cube(), Sphere()
        g = Group([right])
        with pytest.raises(ValueError, match="only one parent"):
            Csg.difference(left, right)
        assert left.parent is None
        assert right.parent is g
        Csg.union(left, Sphere())

    @pytest.mark.parametrize(
        "op,x0,x1",
        [("union", 0, 3), ("intersection", 1, 2), ("difference", 0, 1)],
    )
    def test_filter_intersections(self, op, x0, x1):
        """Test filtering an alternating list of hits on the two operands."""
        from whitted.core.intersection import Intersection
        from whitted.geometry.csg import Csg
        from whitted.geometry.cube import Cube
        from whitted.geometry.sphere import Sphere

        s1, s2 = Sphere(), Cube()
        node = Csg(op, s1, s2)
        xs = [Intersection(1, s1), Intersection(2, s2), Intersection(3, s1), Intersection(4, s2)]
        result = node.filter_intersections(xs)
        assert result == [xs[x0], xs[x1]]

    def test_ray_misses(self):
        """Test a ray that misses both operands."""
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.csg import Csg
        from whitted.geometry.cube import Cube
        from whitted.geometry.sphere import Sphere

        node = Csg.union(Sphere(), Cube())
        assert node.local_intersect(Ray(point(0, 2, -5), vector(0, 0, 1))) == []

    def test_union_of_overlapping_spheres(self):
        """Test a union keeps the outer entry and exit."""
        from whitted.core.matrix import translation
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.csg import Csg
        from whitted.geometry.sphere import Sphere

        s1 = Sphere()
        s2 = Sphere(transform=translation(0, 0, 0.5))
        node = Csg.union(s1, s2)
        xs = node.local_intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert [i.t for i in xs] == pytest.approx([4, 6.5])
        assert xs[0].shape is s1
        assert xs[1].shape is s2

    def test_difference_of_overlapping_spheres(self):
        """Test a difference ends where the subtracted sphere begins."""
        from whitted.core.matrix import translation
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.csg import Csg
        from whitted.geometry.sphere import Sphere

        s1 = Sphere()
        s2 = Sphere(transform=translation(0, 0, 0.5))
        node = Csg.difference(s1, s2)
        xs = node.local_intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert [i.t for i in xs] == pytest.approx([4, 4.5])
        assert xs[0].shape is s1
        assert xs[1].shape is s2

    def test_intersection_of_overlapping_spheres(self):
        """Test an intersection keeps only the shared lens."""
        from whitted.core.matrix import translation
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.csg import Csg
        from whitted.geometry.sphere import Sphere

        s1 = Sphere()
        s2 = Sphere(transform=translation(0, 0, 0.5))
        node = Csg.intersection(s1, s2)
        xs = node.local_intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert [i.t for i in xs] == pytest.approx([4.5, 6])

    def test_group_operand(self):
        """Test hits on leaves inside a group count as hits on that operand."""
        from whitted.core.matrix import translation
        from whitted.core.ray import Ray
        from whitted.core.tuples import point, vector
        from whitted.geometry.csg import Csg
        from whitted.geometry.group import Group
        from whitted.geometry.sphere import Sphere

        leaf = Sphere(transform=translation(0, 0, 0.5))
        node = Csg.difference(Sphere(), Group([leaf]))
        assert node.includes(leaf)
        xs = node.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
        assert [i.t for i in xs] == pytest.approx([4, 4.5])
        assert xs[1].shape is leaf

    def test_pickle_round_trip(self):
        """Test an unpickled node keeps its operands linked."""
        from whitted.geometry.csg import Csg
        from whitted.geometry.cube import Cube
        from whitted.geometry.sphere import Sphere

        node = pickle.loads(pickle.dumps(Csg.intersection(Cube(), Sphere())))
        assert node.left.parent is node
        assert node.right.parent is node
