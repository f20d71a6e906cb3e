"""Axis-aligned cube primitive spanning [-1, 1] on every axis."""

from __future__ import annotations

from whitted.core.intersection import Intersection
from whitted.core.ray import Ray
from whitted.core.tuples import Tuple, point, vector
from whitted.geometry.bounds import BoundingBox, slab_intersect
from whitted.geometry.shape import Shape

_MIN = point(-1, -1, -1)
_MAX = point(1, 1, 1)


class Cube(Shape):
    """Unit cube centred on the origin, intersected with the slab method."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        span = slab_intersect(_MIN, _MAX, ray)
        if span is None:
            return []
        return self._intersections(span)

    def local_normal_at(self, local_point: Tuple, hit: Intersection | None = None) -> Tuple:
        # The face is picked by the component with the largest magnitude;
        # corners and edges resolve to x, then y.
        x, y, z = local_point.x, local_point.y, local_point.z
        maxc = max(abs(x), abs(y), abs(z))
        if maxc == abs(x):
            return vector(x, 0, 0)
        if maxc == abs(y):
            return vector(0, y, 0)
        return vector(0, 0, z)

    def bounds(self) -> BoundingBox:
        return BoundingBox(_MIN, _MAX)
