"""Infinite plane primitive: the object-space xz plane (y = 0)."""

from __future__ import annotations

import math

from whitted.core.intersection import Intersection
from whitted.core.ray import Ray
from whitted.core.tuples import EPSILON, Tuple, point, vector
from whitted.geometry.bounds import BoundingBox
from whitted.geometry.shape import Shape


class Plane(Shape):
    """The xz plane. Rays parallel to it (or lying in it) never hit."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        if abs(ray.direction.y) < EPSILON:
            return []
        t = -ray.origin.y / ray.direction.y
        return [Intersection(t, self)]

    def local_normal_at(self, local_point: Tuple, hit: Intersection | None = None) -> Tuple:
        return vector(0, 1, 0)

    def bounds(self) -> BoundingBox:
        return BoundingBox(point(-math.inf, 0, -math.inf), point(math.inf, 0, math.inf))
