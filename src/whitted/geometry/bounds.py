"""Axis-aligned bounding boxes.

Groups and CSG nodes keep the box enclosing their children so a ray that
misses the box can skip every child. Boxes are conservative: a box that
cannot be transformed exactly (one with infinite extent) becomes the
infinite box.
"""

from __future__ import annotations

import math

from whitted.core.matrix import Matrix
from whitted.core.ray import Ray
from whitted.core.tuples import Tuple, point

INF = math.inf


def check_axis(minimum: float, maximum: float, origin: float, direction: float) -> tuple[float, float]:
    """Slab test along one axis.

    Args:
        minimum: Lower slab plane.
        maximum: Upper slab plane.
        origin: Ray origin component on this axis.
        direction: Ray direction component on this axis.

    Returns:
        (tmin, tmax) for the slab, tmin <= tmax. A ray parallel to the slab
        returns the full line when its origin lies between the planes
        (boundaries included) and an empty interval otherwise.
    """
    # Rays in a scaled group's space are not unit length, so only an exact
    # zero is parallel.
    if direction != 0.0:
        tmin = (minimum - origin) / direction
        tmax = (maximum - origin) / direction
        if tmin > tmax:
            tmin, tmax = tmax, tmin
        return tmin, tmax

    if minimum <= origin <= maximum:
        return -INF, INF
    return INF, -INF


def slab_intersect(minimum: Tuple, maximum: Tuple, ray: Ray) -> tuple[float, float] | None:
    """Intersect a ray with the box [minimum, maximum].

    Returns:
        (entry, exit) ray parameters, or None on a miss.
    """
    xtmin, xtmax = check_axis(minimum.x, maximum.x, ray.origin.x, ray.direction.x)
    ytmin, ytmax = check_axis(minimum.y, maximum.y, ray.origin.y, ray.direction.y)
    ztmin, ztmax = check_axis(minimum.z, maximum.z, ray.origin.z, ray.direction.z)

    tmin = max(xtmin, ytmin, ztmin)
    tmax = min(xtmax, ytmax, ztmax)
    if tmin > tmax:
        return None
    return tmin, tmax


class BoundingBox:
    """An axis-aligned box. A freshly created box with no points is empty."""

    __slots__ = ("minimum", "maximum")

    def __init__(self, minimum: Tuple | None = None, maximum: Tuple | None = None) -> None:
        self.minimum = minimum if minimum is not None else point(INF, INF, INF)
        self.maximum = maximum if maximum is not None else point(-INF, -INF, -INF)

    def __repr__(self) -> str:
        lo, hi = self.minimum, self.maximum
        return f"BoundingBox(min=({lo.x}, {lo.y}, {lo.z}), max=({hi.x}, {hi.y}, {hi.z}))"

    def __getstate__(self) -> tuple[Tuple, Tuple]:
        return (self.minimum, self.maximum)

    def __setstate__(self, state: tuple[Tuple, Tuple]) -> None:
        self.minimum, self.maximum = state

    @classmethod
    def infinite(cls) -> BoundingBox:
        return cls(point(-INF, -INF, -INF), point(INF, INF, INF))

    def is_empty(self) -> bool:
        lo, hi = self.minimum, self.maximum
        return lo.x > hi.x or lo.y > hi.y or lo.z > hi.z

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (*self.minimum, *self.maximum))

    def add_point(self, p: Tuple) -> None:
        lo, hi = self.minimum, self.maximum
        self.minimum = point(min(lo.x, p.x), min(lo.y, p.y), min(lo.z, p.z))
        self.maximum = point(max(hi.x, p.x), max(hi.y, p.y), max(hi.z, p.z))

    def add_box(self, other: BoundingBox) -> None:
        if other.is_empty():
            return
        self.add_point(other.minimum)
        self.add_point(other.maximum)

    def contains_point(self, p: Tuple) -> bool:
        lo, hi = self.minimum, self.maximum
        return lo.x <= p.x <= hi.x and lo.y <= p.y <= hi.y and lo.z <= p.z <= hi.z

    def contains_box(self, other: BoundingBox) -> bool:
        return self.contains_point(other.minimum) and self.contains_point(other.maximum)

    def corners(self) -> list[Tuple]:
        lo, hi = self.minimum, self.maximum
        return [
            point(x, y, z)
            for x in (lo.x, hi.x)
            for y in (lo.y, hi.y)
            for z in (lo.z, hi.z)
        ]

    def transform(self, matrix: Matrix) -> BoundingBox:
        """Return the axis-aligned box enclosing this box after ``matrix``."""
        if self.is_empty():
            return BoundingBox()
        if not self.is_finite():
            # inf * 0 would poison the corners with NaN.
            return BoundingBox.infinite()
        box = BoundingBox()
        for corner in self.corners():
            box.add_point(matrix @ corner)
        return box

    def intersects(self, ray: Ray) -> bool:
        if self.is_empty():
            return False
        return slab_intersect(self.minimum, self.maximum, ray) is not None
