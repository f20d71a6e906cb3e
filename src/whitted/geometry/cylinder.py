"""Cylinder and double-napped cone primitives.

Both are centred on the object-space y axis and may be truncated to
``minimum < y < maximum`` and optionally capped. The cylinder has radius 1;
the cone's radius at height y is |y|.

Cap hits include the rim (radius test uses ``<=``); side hits exclude the
truncation planes (open interval), so a ray grazing the rim reports the cap.
"""

from __future__ import annotations

import math

from whitted.core.intersection import Intersection
from whitted.core.matrix import Matrix
from whitted.core.ray import Ray
from whitted.core.tuples import EPSILON, Tuple, point, vector
from whitted.geometry.bounds import BoundingBox
from whitted.geometry.shape import Shape
from whitted.geometry.sphere import solve_quadratic
from whitted.materials.material import Material


def _cap_contains(ray: Ray, t: float, radius: float) -> bool:
    x = ray.origin.x + t * ray.direction.x
    z = ray.origin.z + t * ray.direction.z
    return x * x + z * z <= radius * radius


class _Truncated(Shape):
    """Shared truncation and cap handling for cylinders and cones."""

    def __init__(
        self,
        minimum: float = -math.inf,
        maximum: float = math.inf,
        closed: bool = False,
        transform: Matrix | None = None,
        material: Material | None = None,
    ) -> None:
        if minimum > maximum:
            raise ValueError(f"minimum ({minimum}) must not exceed maximum ({maximum})")
        self.minimum = float(minimum)
        self.maximum = float(maximum)
        self.closed = closed
        super().__init__(transform=transform, material=material)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(minimum={self.minimum}, maximum={self.maximum}, "
            f"closed={self.closed})"
        )

    def _cap_radius(self, y: float) -> float:
        raise NotImplementedError

    def _side_roots(self, ray: Ray) -> list[float]:
        raise NotImplementedError

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        ts = []
        for t in self._side_roots(ray):
            y = ray.origin.y + t * ray.direction.y
            if self.minimum < y < self.maximum:
                ts.append(t)

        if self.closed and abs(ray.direction.y) >= EPSILON:
            for cap in (self.minimum, self.maximum):
                if not math.isfinite(cap):
                    continue
                t = (cap - ray.origin.y) / ray.direction.y
                if _cap_contains(ray, t, self._cap_radius(cap)):
                    ts.append(t)

        ts.sort()
        return self._intersections(ts)

    def _cap_normal(self, local_point: Tuple) -> Tuple | None:
        x, y, z = local_point.x, local_point.y, local_point.z
        dist = x * x + z * z
        if y >= self.maximum - EPSILON and dist < self._cap_radius(self.maximum) ** 2:
            return vector(0, 1, 0)
        if y <= self.minimum + EPSILON and dist < self._cap_radius(self.minimum) ** 2:
            return vector(0, -1, 0)
        return None


class Cylinder(_Truncated):
    """Radius-1 cylinder around the y axis."""

    def _cap_radius(self, y: float) -> float:
        return 1.0

    def _side_roots(self, ray: Ray) -> list[float]:
        o, d = ray.origin, ray.direction
        a = d.x * d.x + d.z * d.z
        if abs(a) < EPSILON:
            # Parallel to the axis: only the caps can be hit.
            return []
        b = 2.0 * (o.x * d.x + o.z * d.z)
        c = o.x * o.x + o.z * o.z - 1.0
        roots = solve_quadratic(a, b, c)
        return list(roots) if roots is not None else []

    def local_normal_at(self, local_point: Tuple, hit: Intersection | None = None) -> Tuple:
        cap = self._cap_normal(local_point)
        if cap is not None:
            return cap
        return vector(local_point.x, 0, local_point.z)

    def bounds(self) -> BoundingBox:
        return BoundingBox(point(-1, self.minimum, -1), point(1, self.maximum, 1))


class Cone(_Truncated):
    """Double-napped cone x^2 + z^2 = y^2 around the y axis."""

    def _cap_radius(self, y: float) -> float:
        return abs(y)

    def _side_roots(self, ray: Ray) -> list[float]:
        o, d = ray.origin, ray.direction
        a = d.x * d.x - d.y * d.y + d.z * d.z
        b = 2.0 * (o.x * d.x - o.y * d.y + o.z * d.z)
        c = o.x * o.x - o.y * o.y + o.z * o.z

        if abs(a) < EPSILON:
            if abs(b) < EPSILON:
                return []
            # Parallel to one nappe: a single crossing with the other.
            return [-c / (2.0 * b)]

        roots = solve_quadratic(a, b, c)
        return list(roots) if roots is not None else []

    def local_normal_at(self, local_point: Tuple, hit: Intersection | None = None) -> Tuple:
        cap = self._cap_normal(local_point)
        if cap is not None:
            return cap
        x, y, z = local_point.x, local_point.y, local_point.z
        ny = math.sqrt(x * x + z * z)
        if y > 0.0:
            ny = -ny
        return vector(x, ny, z)

    def bounds(self) -> BoundingBox:
        limit = max(abs(self.minimum), abs(self.maximum))
        return BoundingBox(point(-limit, self.minimum, -limit), point(limit, self.maximum, limit))
