"""Flat and smooth triangles.

Intersection uses the Moller-Trumbore algorithm, which also yields the
barycentric coordinates (u, v) of the hit. A ``SmoothTriangle`` uses them to
interpolate per-vertex normals.

A degenerate triangle (repeated or collinear vertices) is accepted but never
reports a hit; its normal is the zero vector.
"""

from __future__ import annotations

from whitted.core.intersection import Intersection
from whitted.core.matrix import Matrix
from whitted.core.ray import Ray
from whitted.core.tuples import EPSILON, Tuple, vector
from whitted.geometry.bounds import BoundingBox
from whitted.geometry.shape import Shape
from whitted.materials.material import Material


class Triangle(Shape):
    """Triangle with vertices p1, p2, p3 and a precomputed face normal.

    Attributes:
        p1, p2, p3: Vertex points in object space.
        e1: Edge p2 - p1.
        e2: Edge p3 - p1.
        normal: Unit face normal ``e2 x e1``.
    """

    def __init__(
        self,
        p1: Tuple,
        p2: Tuple,
        p3: Tuple,
        transform: Matrix | None = None,
        material: Material | None = None,
    ) -> None:
        self.p1, self.p2, self.p3 = p1, p2, p3
        self.e1 = p2 - p1
        self.e2 = p3 - p1
        n = self.e2.cross(self.e1)
        self.normal = n.normalize() if n.magnitude() >= EPSILON else vector(0, 0, 0)
        super().__init__(transform=transform, material=material)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.p1!r}, {self.p2!r}, {self.p3!r})"

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        dir_cross_e2 = ray.direction.cross(self.e2)
        det = self.e1.dot(dir_cross_e2)
        if abs(det) < EPSILON:
            return []

        f = 1.0 / det
        p1_to_origin = ray.origin - self.p1
        u = f * p1_to_origin.dot(dir_cross_e2)
        if u < 0.0 or u > 1.0:
            return []

        origin_cross_e1 = p1_to_origin.cross(self.e1)
        v = f * ray.direction.dot(origin_cross_e1)
        if v < 0.0 or u + v > 1.0:
            return []

        t = f * self.e2.dot(origin_cross_e1)
        return [Intersection(t, self, u, v)]

    def local_normal_at(self, local_point: Tuple, hit: Intersection | None = None) -> Tuple:
        return self.normal

    def bounds(self) -> BoundingBox:
        box = BoundingBox()
        for p in (self.p1, self.p2, self.p3):
            box.add_point(p)
        return box


class SmoothTriangle(Triangle):
    """Triangle whose normal is interpolated from per-vertex normals."""

    def __init__(
        self,
        p1: Tuple,
        p2: Tuple,
        p3: Tuple,
        n1: Tuple,
        n2: Tuple,
        n3: Tuple,
        transform: Matrix | None = None,
        material: Material | None = None,
    ) -> None:
        self.n1, self.n2, self.n3 = n1, n2, n3
        super().__init__(p1, p2, p3, transform=transform, material=material)

    def local_normal_at(self, local_point: Tuple, hit: Intersection | None = None) -> Tuple:
        if hit is None or hit.u is None or hit.v is None:
            raise ValueError("SmoothTriangle normals need the intersection's (u, v) coordinates")
        u, v = hit.u, hit.v
        return self.n2 * u + self.n3 * v + self.n1 * (1.0 - u - v)
