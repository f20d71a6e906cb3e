"""Unit sphere primitive.

The object-space sphere is centred on the origin with radius 1; scale and
translate it with the shape transform. Roots are found with the robust form
of the quadratic formula, which avoids catastrophic cancellation when b^2 is
close to 4ac.

Example:
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.tuples import point, vector
    >>> from whitted.geometry.sphere import Sphere
    >>> xs = Sphere().intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))
    >>> [i.t for i in xs]
    [4.0, 6.0]
"""

from __future__ import annotations

import math

from whitted.core.intersection import Intersection
from whitted.core.matrix import Matrix
from whitted.core.ray import Ray
from whitted.core.tuples import Tuple, point, vector
from whitted.geometry.bounds import BoundingBox
from whitted.geometry.shape import Shape
from whitted.materials.material import Material


def solve_quadratic(a: float, b: float, c: float) -> tuple[float, float] | None:
    """Real roots of a*t^2 + b*t + c = 0 for a != 0.

    Returns:
        (t0, t1) with t0 <= t1, or None when the discriminant is negative.
        A tangent ray yields two equal roots.
    """
    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return None

    # q = -(b + sign(b) * sqrt(D)) / 2 keeps both roots well conditioned.
    sign_b = -1.0 if b < 0.0 else 1.0
    q = -0.5 * (b + sign_b * math.sqrt(discriminant))
    if q == 0.0:
        # b == 0 and D == 0 implies c == 0: a double root at zero.
        return 0.0, 0.0
    t0 = q / a
    t1 = c / q
    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


class Sphere(Shape):
    """A sphere of radius 1 at the object-space origin."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        o, d = ray.origin, ray.direction
        sphere_to_ray = vector(o.x, o.y, o.z)

        a = d.dot(d)
        b = 2.0 * d.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1.0

        roots = solve_quadratic(a, b, c)
        if roots is None:
            return []
        return self._intersections(roots)

    def local_normal_at(self, local_point: Tuple, hit: Intersection | None = None) -> Tuple:
        return vector(local_point.x, local_point.y, local_point.z)

    def bounds(self) -> BoundingBox:
        return BoundingBox(point(-1, -1, -1), point(1, 1, 1))


def glass_sphere(transform: Matrix | None = None, refractive_index: float = 1.5) -> Sphere:
    """A fully transparent sphere, handy for refraction tests and scenes."""
    return Sphere(
        transform=transform,
        material=Material(transparency=1.0, refractive_index=refractive_index),
    )
