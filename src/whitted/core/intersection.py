"""Intersection records and per-hit shading state.

An ``Intersection`` pairs a ray parameter ``t`` with the leaf shape that was
struck. Every ``intersect`` in the package returns its intersections sorted
ascending by ``t``; ``hit`` picks the nearest one in front of the ray origin.

``prepare_computations`` derives everything the shader needs from a hit: the
point, the eye and normal vectors, the reflection vector, the points nudged
just above and below the surface, and the refractive indices on either side
of the surface.

Example:
    >>> from whitted.core.intersection import Intersection, hit
    >>> from whitted.geometry import Sphere
    >>> s = Sphere()
    >>> xs = [Intersection(-1.0, s), Intersection(1.0, s)]
    >>> hit(xs).t
    1.0
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from whitted.core.ray import Ray
from whitted.core.tuples import EPSILON, Tuple

if TYPE_CHECKING:
    from whitted.geometry.shape import Shape


@dataclass(frozen=True, eq=False)
class Intersection:
    """A single ray/surface crossing.

    Attributes:
        t: Ray parameter of the crossing.
        shape: The leaf shape that was hit.
        u: First barycentric coordinate (triangles only).
        v: Second barycentric coordinate (triangles only).
    """

    t: float
    shape: Shape
    u: float | None = None
    v: float | None = None

    def __repr__(self) -> str:
        return f"Intersection(t={self.t}, shape={type(self.shape).__name__})"


def sort_intersections(xs: Iterable[Intersection]) -> list[Intersection]:
    """Return the intersections sorted ascending by t."""
    return sorted(xs, key=lambda i: i.t)


def hit(xs: Iterable[Intersection]) -> Intersection | None:
    """Return the intersection with the smallest non-negative t.

    Args:
        xs: Intersections in any order.

    Returns:
        The visible intersection, or None when every t is negative or the
        list is empty.
    """
    best: Intersection | None = None
    for i in xs:
        if i.t >= 0.0 and (best is None or i.t < best.t):
            best = i
    return best


@dataclass(frozen=True)
class Computations:
    """Precomputed state for shading a single hit.

    Attributes:
        t: Ray parameter of the hit.
        shape: The shape that was hit.
        point: World-space hit point.
        eyev: Unit vector from the point back toward the eye.
        normalv: Unit surface normal, flipped to face the eye.
        reflectv: Incoming direction mirrored about the normal.
        inside: True when the hit is on the inside of the shape.
        over_point: Point nudged along the normal, used as the origin of
            shadow and reflection rays.
        under_point: Point nudged against the normal, used as the origin of
            refraction rays.
        n1: Refractive index of the medium being exited.
        n2: Refractive index of the medium being entered.
    """

    t: float
    shape: Shape
    point: Tuple
    eyev: Tuple
    normalv: Tuple
    reflectv: Tuple
    inside: bool
    over_point: Tuple
    under_point: Tuple
    n1: float
    n2: float


def _refractive_indices(hit_: Intersection, xs: Sequence[Intersection]) -> tuple[float, float]:
    # Walk the hits in order, tracking which shapes the ray is currently inside.
    containers: list[Shape] = []
    n1 = n2 = 1.0
    for i in xs:
        if i is hit_:
            n1 = containers[-1].material.refractive_index if containers else 1.0

        if i.shape in containers:
            containers.remove(i.shape)
        else:
            containers.append(i.shape)

        if i is hit_:
            n2 = containers[-1].material.refractive_index if containers else 1.0
            break
    return n1, n2


def prepare_computations(
    hit_: Intersection,
    ray: Ray,
    xs: Sequence[Intersection] | None = None,
) -> Computations:
    """Compute the shading state for a hit.

    Args:
        hit_: The intersection being shaded.
        ray: The ray that produced it.
        xs: The full sorted intersection list for the ray. Needed to find
            the refractive indices on both sides of the surface; defaults to
            ``[hit_]``.

    Returns:
        The precomputed Computations.
    """
    if xs is None:
        xs = [hit_]

    point = ray.position(hit_.t)
    eyev = -ray.direction
    normalv = hit_.shape.normal_at(point, hit_)
    inside = normalv.dot(eyev) < 0.0
    if inside:
        normalv = -normalv

    offset = normalv * EPSILON
    n1, n2 = _refractive_indices(hit_, xs)

    return Computations(
        t=hit_.t,
        shape=hit_.shape,
        point=point,
        eyev=eyev,
        normalv=normalv,
        reflectv=ray.direction.reflect(normalv),
        inside=inside,
        over_point=point + offset,
        under_point=point - offset,
        n1=n1,
        n2=n2,
    )


def schlick(comps: Computations) -> float:
    """Fresnel reflectance using Schlick's approximation.

    Returns:
        The fraction of light reflected, in [0, 1]. Total internal reflection
        returns 1.0.
    """
    cos = comps.eyev.dot(comps.normalv)

    # Total internal reflection is only possible when leaving a denser medium.
    if comps.n1 > comps.n2:
        n = comps.n1 / comps.n2
        sin2_t = n * n * (1.0 - cos * cos)
        if sin2_t > 1.0:
            return 1.0
        cos = math.sqrt(1.0 - sin2_t)

    r0 = ((comps.n1 - comps.n2) / (comps.n1 + comps.n2)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cos) ** 5
