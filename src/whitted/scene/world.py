"""World: the top-level shapes and the lights that illuminate them.

Example:
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.tuples import point, vector
    >>> from whitted.scene.world import default_world
    >>> world = default_world()
    >>> [round(i.t, 1) for i in world.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))]
    [4.0, 4.5, 5.5, 6.0]
"""

from __future__ import annotations

from collections.abc import Iterable

from whitted.core.intersection import Intersection, sort_intersections
from whitted.core.matrix import scaling
from whitted.core.ray import Ray
from whitted.core.tuples import Color, point
from whitted.geometry.shape import Shape
from whitted.geometry.sphere import Sphere
from whitted.materials.lighting import PointLight
from whitted.materials.material import Material


class World:
    """Ordered top-level shapes plus point lights.

    Attributes:
        shapes: Top-level shapes. Children of groups are reached through
            their group and are not listed here.
        lights: Point lights; every light contributes to every hit.
    """

    def __init__(
        self,
        shapes: Iterable[Shape] = (),
        lights: Iterable[PointLight] = (),
    ) -> None:
        self.shapes: list[Shape] = list(shapes)
        self.lights: list[PointLight] = list(lights)

    def __repr__(self) -> str:
        return f"World(shapes={len(self.shapes)}, lights={len(self.lights)})"

    def add_shape(self, shape: Shape) -> None:
        if shape.parent is not None:
            raise ValueError(f"{shape!r} belongs to {shape.parent!r}; add its root instead")
        self.shapes.append(shape)

    def add_light(self, light: PointLight) -> None:
        self.lights.append(light)

    def contains(self, shape: Shape) -> bool:
        return any(s.includes(shape) for s in self.shapes)

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect every top-level shape; return all hits sorted by t."""
        xs: list[Intersection] = []
        for shape in self.shapes:
            xs.extend(shape.intersect(ray))
        return sort_intersections(xs)


def default_world() -> World:
    """Two concentric spheres lit from the upper left.

    The outer unit sphere is a pale green; the inner sphere is scaled by 0.5
    and has the default material.
    """
    light = PointLight(point(-10, 10, -10), Color(1, 1, 1))
    outer = Sphere(material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2))
    inner = Sphere(transform=scaling(0.5, 0.5, 0.5))
    return World([outer, inner], [light])
