"""Groups: a transform applied to a collection of child shapes.

A ray is transformed once into group space and then handed to every child.
The group's bounding box is computed lazily from the children and reused
until a child is added or a transform in the subtree changes.

Example:
    >>> from whitted.core.matrix import scaling, translation
    >>> from whitted.geometry import Group, Sphere
    >>> g = Group(transform=scaling(2, 2, 2))
    >>> s = Sphere(transform=translation(5, 0, 0))
    >>> g.add_child(s)
    >>> s.parent is g
    True
"""

from __future__ import annotations

from collections.abc import Iterable

from whitted.core.intersection import Intersection, sort_intersections
from whitted.core.matrix import Matrix
from whitted.core.ray import Ray
from whitted.geometry.shape import Container, Shape


class Group(Container):
    """An ordered collection of child shapes sharing one transform."""

    def __init__(self, children: Iterable[Shape] = (), transform: Matrix | None = None) -> None:
        self._children: list[Shape] = []
        super().__init__(transform=transform)
        for child in children:
            self.add_child(child)

    def __repr__(self) -> str:
        return f"Group(children={len(self._children)})"

    def __len__(self) -> int:
        return len(self._children)

    @property
    def children(self) -> list[Shape]:
        return self._children

    def add_child(self, shape: Shape) -> None:
        """Append a child and make this group its parent.

        Raises:
            ValueError: If ``shape`` already belongs to another group or CSG
                node, or if it is this group or one of its ancestors.
        """
        if shape.includes(self):
            raise ValueError(f"Adding {shape!r} to {self!r} would create a cycle")
        shape._attach(self)
        self._children.append(shape)

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        if not self._children or not self.bounds().intersects(ray):
            return []
        xs: list[Intersection] = []
        for child in self._children:
            xs.extend(child.intersect(ray))
        return sort_intersections(xs)
