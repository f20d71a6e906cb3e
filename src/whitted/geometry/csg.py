"""Constructive solid geometry.

A CSG node combines two shapes with union, intersection or difference. The
children are intersected as usual, then the merged hit list is filtered: a
hit survives only if it lies on the boundary of the combined solid, decided
from whether it struck the left operand and whether the ray is currently
inside the left and right operands.

Example:
    >>> from whitted.geometry import Csg, Cube, Sphere
    >>> shape = Csg.difference(Cube(), Sphere())
    >>> shape.operation
    <CsgOperation.DIFFERENCE: 'difference'>
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from itertools import product

from whitted.core.intersection import Intersection, sort_intersections
from whitted.core.matrix import Matrix
from whitted.core.ray import Ray
from whitted.geometry.shape import Container, Shape


class CsgOperation(Enum):
    UNION = "union"
    INTERSECTION = "intersection"
    DIFFERENCE = "difference"


def _rule(op: CsgOperation, lhit: bool, inl: bool, inr: bool) -> bool:
    if op is CsgOperation.UNION:
        return (lhit and not inr) or (not lhit and not inl)
    if op is CsgOperation.INTERSECTION:
        return (lhit and inr) or (not lhit and inl)
    return (lhit and not inr) or (not lhit and inl)


# (operation, left_hit, inside_left, inside_right) -> keep the hit?
CSG_RULES: dict[tuple[CsgOperation, bool, bool, bool], bool] = {
    (op, lhit, inl, inr): _rule(op, lhit, inl, inr)
    for op in CsgOperation
    for lhit, inl, inr in product((True, False), repeat=3)
}


def intersection_allowed(op: CsgOperation, lhit: bool, inl: bool, inr: bool) -> bool:
    """Whether a hit lies on the surface of the combined solid.

    Args:
        op: The CSG operation.
        lhit: True if the hit is on the left operand, False for the right.
        inl: True if the ray is inside the left operand at this hit.
        inr: True if the ray is inside the right operand at this hit.
    """
    return CSG_RULES[(op, lhit, inl, inr)]


class Csg(Container):
    """A binary CSG node.

    Attributes:
        operation: How the operands are combined.
        left: Left operand.
        right: Right operand.
    """

    def __init__(
        self,
        operation: CsgOperation | str,
        left: Shape,
        right: Shape,
        transform: Matrix | None = None,
    ) -> None:
        if left is right:
            raise ValueError("CSG operands must be two distinct shapes")
        for operand in (left, right):
            if operand.parent is not None:
                raise ValueError(
                    f"{operand!r} already belongs to {operand.parent!r}; "
                    "a shape can have only one parent"
                )
        self.operation = CsgOperation(operation)
        self.left = left
        self.right = right
        super().__init__(transform=transform)
        left._attach(self)
        right._attach(self)

    @classmethod
    def union(cls, left: Shape, right: Shape, transform: Matrix | None = None) -> Csg:
        return cls(CsgOperation.UNION, left, right, transform)

    @classmethod
    def intersection(cls, left: Shape, right: Shape, transform: Matrix | None = None) -> Csg:
        return cls(CsgOperation.INTERSECTION, left, right, transform)

    @classmethod
    def difference(cls, left: Shape, right: Shape, transform: Matrix | None = None) -> Csg:
        return cls(CsgOperation.DIFFERENCE, left, right, transform)

    def __repr__(self) -> str:
        return f"Csg({self.operation.value}, {self.left!r}, {self.right!r})"

    @property
    def children(self) -> list[Shape]:
        return [self.left, self.right]

    def filter_intersections(self, xs: Iterable[Intersection]) -> list[Intersection]:
        """Keep only the hits that bound the combined solid.

        Args:
            xs: Hits on either operand, sorted by t.
        """
        inl = False
        inr = False
        result = []
        for i in xs:
            lhit = self.left.includes(i.shape)
            if intersection_allowed(self.operation, lhit, inl, inr):
                result.append(i)
            if lhit:
                inl = not inl
            else:
                inr = not inr
        return result

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        if not self.bounds().intersects(ray):
            return []
        xs = sort_intersections(self.left.intersect(ray) + self.right.intersect(ray))
        return self.filter_intersections(xs)
