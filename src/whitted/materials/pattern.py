"""Procedural color patterns.

A pattern maps a point in pattern space to a color. Pattern space is reached
from world space through the shape's ``world_to_object`` (including every
ancestor group) and then the pattern's own inverse transform.

Two-component patterns (stripe, gradient, ring, checker) accept either plain
colors or nested patterns. A nested pattern applies its own transform on top
of the enclosing pattern's space.

Example:
    >>> from whitted.core.tuples import BLACK, WHITE, point
    >>> from whitted.materials.pattern import Stripe
    >>> stripes = Stripe(WHITE, BLACK)
    >>> stripes.pattern_at(point(1.5, 0, 0)) == BLACK
    True
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Union

from whitted.core.matrix import Matrix, identity
from whitted.core.tuples import Color, Tuple

if TYPE_CHECKING:
    from whitted.geometry.shape import Shape

PatternComponent = Union[Color, "Pattern"]


class Pattern(ABC):
    """Base class for patterns with their own transform."""

    def __init__(self, transform: Matrix | None = None) -> None:
        self.transform = transform if transform is not None else identity()

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, matrix: Matrix) -> None:
        self._inverse = matrix.inverse()
        self._transform = matrix

    @abstractmethod
    def pattern_at(self, pattern_point: Tuple) -> Color:
        """Color at a point already in this pattern's space."""

    def color_at_local(self, point: Tuple) -> Color:
        """Color at a point in the space enclosing this pattern."""
        return self.pattern_at(self._inverse @ point)

    def pattern_at_shape(self, shape: Shape, world_point: Tuple) -> Color:
        """Color of ``shape`` at a world-space point."""
        return self.color_at_local(shape.world_to_object(world_point))


def _resolve(component: PatternComponent, pattern_point: Tuple) -> Color:
    if isinstance(component, Pattern):
        return component.color_at_local(pattern_point)
    return component


class _TwoComponent(Pattern):
    def __init__(
        self, a: PatternComponent, b: PatternComponent, transform: Matrix | None = None
    ) -> None:
        super().__init__(transform)
        self.a = a
        self.b = b

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.a!r}, {self.b!r})"


class Solid(Pattern):
    """A single color everywhere; useful as a nested component."""

    def __init__(self, color: Color, transform: Matrix | None = None) -> None:
        super().__init__(transform)
        self.color = color

    def pattern_at(self, pattern_point: Tuple) -> Color:
        return self.color


class Stripe(_TwoComponent):
    """Alternates a and b on unit-wide bands along x."""

    def pattern_at(self, pattern_point: Tuple) -> Color:
        if math.floor(pattern_point.x) % 2 == 0:
            return _resolve(self.a, pattern_point)
        return _resolve(self.b, pattern_point)


class Gradient(_TwoComponent):
    """Linear blend from a to b across each unit interval of x."""

    def pattern_at(self, pattern_point: Tuple) -> Color:
        a = _resolve(self.a, pattern_point)
        b = _resolve(self.b, pattern_point)
        fraction = pattern_point.x - math.floor(pattern_point.x)
        return a + (b - a) * fraction


class Ring(_TwoComponent):
    """Concentric unit-wide rings around the y axis."""

    def pattern_at(self, pattern_point: Tuple) -> Color:
        distance = math.hypot(pattern_point.x, pattern_point.z)
        if math.floor(distance) % 2 == 0:
            return _resolve(self.a, pattern_point)
        return _resolve(self.b, pattern_point)


class Checker(_TwoComponent):
    """3D checkerboard of unit cubes."""

    def pattern_at(self, pattern_point: Tuple) -> Color:
        total = (
            math.floor(pattern_point.x)
            + math.floor(pattern_point.y)
            + math.floor(pattern_point.z)
        )
        if total % 2 == 0:
            return _resolve(self.a, pattern_point)
        return _resolve(self.b, pattern_point)


class Blended(Pattern):
    """Per-channel average of two patterns."""

    def __init__(self, a: Pattern, b: Pattern, transform: Matrix | None = None) -> None:
        super().__init__(transform)
        self.a = a
        self.b = b

    def pattern_at(self, pattern_point: Tuple) -> Color:
        return (self.a.color_at_local(pattern_point) + self.b.color_at_local(pattern_point)) * 0.5
