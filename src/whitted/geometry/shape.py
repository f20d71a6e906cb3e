"""Abstract base for everything a ray can hit.

Every shape carries a transform (object space to parent space), a material
and an optional parent. ``intersect`` and ``normal_at`` work in world space;
subclasses implement ``local_intersect`` and ``local_normal_at`` in their own
object space, where each primitive has a canonical size and position.

Parents are held through a weak reference so that a group owns its children
and not the other way round. A shape belongs to at most one group or CSG
node at a time.
"""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from whitted.core.intersection import Intersection
from whitted.core.matrix import Matrix, identity
from whitted.core.ray import Ray
from whitted.core.tuples import Tuple, vector
from whitted.geometry.bounds import BoundingBox
from whitted.materials.material import Material

if TYPE_CHECKING:
    from collections.abc import Iterable


class Shape(ABC):
    """Base class for primitives, groups and CSG nodes.

    Shapes deliberately keep identity equality: intersection bookkeeping
    (refraction containers, CSG membership) asks "is this the same object",
    never "does this look the same".

    Attributes:
        material: Surface material used when this shape is shaded.
    """

    def __init__(self, transform: Matrix | None = None, material: Material | None = None) -> None:
        self._parent: weakref.ref[Shape] | None = None
        self._bounds_cache: BoundingBox | None = None
        self.transform = transform if transform is not None else identity()
        self.material = material if material is not None else Material()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    # -------------------------------------------------------------------------
    # Pickling: weak references cannot be pickled. Containers restore their
    # children's parent links in their own __setstate__.
    # -------------------------------------------------------------------------

    def __getstate__(self) -> dict:
        state = self.__dict__.copy()
        state["_parent"] = None
        return state

    def __setstate__(self, state: dict) -> None:
        self.__dict__.update(state)

    # -------------------------------------------------------------------------
    # Transform and hierarchy
    # -------------------------------------------------------------------------

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, matrix: Matrix) -> None:
        # inverse() raises ValueError for singular matrices.
        inverse = matrix.inverse()
        self._transform = matrix
        self._inverse = inverse
        self._inverse_transpose = inverse.transpose()
        self._invalidate_bounds()

    @property
    def inverse(self) -> Matrix:
        return self._inverse

    @property
    def parent(self) -> Shape | None:
        if self._parent is None:
            return None
        return self._parent()

    def _attach(self, parent: Shape) -> None:
        current = self.parent
        if current is not None and current is not parent:
            raise ValueError(
                f"{self!r} already belongs to {current!r}; a shape can have only one parent"
            )
        self._parent = weakref.ref(parent)
        self._invalidate_bounds()

    def _invalidate_bounds(self) -> None:
        self._bounds_cache = None
        parent = self.parent
        if parent is not None:
            parent._invalidate_bounds()

    def world_to_object(self, world_point: Tuple) -> Tuple:
        """Convert a world-space point into this shape's object space."""
        parent = self.parent
        if parent is not None:
            world_point = parent.world_to_object(world_point)
        return self._inverse @ world_point

    def normal_to_world(self, normal: Tuple) -> Tuple:
        """Convert an object-space normal into a unit world-space normal."""
        n = self._inverse_transpose @ normal
        n = vector(n.x, n.y, n.z).normalize()
        parent = self.parent
        if parent is not None:
            n = parent.normal_to_world(n)
        return n

    def includes(self, shape: Shape) -> bool:
        """True if ``shape`` is this shape or one of its descendants."""
        return shape is self

    def set_material(self, material: Material) -> None:
        """Assign a material. Containers pass it down to every descendant."""
        self.material = material

    # -------------------------------------------------------------------------
    # Intersection and normals
    # -------------------------------------------------------------------------

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a world-space (or parent-space) ray with this shape.

        Returns:
            Intersections sorted ascending by t. The ray is transformed into
            object space unnormalized, so t values are valid for ``ray``.
        """
        return self.local_intersect(ray.transform(self._inverse))

    def normal_at(self, world_point: Tuple, hit: Intersection | None = None) -> Tuple:
        """Unit surface normal at a world-space point.

        Args:
            world_point: A point on the surface.
            hit: The intersection that produced the point; smooth triangles
                read its barycentric coordinates.
        """
        local_point = self.world_to_object(world_point)
        local_normal = self.local_normal_at(local_point, hit)
        return self.normal_to_world(local_normal)

    def _intersections(self, ts: Iterable[float]) -> list[Intersection]:
        return [Intersection(t, self) for t in ts]

    @abstractmethod
    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect an object-space ray; return hits sorted by t."""

    @abstractmethod
    def local_normal_at(self, local_point: Tuple, hit: Intersection | None = None) -> Tuple:
        """Object-space normal at an object-space point (not normalized)."""

    # -------------------------------------------------------------------------
    # Bounds
    # -------------------------------------------------------------------------

    @abstractmethod
    def bounds(self) -> BoundingBox:
        """Object-space bounding box."""

    def parent_space_bounds(self) -> BoundingBox:
        """Bounding box after this shape's own transform."""
        return self.bounds().transform(self._transform)


class Container(Shape):
    """Shared behaviour for shapes that own other shapes."""

    def __setstate__(self, state: dict) -> None:
        super().__setstate__(state)
        for child in self.children:
            child._parent = weakref.ref(self)

    @property
    def children(self) -> list[Shape]:
        raise NotImplementedError

    def includes(self, shape: Shape) -> bool:
        return shape is self or any(child.includes(shape) for child in self.children)

    def set_material(self, material: Material) -> None:
        self.material = material
        for child in self.children:
            child.set_material(material)

    def bounds(self) -> BoundingBox:
        if self._bounds_cache is None:
            box = BoundingBox()
            for child in self.children:
                box.add_box(child.parent_space_bounds())
            self._bounds_cache = box
        return self._bounds_cache

    def local_normal_at(self, local_point: Tuple, hit: Intersection | None = None) -> Tuple:
        raise TypeError(
            f"{type(self).__name__} has no surface of its own; normals come from its leaf shapes"
        )
