"""Geometry module: shape primitives, groups and CSG.

Components:
    shape: Abstract Shape base (transforms, parents, normals)
    bounds: Axis-aligned bounding boxes and the slab test
    sphere: Unit sphere and the glass_sphere helper
    plane: Infinite xz plane
    cube: Axis-aligned cube
    cylinder: Truncatable, cappable cylinder and cone
    triangle: Flat and smooth triangles
    group: Transformable collection of shapes
    csg: Union, intersection and difference of two shapes

Every ``intersect`` returns intersections sorted ascending by t.
"""

from .bounds import BoundingBox, check_axis, slab_intersect
from .csg import CSG_RULES, Csg, CsgOperation, intersection_allowed
from .cube import Cube
from .cylinder import Cone, Cylinder
from .group import Group
from .plane import Plane
from .shape import Shape
from .sphere import Sphere, glass_sphere, solve_quadratic
from .triangle import SmoothTriangle, Triangle

__all__ = [
    "Shape",
    "BoundingBox",
    "check_axis",
    "slab_intersect",
    "Sphere",
    "glass_sphere",
    "solve_quadratic",
    "Plane",
    "Cube",
    "Cylinder",
    "Cone",
    "Triangle",
    "SmoothTriangle",
    "Group",
    "Csg",
    "CsgOperation",
    "CSG_RULES",
    "intersection_allowed",
]
