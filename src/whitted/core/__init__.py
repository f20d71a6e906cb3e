"""Core rendering module.

Components:
    tuples: Points, vectors and colors
    matrix: 4x4 transforms and the view transform
    ray: Ray data structure
    intersection: Intersection records, hit selection, shading computations
        and the Schlick approximation
    integrator: Recursive Whitted shading (shadows, reflection, refraction)
    canvas: Pixel buffer with PPM output
    renderer: Row-chunked serial and multi-process rendering

The integrator and renderer depend on the geometry and scene packages, so
they are NOT imported here. Import them directly:
    from whitted.core.integrator import color_at
    from whitted.core.renderer import Renderer, RenderSettings
"""

from .canvas import Canvas
from .intersection import (
    Computations,
    Intersection,
    hit,
    prepare_computations,
    schlick,
    sort_intersections,
)
from .matrix import (
    Matrix,
    identity,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from .ray import Ray
from .tuples import BLACK, EPSILON, WHITE, Color, Tuple, approx_equal, point, vector

__all__ = [
    # Tuples
    "Tuple",
    "Color",
    "point",
    "vector",
    "approx_equal",
    "EPSILON",
    "BLACK",
    "WHITE",
    # Matrices
    "Matrix",
    "identity",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "view_transform",
    # Rays and intersections
    "Ray",
    "Intersection",
    "Computations",
    "hit",
    "sort_intersections",
    "prepare_computations",
    "schlick",
    # Output
    "Canvas",
]
