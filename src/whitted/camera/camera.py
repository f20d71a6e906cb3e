"""Pinhole camera with a view transform.

The camera sits at the origin of camera space looking down -z, with the
image plane at z = -1. The canvas is ``hsize`` x ``vsize`` pixels and the
field of view spans the longer image dimension. The camera transform (usually
built with ``view_transform``) maps world space into camera space, so its
inverse carries camera-space points back into the world.

Example:
    >>> import math
    >>> from whitted.camera.camera import Camera
    >>> from whitted.core.tuples import vector
    >>> camera = Camera(201, 101, math.pi / 2)
    >>> ray = camera.ray_for_pixel(100, 50)
    >>> ray.direction == vector(0, 0, -1)
    True
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import TYPE_CHECKING

from whitted.core.canvas import Canvas
from whitted.core.integrator import MAX_DEPTH, color_at
from whitted.core.matrix import Matrix, identity, view_transform
from whitted.core.ray import Ray
from whitted.core.tuples import Tuple, point, vector

if TYPE_CHECKING:
    from whitted.scene.world import World


class Camera:
    """A pinhole camera.

    Attributes:
        hsize: Canvas width in pixels.
        vsize: Canvas height in pixels.
        field_of_view: Angle in radians covered by the longer image side.
        half_width: Half the image plane width at z = -1.
        half_height: Half the image plane height at z = -1.
        pixel_size: World-space size of one pixel on the image plane.
    """

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: Matrix | None = None,
    ) -> None:
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {hsize}x{vsize}")
        if not 0.0 < field_of_view < math.pi:
            raise ValueError(f"field_of_view must be in (0, pi) radians, got {field_of_view}")

        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view
        self.transform = transform if transform is not None else identity()

        half_view = math.tan(field_of_view / 2.0)
        aspect = hsize / vsize
        if aspect >= 1.0:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = (self.half_width * 2.0) / hsize

    @classmethod
    def look_at(
        cls,
        hsize: int,
        vsize: int,
        field_of_view: float,
        from_point: Tuple,
        to_point: Tuple,
        up: Tuple | None = None,
    ) -> Camera:
        """Build a camera at ``from_point`` looking at ``to_point``."""
        transform = view_transform(from_point, to_point, up if up is not None else vector(0, 1, 0))
        return cls(hsize, vsize, field_of_view, transform)

    def __repr__(self) -> str:
        return (
            f"Camera(hsize={self.hsize}, vsize={self.vsize}, "
            f"field_of_view={self.field_of_view:.4f})"
        )

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, matrix: Matrix) -> None:
        self._inverse = matrix.inverse()
        self._transform = matrix

    @property
    def inverse(self) -> Matrix:
        return self._inverse

    def ray_for_pixel(self, px: int, py: int) -> Ray:
        """World-space ray through the center of pixel (px, py).

        Args:
            px: Column, 0 at the left edge.
            py: Row, 0 at the top edge.
        """
        xoffset = (px + 0.5) * self.pixel_size
        yoffset = (py + 0.5) * self.pixel_size

        # The camera looks toward -z, so +x is to the left.
        world_x = self.half_width - xoffset
        world_y = self.half_height - yoffset

        pixel = self._inverse @ point(world_x, world_y, -1.0)
        origin = self._inverse @ point(0.0, 0.0, 0.0)
        direction = (pixel - origin).normalize()
        return Ray(origin, direction)

    def pixels(self) -> Iterator[tuple[int, int]]:
        """Iterate (px, py) in row-major order."""
        for py in range(self.vsize):
            for px in range(self.hsize):
                yield px, py

    def render(self, world: World, max_depth: int = MAX_DEPTH) -> Canvas:
        """Render ``world`` serially into a new canvas.

        See ``whitted.core.renderer.Renderer`` for progress reporting and
        multi-process rendering.
        """
        canvas = Canvas(self.hsize, self.vsize)
        for px, py in self.pixels():
            canvas.write_pixel(px, py, color_at(world, self.ray_for_pixel(px, py), max_depth))
        return canvas
