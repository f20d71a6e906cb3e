"""Batch primary-ray generation with a Taichi kernel.

Shading is recursive and dispatches on Python shape classes, so it stays in
Python. Primary rays, however, are a plain data-parallel map over the pixel
grid and are generated in one Taichi kernel launch per block of rows. The
result matches ``Camera.ray_for_pixel`` pixel for pixel.

Taichi must be initialized before the first call, typically with
``ti.init(arch=ti.cpu, default_fp=ti.f64)``.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from whitted.camera.raygen import generate_primary_rays
    >>> origins, directions = generate_primary_rays(camera, 0, 4)
    >>> directions.shape
    (4, 160, 3)
"""

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import taichi as ti

from whitted.core.ray import Ray
from whitted.core.tuples import point, vector

if TYPE_CHECKING:
    from whitted.camera.camera import Camera


# =============================================================================
# Kernel
# =============================================================================


@ti.kernel
def _primary_rays_kernel(
    inverse: ti.types.ndarray(dtype=ti.f64, ndim=2),
    half_width: ti.f64,
    half_height: ti.f64,
    pixel_size: ti.f64,
    row_start: ti.i32,
    num_rows: ti.i32,
    width: ti.i32,
    origins: ti.types.ndarray(dtype=ti.f64, ndim=3),
    directions: ti.types.ndarray(dtype=ti.f64, ndim=3),
):
    for i, j in ti.ndrange(num_rows, width):
        # Camera-space point on the image plane at z = -1.
        cx = half_width - (ti.cast(j, ti.f64) + 0.5) * pixel_size
        cy = half_height - (ti.cast(row_start + i, ti.f64) + 0.5) * pixel_size
        cz = -1.0

        # The eye is the camera-space origin, i.e. column 3 of the inverse.
        ox = inverse[0, 3]
        oy = inverse[1, 3]
        oz = inverse[2, 3]

        dx = inverse[0, 0] * cx + inverse[0, 1] * cy + inverse[0, 2] * cz + inverse[0, 3] - ox
        dy = inverse[1, 0] * cx + inverse[1, 1] * cy + inverse[1, 2] * cz + inverse[1, 3] - oy
        dz = inverse[2, 0] * cx + inverse[2, 1] * cy + inverse[2, 2] * cz + inverse[2, 3] - oz
        length = ti.sqrt(dx * dx + dy * dy + dz * dz)

        origins[i, j, 0] = ox
        origins[i, j, 1] = oy
        origins[i, j, 2] = oz
        directions[i, j, 0] = dx / length
        directions[i, j, 1] = dy / length
        directions[i, j, 2] = dz / length


# =============================================================================
# Python API
# =============================================================================


def generate_primary_rays(
    camera: "Camera",
    row_start: int = 0,
    row_end: int | None = None,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Generate the primary rays for a block of image rows.

    Args:
        camera: The camera to generate rays for.
        row_start: First row (inclusive).
        row_end: Last row (exclusive). Defaults to the bottom of the image.

    Returns:
        (origins, directions), each of shape (rows, camera.hsize, 3).
        Directions are unit length.

    Raises:
        ValueError: If the row range is empty or outside the image.
    """
    if row_end is None:
        row_end = camera.vsize
    if not 0 <= row_start < row_end <= camera.vsize:
        raise ValueError(
            f"Invalid row range [{row_start}, {row_end}) for an image of height {camera.vsize}"
        )

    num_rows = row_end - row_start
    origins = np.zeros((num_rows, camera.hsize, 3), dtype=np.float64)
    directions = np.zeros((num_rows, camera.hsize, 3), dtype=np.float64)
    inverse = np.ascontiguousarray(camera.inverse.to_numpy(), dtype=np.float64)

    _primary_rays_kernel(
        inverse,
        camera.half_width,
        camera.half_height,
        camera.pixel_size,
        row_start,
        num_rows,
        camera.hsize,
        origins,
        directions,
    )
    ti.sync()
    return origins, directions


def rays_from_arrays(
    origins: npt.NDArray[np.float64],
    directions: npt.NDArray[np.float64],
) -> list[list[Ray]]:
    """Convert ray arrays of shape (rows, width, 3) into nested Ray lists."""
    if origins.shape != directions.shape:
        raise ValueError(f"Array shapes must match: {origins.shape} vs {directions.shape}")
    return [
        [Ray(point(*o), vector(*d)) for o, d in zip(row_o.tolist(), row_d.tolist())]
        for row_o, row_d in zip(origins, directions)
    ]
