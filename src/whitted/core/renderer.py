"""Row-chunked renderer with progress reporting and process parallelism.

Pixels are independent, so the image is split into blocks of rows. With one
worker the blocks are traced in-process; with more, they are mapped over a
``ProcessPoolExecutor`` whose workers each receive a pickled copy of the
world once, at start-up. Primary rays can be generated for the whole image by
the Taichi kernel in ``whitted.camera.raygen`` or per pixel by the camera.

Example:
    >>> from whitted.core.renderer import Renderer, RenderSettings
    >>> from whitted.scene.showcase import create_three_spheres_scene
    >>>
    >>> world, camera = create_three_spheres_scene(160, 90)
    >>> renderer = Renderer(camera, world, RenderSettings(workers=4))
    >>> for done, total in renderer.render_progressive():
    ...     print(f"{done}/{total} rows")
    >>> canvas = renderer.canvas
"""

from __future__ import annotations

import logging
import multiprocessing
import time
from collections.abc import Callable, Generator
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from whitted.core.canvas import Canvas
from whitted.core.integrator import MAX_DEPTH, color_at
from whitted.core.ray import Ray
from whitted.core.tuples import point, vector

if TYPE_CHECKING:
    from whitted.camera.camera import Camera
    from whitted.scene.world import World

logger = logging.getLogger(__name__)

# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]

RayArrays = tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]


@dataclass
class RenderSettings:
    """Settings for a render.

    Attributes:
        max_depth: Recursion budget for reflection and refraction rays.
        workers: Number of processes. 1 renders in the calling process.
        rows_per_chunk: Rows per work item. None picks about four chunks
            per worker.
        use_taichi_raygen: Generate primary rays with the Taichi kernel.
            Taichi must already be initialized.
    """

    max_depth: int = MAX_DEPTH
    workers: int = 1
    rows_per_chunk: int | None = None
    use_taichi_raygen: bool = False

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.rows_per_chunk is not None and self.rows_per_chunk < 1:
            raise ValueError(f"rows_per_chunk must be at least 1, got {self.rows_per_chunk}")


# =============================================================================
# Tracing (runs in the main process or in pool workers)
# =============================================================================

_worker_world: World | None = None
_worker_max_depth: int = MAX_DEPTH


def _init_worker(world: World, max_depth: int) -> None:
    global _worker_world, _worker_max_depth
    _worker_world = world
    _worker_max_depth = max_depth


def trace_rays(
    world: World,
    origins: npt.NDArray[np.float64],
    directions: npt.NDArray[np.float64],
    max_depth: int = MAX_DEPTH,
) -> npt.NDArray[np.float64]:
    """Shade a block of rays.

    Args:
        world: The scene.
        origins: Ray origins, shape (rows, width, 3).
        directions: Ray directions, same shape.
        max_depth: Recursion budget.

    Returns:
        Colors of shape (rows, width, 3).
    """
    colors = np.zeros(origins.shape, dtype=np.float64)
    rows, width, _ = origins.shape
    for i in range(rows):
        for j in range(width):
            ray = Ray(point(*origins[i, j]), vector(*directions[i, j]))
            colors[i, j] = color_at(world, ray, max_depth).as_tuple()
    return colors


def _trace_chunk(task: tuple[int, npt.NDArray[np.float64], npt.NDArray[np.float64]]):
    row_start, origins, directions = task
    if _worker_world is None:
        raise RuntimeError("Render worker used before it was initialized")
    return row_start, trace_rays(_worker_world, origins, directions, _worker_max_depth)


# =============================================================================
# Renderer
# =============================================================================


class Renderer:
    """Renders a world through a camera into a canvas.

    Attributes:
        camera: The camera.
        world: The scene; it must not change while rendering.
        settings: Render settings.
    """

    def __init__(self, camera: Camera, world: World, settings: RenderSettings | None = None) -> None:
        self.camera = camera
        self.world = world
        self.settings = settings if settings is not None else RenderSettings()
        self._canvas = Canvas(camera.hsize, camera.vsize)

    def __repr__(self) -> str:
        return (
            f"Renderer({self.camera.hsize}x{self.camera.vsize}, "
            f"workers={self.settings.workers}, max_depth={self.settings.max_depth})"
        )

    @property
    def canvas(self) -> Canvas:
        """The canvas being rendered into."""
        return self._canvas

    def row_chunks(self) -> list[tuple[int, int]]:
        """Split the image rows into [start, end) blocks."""
        height = self.camera.vsize
        size = self.settings.rows_per_chunk
        if size is None:
            size = max(1, height // (self.settings.workers * 4))
        return [(start, min(start + size, height)) for start in range(0, height, size)]

    def primary_rays(self, row_start: int, row_end: int) -> RayArrays:
        """Primary ray origins and directions for rows [row_start, row_end)."""
        if self.settings.use_taichi_raygen:
            from whitted.camera.raygen import generate_primary_rays

            return generate_primary_rays(self.camera, row_start, row_end)

        shape = (row_end - row_start, self.camera.hsize, 3)
        origins = np.zeros(shape, dtype=np.float64)
        directions = np.zeros(shape, dtype=np.float64)
        for i, py in enumerate(range(row_start, row_end)):
            for px in range(self.camera.hsize):
                ray = self.camera.ray_for_pixel(px, py)
                origins[i, px] = (ray.origin.x, ray.origin.y, ray.origin.z)
                directions[i, px] = (ray.direction.x, ray.direction.y, ray.direction.z)
        return origins, directions

    def _tasks(self, chunks: list[tuple[int, int]]):
        if self.settings.use_taichi_raygen:
            # One kernel launch for the whole image, sliced per chunk.
            origins, directions = self.primary_rays(0, self.camera.vsize)
            for start, end in chunks:
                yield start, origins[start:end], directions[start:end]
        else:
            for start, end in chunks:
                yield (start, *self.primary_rays(start, end))

    def render_progressive(self) -> Generator[tuple[int, int], None, None]:
        """Render, yielding progress after each block of rows.

        Yields:
            Tuple of (rows_completed, total_rows).
        """
        settings = self.settings
        total = self.camera.vsize
        chunks = self.row_chunks()
        logger.info(
            "Rendering %dx%d: %d shapes, %d lights, %d chunks, %d worker(s), max depth %d",
            self.camera.hsize,
            total,
            len(self.world.shapes),
            len(self.world.lights),
            len(chunks),
            settings.workers,
            settings.max_depth,
        )
        start_time = time.perf_counter()

        done = 0
        if settings.workers == 1:
            for row_start, origins, directions in self._tasks(chunks):
                colors = trace_rays(self.world, origins, directions, settings.max_depth)
                self._canvas.write_rows(row_start, colors)
                done += colors.shape[0]
                yield done, total
        else:
            # Spawned workers start clean instead of inheriting a forked Taichi runtime.
            with ProcessPoolExecutor(
                max_workers=settings.workers,
                mp_context=multiprocessing.get_context("spawn"),
                initializer=_init_worker,
                initargs=(self.world, settings.max_depth),
            ) as executor:
                for row_start, colors in executor.map(_trace_chunk, self._tasks(chunks)):
                    self._canvas.write_rows(row_start, colors)
                    done += colors.shape[0]
                    yield done, total

        logger.info("Render finished in %.2fs", time.perf_counter() - start_time)

    def render(self, callback: ProgressCallback | None = None) -> Canvas:
        """Render the whole image.

        Args:
            callback: Optional function called after each block of rows with
                (rows_completed, total_rows).

        Returns:
            The rendered canvas.
        """
        for done, total in self.render_progressive():
            if callback is not None:
                callback(done, total)
        return self._canvas
