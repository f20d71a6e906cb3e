"""Pixel buffer for rendered images.

The canvas stores unclamped linear float RGB in a NumPy array of shape
``(height, width, 3)``. Clamping and quantization happen only in the
encoders: ``to_ppm`` here, and the PNG export in ``whitted.preview``.

Example:
    >>> from whitted.core.canvas import Canvas
    >>> from whitted.core.tuples import Color
    >>> canvas = Canvas(5, 3)
    >>> canvas.write_pixel(0, 0, Color(1.5, 0, 0))
    >>> canvas.to_ppm().splitlines()[3]
    '255 0 0 0 0 0 0 0 0 0 0 0 0 0 0'
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from whitted.core.tuples import Color

PPM_MAX_VALUE = 255
PPM_LINE_WIDTH = 70


class Canvas:
    """A width x height grid of colors, initially black."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def __repr__(self) -> str:
        return f"Canvas(width={self._width}, height={self._height})"

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the {self._width}x{self._height} canvas"
            )

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        self._check_bounds(x, y)
        self._pixels[y, x] = (color.red, color.green, color.blue)

    def pixel_at(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        r, g, b = self._pixels[y, x]
        return Color(r, g, b)

    def write_rows(self, row_start: int, rows: npt.NDArray[np.float64]) -> None:
        """Copy a block of rendered rows, shape (n, width, 3), into place."""
        row_end = row_start + rows.shape[0]
        if row_start < 0 or row_end > self._height or rows.shape[1:] != (self._width, 3):
            raise ValueError(
                f"Row block of shape {rows.shape} at row {row_start} does not fit "
                f"a {self._width}x{self._height} canvas"
            )
        self._pixels[row_start:row_end] = rows

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a copy of the pixels as a (height, width, 3) float array."""
        return self._pixels.copy()

    def to_ppm(self) -> str:
        """Encode as plain-text PPM (P3).

        Channels are clamped to [0, 1], scaled to 0-255 and rounded. Pixel
        rows are wrapped so that no line exceeds 70 characters, and the text
        ends with a newline.
        """
        scaled = np.clip(self._pixels, 0.0, 1.0) * PPM_MAX_VALUE
        values = np.floor(scaled + 0.5).astype(np.int64)

        lines = ["P3", f"{self._width} {self._height}", str(PPM_MAX_VALUE)]
        for row in values:
            line = ""
            for value in row.reshape(-1):
                token = str(value)
                if not line:
                    line = token
                elif len(line) + 1 + len(token) > PPM_LINE_WIDTH:
                    lines.append(line)
                    line = token
                else:
                    line = f"{line} {token}"
            lines.append(line)
        return "\n".join(lines) + "\n"
