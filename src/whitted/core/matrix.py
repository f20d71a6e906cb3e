"""4x4 transformation matrices backed by NumPy.

Matrices compose right to left: in ``translation(...) @ scaling(...)`` the
scaling is applied to an object-space point first. ``Matrix @ Tuple``
transforms a point or vector; ``Matrix @ Matrix`` composes.

Example:
    >>> import math
    >>> from whitted.core.matrix import rotation_x, scaling, translation
    >>> from whitted.core.tuples import point
    >>> m = translation(10, 5, 7) @ scaling(5, 5, 5) @ rotation_x(math.pi / 2)
    >>> m @ point(1, 0, 1) == point(15, 0, 7)
    True
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from whitted.core.tuples import EPSILON, Tuple

# Determinants smaller than this are treated as singular.
SINGULAR_TOLERANCE = 1e-12


class Matrix:
    """An immutable 4x4 matrix.

    The NumPy array is kept for composition and inversion. A row tuple copy
    is kept as well because transforming a single Tuple with plain floats is
    considerably faster than a NumPy call per ray.
    """

    __slots__ = ("_data", "_rows")

    def __init__(self, rows: Sequence[Sequence[float]] | npt.NDArray[np.float64]) -> None:
        data = np.array(rows, dtype=np.float64)
        if data.shape != (4, 4):
            raise ValueError(f"Matrix must be 4x4, got shape {data.shape}")
        data.setflags(write=False)
        self._data = data
        self._rows = tuple(tuple(float(v) for v in row) for row in data)

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return self._rows[row][col]

    def __matmul__(self, other):
        if isinstance(other, Matrix):
            return Matrix(self._data @ other._data)
        if isinstance(other, Tuple):
            (a, b, c, d), (e, f, g, h), (i, j, k, q), (m, n, o, p) = self._rows
            x, y, z, w = other.x, other.y, other.z, other.w
            return Tuple(
                a * x + b * y + c * z + d * w,
                e * x + f * y + g * z + h * w,
                i * x + j * y + k * z + q * w,
                m * x + n * y + o * z + p * w,
            )
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return bool(np.allclose(self._data, other._data, rtol=0.0, atol=EPSILON))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix({[list(row) for row in self._rows]})"

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a writable copy of the underlying array."""
        return np.array(self._data)

    def transpose(self) -> Matrix:
        return Matrix(self._data.T)

    def determinant(self) -> float:
        return float(np.linalg.det(self._data))

    def is_invertible(self) -> bool:
        return abs(self.determinant()) > SINGULAR_TOLERANCE

    def inverse(self) -> Matrix:
        """Compute the inverse matrix.

        Returns:
            The inverse, such that ``m @ m.inverse()`` is the identity.

        Raises:
            ValueError: If the matrix is singular. Shape and camera transforms
                must be invertible; a singular one is a scene construction
                error.
        """
        if not self.is_invertible():
            raise ValueError(f"Matrix is not invertible (determinant ~ 0): {self!r}")
        return Matrix(np.linalg.inv(self._data))


# =============================================================================
# Transformation builders
# =============================================================================

_IDENTITY = Matrix(np.identity(4))


def identity() -> Matrix:
    return _IDENTITY


def translation(x: float, y: float, z: float) -> Matrix:
    return Matrix(
        [
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def scaling(x: float, y: float, z: float) -> Matrix:
    return Matrix(
        [
            [x, 0.0, 0.0, 0.0],
            [0.0, y, 0.0, 0.0],
            [0.0, 0.0, z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_x(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_y(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear transform; ``xy`` moves x in proportion to y, and so on."""
    return Matrix(
        [
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def view_transform(from_point: Tuple, to_point: Tuple, up: Tuple) -> Matrix:
    """Orient the world relative to an eye position.

    Args:
        from_point: Eye position.
        to_point: Point the eye looks at.
        up: Approximate up vector; it need not be exactly orthogonal to the
            view direction.

    Returns:
        The world-to-camera transform.
    """
    forward = (to_point - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    orientation = Matrix(
        [
            [left.x, left.y, left.z, 0.0],
            [true_up.x, true_up.y, true_up.z, 0.0],
            [-forward.x, -forward.y, -forward.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return orientation @ translation(-from_point.x, -from_point.y, -from_point.z)
