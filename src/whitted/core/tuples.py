"""Point, vector and color value types.

Points and vectors share one homogeneous ``Tuple`` type: ``w == 1.0`` marks a
point and ``w == 0.0`` a vector, so both can be pushed through the same 4x4
transform. Translation moves points but leaves vectors untouched because of
the zero ``w``.

Equality is approximate (``EPSILON``). Tuples and colors are therefore not
hashable.

Example:
    >>> from whitted.core.tuples import point, vector
    >>> p = point(1.0, 2.0, 3.0)
    >>> v = vector(0.0, 0.0, 1.0)
    >>> p + v
    Tuple(x=1.0, y=2.0, z=4.0, w=1.0)
    >>> (p - p).magnitude()
    0.0
"""

from __future__ import annotations

import math

# Tolerance used for float comparisons and surface offsets.
EPSILON = 1e-5


def approx_equal(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Compare two floats with an absolute tolerance.

    Infinities compare equal to themselves.
    """
    if a == b:
        return True
    return abs(a - b) < epsilon


# =============================================================================
# Tuple (points and vectors)
# =============================================================================


class Tuple:
    """Homogeneous 3D tuple. Use ``point()`` and ``vector()`` to build one.

    Attributes:
        x, y, z: Cartesian components.
        w: Homogeneous tag, 1.0 for points and 0.0 for vectors.
    """

    __slots__ = ("x", "y", "z", "w")

    def __init__(self, x: float, y: float, z: float, w: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.w = float(w)

    def is_point(self) -> bool:
        return self.w == 1.0

    def is_vector(self) -> bool:
        return self.w == 0.0

    def __add__(self, other: Tuple) -> Tuple:
        return Tuple(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: Tuple) -> Tuple:
        return Tuple(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __neg__(self) -> Tuple:
        return Tuple(-self.x, -self.y, -self.z, -self.w)

    def __mul__(self, scalar: float) -> Tuple:
        return Tuple(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Tuple:
        return Tuple(self.x / scalar, self.y / scalar, self.z / scalar, self.w / scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return (
            approx_equal(self.x, other.x)
            and approx_equal(self.y, other.y)
            and approx_equal(self.z, other.z)
            and approx_equal(self.w, other.w)
        )

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __repr__(self) -> str:
        return f"Tuple(x={self.x}, y={self.y}, z={self.z}, w={self.w})"

    def __getstate__(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.w)

    def __setstate__(self, state: tuple[float, float, float, float]) -> None:
        self.x, self.y, self.z, self.w = state

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w)

    def normalize(self) -> Tuple:
        """Return a unit-length copy.

        The tuple must not be zero-length; callers guarantee this by
        construction.
        """
        m = self.magnitude()
        return Tuple(self.x / m, self.y / m, self.z / m, self.w / m)

    def dot(self, other: Tuple) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def cross(self, other: Tuple) -> Tuple:
        """Cross product of two vectors (the w components are ignored)."""
        return vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def reflect(self, normal: Tuple) -> Tuple:
        """Reflect this vector about ``normal``.

        Args:
            normal: Unit surface normal.

        Returns:
            The mirrored vector ``self - normal * 2 * dot(self, normal)``.
        """
        return self - normal * (2.0 * self.dot(normal))


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point (w = 1)."""
    return Tuple(x, y, z, 1.0)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a vector (w = 0)."""
    return Tuple(x, y, z, 0.0)


# =============================================================================
# Color
# =============================================================================


class Color:
    """Linear RGB color with unclamped float channels."""

    __slots__ = ("red", "green", "blue")

    def __init__(self, red: float, green: float, blue: float) -> None:
        self.red = float(red)
        self.green = float(green)
        self.blue = float(blue)

    @classmethod
    def from_rgb255(cls, red: int, green: int, blue: int) -> Color:
        """Build a color from 8-bit channel values."""
        return cls(red / 255.0, green / 255.0, blue / 255.0)

    def __add__(self, other: Color) -> Color:
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __sub__(self, other: Color) -> Color:
        return Color(self.red - other.red, self.green - other.green, self.blue - other.blue)

    def __mul__(self, other: Color | float) -> Color:
        # Color * Color is the Hadamard (component-wise) product.
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        return Color(self.red * other, self.green * other, self.blue * other)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (
            approx_equal(self.red, other.red)
            and approx_equal(self.green, other.green)
            and approx_equal(self.blue, other.blue)
        )

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self):
        yield self.red
        yield self.green
        yield self.blue

    def __repr__(self) -> str:
        return f"Color(red={self.red}, green={self.green}, blue={self.blue})"

    def __getstate__(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def __setstate__(self, state: tuple[float, float, float]) -> None:
        self.red, self.green, self.blue = state

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
