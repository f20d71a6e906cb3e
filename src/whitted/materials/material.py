"""Phong surface material.

Example:
    >>> from whitted.core.tuples import Color
    >>> from whitted.materials.material import Material
    >>> glass = Material(color=Color(0.1, 0.1, 0.1), transparency=0.9, refractive_index=1.5)
    >>> glass.shininess
    200.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from whitted.core.tuples import Color

if TYPE_CHECKING:
    from whitted.materials.pattern import Pattern

# Common refractive indices.
VACUUM = 1.0
AIR = 1.00029
WATER = 1.333
GLASS = 1.52
DIAMOND = 2.417


@dataclass
class Material:
    """Surface properties for the Phong model and secondary rays.

    Attributes:
        color: Base surface color, ignored when ``pattern`` is set.
        pattern: Optional procedural pattern that replaces ``color``.
        ambient: Ambient coefficient, >= 0.
        diffuse: Diffuse coefficient, >= 0.
        specular: Specular coefficient, >= 0.
        shininess: Specular exponent, > 0.
        reflective: Mirror reflection weight in [0, 1].
        transparency: Transmission weight in [0, 1].
        refractive_index: Index of refraction, >= 1 for physical media.
        casts_shadows: Whether the shape blocks light for shadow rays.
    """

    color: Color = field(default_factory=lambda: Color(1.0, 1.0, 1.0))
    pattern: Pattern | None = None
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = 1.0
    casts_shadows: bool = True

    def __post_init__(self) -> None:
        for name in ("ambient", "diffuse", "specular"):
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"{name} must be non-negative, got {value}")
            setattr(self, name, float(value))
        for name in ("reflective", "transparency"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
            setattr(self, name, float(value))
        if self.shininess <= 0.0:
            raise ValueError(f"shininess must be positive, got {self.shininess}")
        if self.refractive_index <= 0.0:
            raise ValueError(f"refractive_index must be positive, got {self.refractive_index}")
        self.shininess = float(self.shininess)
        self.refractive_index = float(self.refractive_index)
