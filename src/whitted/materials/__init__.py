"""Materials module: surface properties, patterns and Phong lighting.

Components:
    material: Material dataclass and common refractive indices
    pattern: Solid, stripe, gradient, ring, checker and blended patterns
    lighting: Point lights and the Phong reflection model
"""

from .lighting import PointLight, lighting, surface_color
from .material import AIR, DIAMOND, GLASS, VACUUM, WATER, Material
from .pattern import Blended, Checker, Gradient, Pattern, Ring, Solid, Stripe

__all__ = [
    "Material",
    "VACUUM",
    "AIR",
    "WATER",
    "GLASS",
    "DIAMOND",
    "Pattern",
    "Solid",
    "Stripe",
    "Gradient",
    "Ring",
    "Checker",
    "Blended",
    "PointLight",
    "lighting",
    "surface_color",
]
