"""Point lights and the Phong reflection model."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from whitted.core.tuples import BLACK, Color, Tuple
from whitted.materials.material import Material

if TYPE_CHECKING:
    from whitted.geometry.shape import Shape


@dataclass(frozen=True)
class PointLight:
    """An infinitely small light with no falloff.

    Attributes:
        position: World-space point the light sits at.
        intensity: Light color and brightness.
    """

    position: Tuple
    intensity: Color


def surface_color(material: Material, shape: Shape, world_point: Tuple) -> Color:
    """Material color at a point, resolving the pattern if there is one."""
    if material.pattern is not None:
        return material.pattern.pattern_at_shape(shape, world_point)
    return material.color


def lighting(
    material: Material,
    shape: Shape,
    light: PointLight,
    point: Tuple,
    eyev: Tuple,
    normalv: Tuple,
    in_shadow: bool = False,
) -> Color:
    """Phong shading for one light.

    Args:
        material: Material of the surface.
        shape: The shape being shaded; used to place patterns.
        light: The light source.
        point: World-space point being shaded.
        eyev: Unit vector toward the eye.
        normalv: Unit surface normal.
        in_shadow: When True only the ambient term is returned.

    Returns:
        ambient + diffuse + specular contribution of ``light``.
    """
    effective = surface_color(material, shape, point) * light.intensity
    ambient = effective * material.ambient
    if in_shadow:
        return ambient

    lightv = (light.position - point).normalize()
    light_dot_normal = lightv.dot(normalv)
    if light_dot_normal < 0.0:
        # Light is on the other side of the surface.
        return ambient

    diffuse = effective * (material.diffuse * light_dot_normal)

    reflectv = (-lightv).reflect(normalv)
    reflect_dot_eye = reflectv.dot(eyev)
    if reflect_dot_eye <= 0.0:
        specular = BLACK
    else:
        factor = math.pow(reflect_dot_eye, material.shininess)
        specular = light.intensity * (material.specular * factor)

    return ambient + diffuse + specular
