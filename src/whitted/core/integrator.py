"""Whitted-style recursive shading.

A primary ray that hits a surface is shaded with the Phong model for every
light (ambient only where the light is blocked), then spawns at most one
reflection ray and one refraction ray. Recursion is bounded by ``remaining``;
when it reaches zero the secondary contributions are black, so mirrors facing
each other terminate.

When a material is both reflective and transparent, the two secondary colors
are weighted by the Schlick reflectance instead of being added at full
strength.

Example:
    >>> from whitted.core.integrator import color_at
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.tuples import point, vector
    >>> from whitted.scene.world import default_world
    >>> color_at(default_world(), Ray(point(0, 0, -5), vector(0, 1, 0)))
    Color(red=0.0, green=0.0, blue=0.0)
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from whitted.core.intersection import Computations, hit, prepare_computations, schlick
from whitted.core.ray import Ray
from whitted.core.tuples import BLACK, Color, Tuple
from whitted.materials.lighting import PointLight, lighting

if TYPE_CHECKING:
    from whitted.scene.world import World

# Default recursion budget for reflection and refraction.
MAX_DEPTH = 5


def is_shadowed(world: World, point: Tuple, light: PointLight) -> bool:
    """Whether something that casts shadows lies between point and light.

    Args:
        world: The scene.
        point: Surface point, already offset along the normal.
        light: The light being tested.
    """
    v = light.position - point
    distance = v.magnitude()
    xs = world.intersect(Ray(point, v.normalize()))
    for i in xs:
        if i.t >= distance:
            break
        if i.t > 0.0 and i.shape.material.casts_shadows:
            return True
    return False


def shade_hit(world: World, comps: Computations, remaining: int = MAX_DEPTH) -> Color:
    """Color at a precomputed hit: direct light plus secondary rays."""
    material = comps.shape.material

    surface = BLACK
    for light in world.lights:
        shadowed = is_shadowed(world, comps.over_point, light)
        surface = surface + lighting(
            material,
            comps.shape,
            light,
            comps.over_point,
            comps.eyev,
            comps.normalv,
            shadowed,
        )

    reflected = reflected_color(world, comps, remaining)
    refracted = refracted_color(world, comps, remaining)

    if material.reflective > 0.0 and material.transparency > 0.0:
        reflectance = schlick(comps)
        return surface + reflected * reflectance + refracted * (1.0 - reflectance)
    return surface + reflected + refracted


def color_at(world: World, ray: Ray, remaining: int = MAX_DEPTH) -> Color:
    """Trace ``ray`` into the world; black when it hits nothing."""
    xs = world.intersect(ray)
    nearest = hit(xs)
    if nearest is None:
        return BLACK
    comps = prepare_computations(nearest, ray, xs)
    return shade_hit(world, comps, remaining)


def reflected_color(world: World, comps: Computations, remaining: int = MAX_DEPTH) -> Color:
    reflective = comps.shape.material.reflective
    if reflective == 0.0 or remaining <= 0:
        return BLACK
    reflect_ray = Ray(comps.over_point, comps.reflectv)
    return color_at(world, reflect_ray, remaining - 1) * reflective


def refracted_color(world: World, comps: Computations, remaining: int = MAX_DEPTH) -> Color:
    """Color seen through a transparent surface.

    Returns black when the surface is opaque, the recursion budget is spent,
    or the ray undergoes total internal reflection.
    """
    transparency = comps.shape.material.transparency
    if transparency == 0.0 or remaining <= 0:
        return BLACK

    # Snell's law.
    n_ratio = comps.n1 / comps.n2
    cos_i = comps.eyev.dot(comps.normalv)
    sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
    if sin2_t > 1.0:
        return BLACK

    cos_t = math.sqrt(1.0 - sin2_t)
    direction = comps.normalv * (n_ratio * cos_i - cos_t) - comps.eyev * n_ratio
    refract_ray = Ray(comps.under_point, direction)
    return color_at(world, refract_ray, remaining - 1) * transparency
