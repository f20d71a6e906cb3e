"""Built-in demonstration scenes.

Each factory returns ``(world, camera)`` for the requested image size:

- three_spheres: spheres on a checkered floor, one of them a mirror
- glass: a hollow glass sphere over a striped, reflective floor
- csg: a die carved from a cube, a sphere and three cylinders
- cornell_box: a Whitted take on the Cornell box with a mirror sphere and a
  glass sphere

Example:
    >>> from whitted.scene.showcase import SCENES
    >>> world, camera = SCENES["cornell_box"](200, 200)
    >>> canvas = camera.render(world)
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from whitted.camera.camera import Camera
from whitted.core.matrix import rotation_x, rotation_y, rotation_z, scaling, translation
from whitted.core.tuples import Color, point, vector
from whitted.geometry.csg import Csg
from whitted.geometry.cube import Cube
from whitted.geometry.cylinder import Cone, Cylinder
from whitted.geometry.group import Group
from whitted.geometry.plane import Plane
from whitted.geometry.sphere import Sphere
from whitted.materials.lighting import PointLight
from whitted.materials.material import GLASS, Material
from whitted.materials.pattern import Blended, Checker, Ring, Stripe
from whitted.scene.world import World

SceneFactory = Callable[[int, int], tuple[World, Camera]]


# =============================================================================
# Cornell Box Parameters
# =============================================================================


@dataclass
class CornellBoxParams:
    """Parameters for the Cornell box scene.

    Attributes:
        light_position: Point light position inside the box, near the ceiling.
        light_color: RGB intensity of the light.
        left_wall_color: RGB color of the left wall.
        right_wall_color: RGB color of the right wall.
        back_wall_color: RGB color of the back wall, floor and ceiling.
    """

    light_position: tuple[float, float, float] = (0.0, 4.5, -1.0)
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    left_wall_color: tuple[float, float, float] = (0.65, 0.05, 0.05)
    right_wall_color: tuple[float, float, float] = (0.12, 0.45, 0.15)
    back_wall_color: tuple[float, float, float] = (0.73, 0.73, 0.73)


# Half the side length of the Cornell box.
BOX_HALF_SIZE = 2.5


def _wall(transform, color: tuple[float, float, float]) -> Plane:
    return Plane(
        transform=transform,
        material=Material(color=Color(*color), ambient=0.15, diffuse=0.8, specular=0.0),
    )


def create_cornell_box_scene(
    width: int = 256,
    height: int = 256,
    params: CornellBoxParams | None = None,
) -> tuple[World, Camera]:
    """Cornell box with a mirror sphere and a glass sphere.

    The box spans [-2.5, 2.5] in x and z and [0, 5] in y. The front is open
    and the camera looks in along +z.
    """
    if params is None:
        params = CornellBoxParams()
    s = BOX_HALF_SIZE

    floor = _wall(None, params.back_wall_color)
    ceiling = _wall(translation(0, 2 * s, 0), params.back_wall_color)
    back = _wall(translation(0, 0, s) @ rotation_x(math.pi / 2), params.back_wall_color)
    left = _wall(translation(-s, 0, 0) @ rotation_z(math.pi / 2), params.left_wall_color)
    right = _wall(translation(s, 0, 0) @ rotation_z(math.pi / 2), params.right_wall_color)

    mirror = Sphere(
        transform=translation(-1.0, 0.9, 0.8) @ scaling(0.9, 0.9, 0.9),
        material=Material(
            color=Color(0.1, 0.1, 0.1), diffuse=0.1, specular=1.0, shininess=300, reflective=0.9
        ),
    )
    glass = Sphere(
        transform=translation(1.0, 0.8, -0.6) @ scaling(0.8, 0.8, 0.8),
        material=Material(
            color=Color(0.05, 0.05, 0.05),
            diffuse=0.1,
            specular=1.0,
            shininess=300,
            reflective=0.9,
            transparency=0.9,
            refractive_index=GLASS,
        ),
    )

    light = PointLight(point(*params.light_position), Color(*params.light_color))
    world = World([floor, ceiling, back, left, right, mirror, glass], [light])
    camera = Camera.look_at(
        width, height, math.radians(60), point(0, s, -3 * s), point(0, s, 0), vector(0, 1, 0)
    )
    return world, camera


def create_three_spheres_scene(width: int = 320, height: int = 180) -> tuple[World, Camera]:
    """Three spheres on a checkered floor in front of a ringed wall."""
    floor = Plane(
        material=Material(
            pattern=Checker(Color(0.9, 0.9, 0.9), Color(0.1, 0.1, 0.1)),
            specular=0.0,
            reflective=0.1,
        )
    )
    wall = Plane(
        transform=translation(0, 0, 10) @ rotation_x(math.pi / 2),
        material=Material(
            pattern=Ring(Color(0.8, 0.7, 0.5), Color(0.6, 0.5, 0.3), scaling(0.5, 0.5, 0.5)),
            specular=0.0,
        ),
    )

    middle = Sphere(
        transform=translation(-0.5, 1, 0.5),
        material=Material(color=Color(0.1, 0.1, 0.1), diffuse=0.2, specular=1.0, reflective=0.8),
    )
    right = Sphere(
        transform=translation(1.5, 0.5, -0.5) @ scaling(0.5, 0.5, 0.5),
        material=Material(
            pattern=Stripe(
                Color(0.5, 1, 0.1),
                Color(0.2, 0.6, 0.1),
                rotation_z(math.pi / 4) @ scaling(0.2, 0.2, 0.2),
            ),
            diffuse=0.7,
            specular=0.3,
        ),
    )
    left = Sphere(
        transform=translation(-1.5, 0.33, -0.75) @ scaling(0.33, 0.33, 0.33),
        material=Material(color=Color(1, 0.8, 0.1), diffuse=0.7, specular=0.3),
    )

    light = PointLight(point(-10, 10, -10), Color(1, 1, 1))
    world = World([floor, wall, middle, right, left], [light])
    camera = Camera.look_at(
        width, height, math.pi / 3, point(0, 1.5, -5), point(0, 1, 0), vector(0, 1, 0)
    )
    return world, camera


def create_glass_scene(width: int = 320, height: int = 180) -> tuple[World, Camera]:
    """A glass sphere with an air bubble inside, over a reflective floor."""
    floor = Plane(
        transform=translation(0, -1, 0),
        material=Material(
            pattern=Blended(
                Stripe(Color(0.9, 0.2, 0.2), Color(0.9, 0.9, 0.9)),
                Stripe(Color(0.9, 0.2, 0.2), Color(0.9, 0.9, 0.9), rotation_y(math.pi / 2)),
            ),
            specular=0.0,
            reflective=0.2,
        ),
    )
    shell = Sphere(
        material=Material(
            color=Color(0.0, 0.0, 0.0),
            ambient=0.0,
            diffuse=0.1,
            specular=1.0,
            shininess=300,
            reflective=1.0,
            transparency=1.0,
            refractive_index=1.5,
            casts_shadows=False,
        ),
    )
    bubble = Sphere(
        transform=scaling(0.5, 0.5, 0.5),
        material=Material(
            color=Color(0.0, 0.0, 0.0),
            ambient=0.0,
            diffuse=0.0,
            specular=1.0,
            shininess=300,
            reflective=1.0,
            transparency=1.0,
            refractive_index=1.0000034,
            casts_shadows=False,
        ),
    )
    cone = Cone(
        minimum=-1.0,
        maximum=0.0,
        closed=True,
        transform=translation(2.5, 0.0, 2.0),
        material=Material(color=Color(0.2, 0.4, 0.9), diffuse=0.8, specular=0.2),
    )

    light = PointLight(point(-5, 8, -6), Color(1, 1, 1))
    world = World([floor, shell, bubble, cone], [light])
    camera = Camera.look_at(
        width, height, math.pi / 3, point(0, 1.5, -5), point(0, 0, 0), vector(0, 1, 0)
    )
    return world, camera


def create_csg_scene(width: int = 320, height: int = 180) -> tuple[World, Camera]:
    """A die: a rounded cube with three holes drilled through it."""
    body = Csg.intersection(Cube(), Sphere(transform=scaling(1.35, 1.35, 1.35)))
    drill = Group(
        [
            Cylinder(minimum=-2, maximum=2, closed=True, transform=scaling(0.4, 1, 0.4)),
            Cylinder(
                minimum=-2,
                maximum=2,
                closed=True,
                transform=rotation_x(math.pi / 2) @ scaling(0.4, 1, 0.4),
            ),
            Cylinder(
                minimum=-2,
                maximum=2,
                closed=True,
                transform=rotation_z(math.pi / 2) @ scaling(0.4, 1, 0.4),
            ),
        ]
    )
    die = Csg.difference(body, drill, transform=translation(0, 1, 0) @ rotation_y(math.pi / 6))
    die.set_material(
        Material(color=Color(0.9, 0.1, 0.1), diffuse=0.7, specular=0.6, reflective=0.1)
    )

    floor = Plane(
        material=Material(
            pattern=Checker(Color(1, 1, 1), Color(0.3, 0.3, 0.3)), specular=0.0, reflective=0.2
        )
    )

    light = PointLight(point(-6, 8, -8), Color(1, 1, 1))
    world = World([floor, die], [light])
    camera = Camera.look_at(
        width, height, math.pi / 3, point(2, 4, -5), point(0, 1, 0), vector(0, 1, 0)
    )
    return world, camera


SCENES: dict[str, SceneFactory] = {
    "three_spheres": create_three_spheres_scene,
    "glass": create_glass_scene,
    "csg": create_csg_scene,
    "cornell_box": create_cornell_box_scene,
}
