"""Scene description files.

A scene is described by a plain dictionary (usually loaded from JSON) with
three keys: ``camera``, ``lights`` and ``shapes``. ``scene_from_dict``
builds the World and Camera from it.

Example document::

    {
      "camera": {"width": 320, "height": 160, "field_of_view": 60,
                 "from": [0, 1.5, -5], "to": [0, 1, 0], "up": [0, 1, 0]},
      "lights": [{"position": [-10, 10, -10], "intensity": [1, 1, 1]}],
      "shapes": [
        {"type": "plane",
         "material": {"pattern": {"type": "checker",
                                  "a": [1, 1, 1], "b": [0, 0, 0]}}},
        {"type": "sphere",
         "transform": [["scale", 0.5, 0.5, 0.5], ["translate", 0, 1, 0]],
         "material": {"color": [1, 0.2, 0.2], "reflective": 0.3}}
      ]
    }

Transforms are lists of operations applied in the order written, so the
example above scales the sphere first and then moves it. Angles (camera
field of view, rotations) are in degrees.

Shape types: sphere, glass_sphere, plane, cube, cylinder, cone, triangle,
smooth_triangle, group (``children``), csg (``operation``, ``left``,
``right``) and obj (``file``, relative to the scene file).
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from whitted.camera.camera import Camera
from whitted.core.matrix import (
    Matrix,
    identity,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from whitted.core.tuples import Color, Tuple, point, vector
from whitted.geometry.csg import Csg
from whitted.geometry.cube import Cube
from whitted.geometry.cylinder import Cone, Cylinder
from whitted.geometry.group import Group
from whitted.geometry.plane import Plane
from whitted.geometry.shape import Shape
from whitted.geometry.sphere import Sphere, glass_sphere
from whitted.geometry.triangle import SmoothTriangle, Triangle
from whitted.materials.lighting import PointLight
from whitted.materials.material import Material
from whitted.materials.pattern import Blended, Checker, Gradient, Pattern, Ring, Solid, Stripe
from whitted.scene.obj_file import load_obj_file
from whitted.scene.world import World

logger = logging.getLogger(__name__)


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        camera: Camera settings (width, height, field_of_view, from, to, up).
        lights: Point light settings (position, intensity).
        shapes: Top-level shape descriptions.
    """

    camera: dict[str, Any] = field(default_factory=dict)
    lights: list[dict[str, Any]] = field(default_factory=list)
    shapes: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneConfig:
        unknown = set(data) - {"camera", "lights", "shapes"}
        if unknown:
            raise ValueError(f"Unknown scene keys: {sorted(unknown)}")
        return cls(
            camera=data.get("camera", {}),
            lights=data.get("lights", []),
            shapes=data.get("shapes", []),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"camera": self.camera, "lights": self.lights, "shapes": self.shapes}


# =============================================================================
# Value parsing
# =============================================================================


def _require(data: dict[str, Any], key: str, kind: str) -> Any:
    if key not in data:
        raise ValueError(f"{kind} is missing {key!r}")
    return data[key]


def _triple(value: Sequence[float], what: str) -> tuple[float, float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError(f"{what} needs three components, got {value!r}")
    return float(value[0]), float(value[1]), float(value[2])


def _point(value: Sequence[float], what: str = "point") -> Tuple:
    return point(*_triple(value, what))


def _vector(value: Sequence[float], what: str = "vector") -> Tuple:
    return vector(*_triple(value, what))


def _color(value: Sequence[float], what: str = "color") -> Color:
    return Color(*_triple(value, what))


_TRANSFORMS: dict[str, tuple[int, Callable[..., Matrix]]] = {
    "translate": (3, translation),
    "scale": (3, scaling),
    "rotate_x": (1, lambda deg: rotation_x(math.radians(deg))),
    "rotate_y": (1, lambda deg: rotation_y(math.radians(deg))),
    "rotate_z": (1, lambda deg: rotation_z(math.radians(deg))),
    "shear": (6, shearing),
}


def parse_transform(ops: Sequence[Sequence[Any]] | None) -> Matrix:
    """Compose a list of transform operations, first operation applied first.

    Raises:
        ValueError: For an unknown operation or a wrong argument count.
    """
    matrix = identity()
    for op in ops or ():
        if not op:
            raise ValueError("Empty transform operation")
        name, *args = op
        if name not in _TRANSFORMS:
            raise ValueError(f"Unknown transform {name!r}; expected one of {sorted(_TRANSFORMS)}")
        arity, builder = _TRANSFORMS[name]
        if len(args) != arity:
            raise ValueError(f"Transform {name!r} takes {arity} argument(s), got {len(args)}")
        matrix = builder(*(float(a) for a in args)) @ matrix
    return matrix


_PATTERNS: dict[str, type[Pattern]] = {
    "stripe": Stripe,
    "gradient": Gradient,
    "ring": Ring,
    "checker": Checker,
}


def _pattern_component(value: Any) -> Color | Pattern:
    if isinstance(value, dict):
        return parse_pattern(value)
    return _color(value, "pattern color")


def parse_pattern(data: dict[str, Any]) -> Pattern:
    """Build a pattern; components may be colors or nested pattern dicts."""
    kind = data.get("type", "")
    transform = parse_transform(data.get("transform"))
    if kind == "solid":
        return Solid(_color(data.get("color", [1, 1, 1])), transform)
    if kind == "blended":
        return Blended(
            parse_pattern(_require(data, "a", "blended pattern")),
            parse_pattern(_require(data, "b", "blended pattern")),
            transform,
        )
    if kind in _PATTERNS:
        a = _pattern_component(data.get("a", [1, 1, 1]))
        b = _pattern_component(data.get("b", [0, 0, 0]))
        return _PATTERNS[kind](a, b, transform)
    raise ValueError(f"Unknown pattern type: {kind!r}")


_MATERIAL_FLOATS = (
    "ambient",
    "diffuse",
    "specular",
    "shininess",
    "reflective",
    "transparency",
    "refractive_index",
)


def parse_material(data: dict[str, Any]) -> Material:
    """Build a Material; omitted fields keep their defaults."""
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key == "color":
            kwargs["color"] = _color(value)
        elif key == "pattern":
            kwargs["pattern"] = parse_pattern(value)
        elif key in _MATERIAL_FLOATS:
            kwargs[key] = float(value)
        elif key == "casts_shadows":
            kwargs[key] = bool(value)
        else:
            raise ValueError(f"Unknown material property: {key!r}")
    return Material(**kwargs)


# =============================================================================
# Shapes
# =============================================================================


def parse_shape(data: dict[str, Any], base_dir: Path | None = None) -> Shape:
    """Build a shape (recursively for groups and CSG nodes).

    Raises:
        ValueError: For unknown shape types or invalid parameters.
    """
    kind = data.get("type", "")
    transform = parse_transform(data.get("transform"))
    material = parse_material(data["material"]) if "material" in data else None

    shape: Shape
    if kind == "sphere":
        shape = Sphere(transform=transform)
    elif kind == "glass_sphere":
        shape = glass_sphere(transform, float(data.get("refractive_index", 1.5)))
    elif kind == "plane":
        shape = Plane(transform=transform)
    elif kind == "cube":
        shape = Cube(transform=transform)
    elif kind in ("cylinder", "cone"):
        cls = Cylinder if kind == "cylinder" else Cone
        shape = cls(
            minimum=float(data.get("minimum", -math.inf)),
            maximum=float(data.get("maximum", math.inf)),
            closed=bool(data.get("closed", False)),
            transform=transform,
        )
    elif kind == "triangle":
        shape = Triangle(
            *(_point(_require(data, key, kind), key) for key in ("p1", "p2", "p3")),
            transform=transform,
        )
    elif kind == "smooth_triangle":
        shape = SmoothTriangle(
            _point(_require(data, "p1", kind), "p1"),
            _point(_require(data, "p2", kind), "p2"),
            _point(_require(data, "p3", kind), "p3"),
            _vector(_require(data, "n1", kind), "n1"),
            _vector(_require(data, "n2", kind), "n2"),
            _vector(_require(data, "n3", kind), "n3"),
            transform=transform,
        )
    elif kind == "group":
        shape = Group(
            [parse_shape(child, base_dir) for child in data.get("children", [])],
            transform=transform,
        )
    elif kind == "csg":
        shape = Csg(
            data.get("operation", ""),
            parse_shape(_require(data, "left", kind), base_dir),
            parse_shape(_require(data, "right", kind), base_dir),
            transform=transform,
        )
    elif kind == "obj":
        path = Path(_require(data, "file", kind))
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        shape = load_obj_file(path)
        shape.transform = transform
    else:
        raise ValueError(f"Unknown shape type: {kind!r}")

    if material is not None:
        shape.set_material(material)
    return shape


# =============================================================================
# Camera, lights and whole scenes
# =============================================================================


def parse_camera(data: dict[str, Any]) -> Camera:
    width = int(data.get("width", 320))
    height = int(data.get("height", 240))
    fov = math.radians(float(data.get("field_of_view", 60.0)))
    transform = view_transform(
        _point(data.get("from", [0, 0, -5]), "camera from"),
        _point(data.get("to", [0, 0, 0]), "camera to"),
        _vector(data.get("up", [0, 1, 0]), "camera up"),
    )
    return Camera(width, height, fov, transform)


def parse_light(data: dict[str, Any]) -> PointLight:
    return PointLight(
        _point(data.get("position", [-10, 10, -10]), "light position"),
        _color(data.get("intensity", [1, 1, 1]), "light intensity"),
    )


def scene_from_config(config: SceneConfig, base_dir: Path | None = None) -> tuple[World, Camera]:
    """Build the World and Camera described by ``config``."""
    world = World(
        shapes=[parse_shape(s, base_dir) for s in config.shapes],
        lights=[parse_light(light) for light in config.lights],
    )
    camera = parse_camera(config.camera)
    logger.info(
        "Built scene: %d shapes, %d lights, camera %dx%d",
        len(world.shapes),
        len(world.lights),
        camera.hsize,
        camera.vsize,
    )
    return world, camera


def scene_from_dict(data: dict[str, Any], base_dir: Path | None = None) -> tuple[World, Camera]:
    """Build the World and Camera described by a scene dictionary.

    Raises:
        ValueError: If the description is invalid.
    """
    return scene_from_config(SceneConfig.from_dict(data), base_dir)


def load_scene_file(path: str | Path) -> tuple[World, Camera]:
    """Load a JSON scene file. OBJ paths resolve relative to the file."""
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    logger.info("Loading scene %s", path)
    return scene_from_dict(data, base_dir=path.parent)
