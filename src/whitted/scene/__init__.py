"""Scene module: world container and scene construction.

Components:
    world: World (shapes + lights) and the default test world
    obj_file: Wavefront OBJ parsing into groups of triangles
    config: Dictionary / JSON scene descriptions
    showcase: Built-in demonstration scenes
"""

from .config import SceneConfig, load_scene_file, scene_from_config, scene_from_dict
from .obj_file import ObjParseResult, load_obj_file, parse_obj
from .showcase import (
    SCENES,
    CornellBoxParams,
    create_cornell_box_scene,
    create_csg_scene,
    create_glass_scene,
    create_three_spheres_scene,
)
from .world import World, default_world

__all__ = [
    "World",
    "default_world",
    "ObjParseResult",
    "parse_obj",
    "load_obj_file",
    "SceneConfig",
    "scene_from_dict",
    "scene_from_config",
    "load_scene_file",
    "SCENES",
    "CornellBoxParams",
    "create_cornell_box_scene",
    "create_three_spheres_scene",
    "create_glass_scene",
    "create_csg_scene",
]
