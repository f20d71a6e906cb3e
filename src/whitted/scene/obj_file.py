"""Wavefront OBJ loading.

Supported statements:
    v x y z          vertex
    vn x y z         vertex normal
    f a b c ...      face; polygons are fan-triangulated around the first
                     vertex. Vertices may be written ``v``, ``v/vt``,
                     ``v//vn`` or ``v/vt/vn``; texture indices are ignored.
                     A face whose vertices all carry normals becomes smooth
                     triangles.
    g name           start (or continue) a named group

Any other line is skipped and counted in ``ObjParseResult.ignored_lines``.
Indices are 1-based; negative indices count back from the latest vertex.

Example:
    >>> from whitted.scene.obj_file import parse_obj
    >>> result = parse_obj("v -1 1 0\\nv -1 0 0\\nv 1 0 0\\nf 1 2 3\\n")
    >>> len(result.groups["default"])
    1
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from whitted.core.tuples import Tuple, point, vector
from whitted.geometry.group import Group
from whitted.geometry.triangle import SmoothTriangle, Triangle

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "default"


@dataclass
class ObjParseResult:
    """Everything read from an OBJ file.

    Attributes:
        vertices: Vertex points in file order.
        normals: Vertex normals in file order.
        groups: Triangles per group name, in order of first appearance.
            Faces before any ``g`` statement go to "default".
        ignored_lines: Number of non-blank lines that were not understood.
    """

    vertices: list[Tuple] = field(default_factory=list)
    normals: list[Tuple] = field(default_factory=list)
    groups: dict[str, list[Triangle]] = field(default_factory=dict)
    ignored_lines: int = 0

    @property
    def triangle_count(self) -> int:
        return sum(len(triangles) for triangles in self.groups.values())

    def to_group(self) -> Group:
        """Build a Group holding one child Group per named OBJ group."""
        root = Group()
        for triangles in self.groups.values():
            if triangles:
                root.add_child(Group(triangles))
        return root


def _parse_floats(parts: list[str], line_number: int, line: str) -> tuple[float, float, float]:
    if len(parts) < 3:
        raise ValueError(f"OBJ line {line_number}: expected three coordinates in {line!r}")
    try:
        return float(parts[0]), float(parts[1]), float(parts[2])
    except ValueError as e:
        raise ValueError(f"OBJ line {line_number}: invalid number in {line!r}") from e


def _resolve_index(token: str, count: int, kind: str, line_number: int) -> int:
    try:
        index = int(token)
    except ValueError as e:
        raise ValueError(f"OBJ line {line_number}: invalid {kind} index {token!r}") from e
    resolved = index - 1 if index > 0 else count + index
    if index == 0 or not 0 <= resolved < count:
        raise ValueError(
            f"OBJ line {line_number}: {kind} index {index} out of range (have {count})"
        )
    return resolved


def _parse_face(
    parts: list[str], result: ObjParseResult, line_number: int, line: str
) -> list[Triangle]:
    if len(parts) < 3:
        raise ValueError(f"OBJ line {line_number}: a face needs at least three vertices: {line!r}")

    points: list[Tuple] = []
    normals: list[Tuple | None] = []
    for token in parts:
        fields = token.split("/")
        points.append(
            result.vertices[_resolve_index(fields[0], len(result.vertices), "vertex", line_number)]
        )
        if len(fields) >= 3 and fields[2]:
            normal_index = _resolve_index(fields[2], len(result.normals), "normal", line_number)
            normals.append(result.normals[normal_index])
        else:
            normals.append(None)

    smooth = all(n is not None for n in normals)
    triangles: list[Triangle] = []
    for i in range(1, len(points) - 1):
        if smooth:
            triangles.append(
                SmoothTriangle(
                    points[0], points[i], points[i + 1], normals[0], normals[i], normals[i + 1]
                )
            )
        else:
            triangles.append(Triangle(points[0], points[i], points[i + 1]))
    return triangles


def parse_obj(text: str) -> ObjParseResult:
    """Parse OBJ source text.

    Raises:
        ValueError: If a recognised statement is malformed or refers to a
            vertex or normal that does not exist.
    """
    result = ObjParseResult()
    current = DEFAULT_GROUP

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        keyword, *parts = line.split()

        if keyword == "v":
            result.vertices.append(point(*_parse_floats(parts, line_number, line)))
        elif keyword == "vn":
            result.normals.append(vector(*_parse_floats(parts, line_number, line)))
        elif keyword == "f":
            triangles = _parse_face(parts, result, line_number, line)
            result.groups.setdefault(current, []).extend(triangles)
        elif keyword == "g" and parts:
            current = " ".join(parts)
        else:
            logger.debug("Ignoring OBJ line %d: %r", line_number, line)
            result.ignored_lines += 1

    return result


def load_obj_file(path: str | Path) -> Group:
    """Read an OBJ file and return its triangles as a Group of groups."""
    path = Path(path)
    result = parse_obj(path.read_text(encoding="utf-8"))
    logger.info(
        "Loaded %s: %d vertices, %d normals, %d triangles in %d group(s), %d line(s) ignored",
        path.name,
        len(result.vertices),
        len(result.normals),
        result.triangle_count,
        len(result.groups),
        result.ignored_lines,
    )
    return result.to_group()
