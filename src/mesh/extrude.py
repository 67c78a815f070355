"""Extrusion of 2D outlines into closed prism solids."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from contours.rings import signed_area
from shared.constants import AXIS_PLANE_EPSILON, DEFAULT_EXTRUDE_AXIS, MIN_RING_POINTS
from shared.errors import DegenerateGeometry, InvalidInput

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mesh.outline import Outline2D


@dataclass(frozen=True)
class Solid3D:
    """
    Prism built from an outline.

    ``vertices`` holds the front vertices (outline in the z=0 plane, rings
    concatenated, outer first) followed by the back vertices in the same
    order, each offset by ``depth * axis``. Faces are index tuples into
    ``vertices``; every face winds counter-clockwise seen from outside.
    """

    outline: Outline2D
    depth: float
    axis: tuple[float, float, float]
    vertices: np.ndarray = field(repr=False)
    front_faces: tuple[tuple[int, ...], ...] = field(repr=False)
    back_faces: tuple[tuple[int, ...], ...] = field(repr=False)
    side_walls: np.ndarray = field(repr=False)

    @property
    def ring_vertex_count(self) -> int:
        return len(self.vertices) // 2

    @property
    def front_vertices(self) -> np.ndarray:
        return self.vertices[: self.ring_vertex_count]

    @property
    def back_vertices(self) -> np.ndarray:
        return self.vertices[self.ring_vertex_count :]

    @property
    def wall_count(self) -> int:
        return len(self.side_walls)

    @property
    def volume(self) -> float:
        return self.outline.area * self.depth * abs(self.axis[2])


def _unit_axis(axis: Sequence[float]) -> np.ndarray:
    vec = np.asarray(axis, dtype=np.float64)
    if vec.shape != (3,) or not np.isfinite(vec).all():
        msg = f'Extrusion axis must be a finite 3-vector, got {axis!r}'
        raise InvalidInput(msg)
    norm = float(np.linalg.norm(vec))
    if norm == 0.0:
        msg = 'Extrusion axis must be non-zero'
        raise InvalidInput(msg)
    return vec / norm


def extrude(
    outline: Outline2D,
    depth: float,
    axis: Sequence[float] = DEFAULT_EXTRUDE_AXIS,
) -> Solid3D:
    """
    Extrude ``outline`` by ``|depth|`` along ``+axis``.

    The sign of ``depth`` is ignored so that negative levels still give a
    solid of the same thickness.

    Raises:
        DegenerateGeometry: zero depth, an outline with fewer than 3
            vertices, or an axis lying in the outline plane.
        InvalidInput: zero-length or malformed axis.

    """
    if not math.isfinite(depth) or depth == 0:
        msg = f'Cannot extrude level {outline.threshold} with depth {depth}'
        raise DegenerateGeometry(msg)
    if len(outline.outer) < MIN_RING_POINTS:
        msg = f'Outline at level {outline.threshold} has fewer than {MIN_RING_POINTS} vertices'
        raise DegenerateGeometry(msg)

    unit = _unit_axis(axis)
    if abs(unit[2]) < AXIS_PLANE_EPSILON:
        msg = f'Extrusion axis {tuple(unit)} lies in the outline plane'
        raise DegenerateGeometry(msg)

    magnitude = abs(depth)
    front = np.array(
        [(x, y, 0.0) for ring in outline.rings for x, y in ring], dtype=np.float64
    )
    back = front + magnitude * unit
    vertices = np.vstack([front, back])
    vertices.setflags(write=False)
    n = len(front)

    # Flip windings for clockwise outers or axes pointing to -z
    flip = (signed_area(outline.outer) > 0) != (unit[2] > 0)

    walls: list[tuple[int, int, int, int]] = []
    front_faces: list[tuple[int, ...]] = []
    back_faces: list[tuple[int, ...]] = []
    start = 0
    for ring in outline.rings:
        count = len(ring)
        idx = list(range(start, start + count))
        for k in range(count):
            a = idx[k]
            b = idx[(k + 1) % count]
            if flip:
                walls.append((b, a, a + n, b + n))
            else:
                walls.append((a, b, b + n, a + n))
        if flip:
            front_faces.append(tuple(idx))
            back_faces.append(tuple(i + n for i in reversed(idx)))
        else:
            front_faces.append(tuple(reversed(idx)))
            back_faces.append(tuple(i + n for i in idx))
        start += count

    side_walls = np.array(walls, dtype=np.int64).reshape(-1, 4)
    side_walls.setflags(write=False)
    return Solid3D(
        outline=outline,
        depth=magnitude,
        axis=(float(unit[0]), float(unit[1]), float(unit[2])),
        vertices=vertices,
        front_faces=tuple(front_faces),
        back_faces=tuple(back_faces),
        side_walls=side_walls,
    )
