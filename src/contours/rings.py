"""Planar ring helpers: signed area, containment, duplicate collapsing."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from shared.constants import MIN_RING_POINTS, POINT_MERGE_EPSILON

if TYPE_CHECKING:
    from collections.abc import Sequence

Point = tuple[float, float]
Ring = tuple[Point, ...]


def signed_area(ring: Sequence[Point]) -> float:
    """
    Shoelace signed area of a closed ring.

    Positive for counter-clockwise rings (x right, y up), negative otherwise.
    The closing edge last -> first is implied.
    """
    if len(ring) < MIN_RING_POINTS:
        return 0.0
    pts = np.asarray(ring, dtype=np.float64)
    x = pts[:, 0]
    y = pts[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))


def bounding_box(ring: Sequence[Point]) -> tuple[float, float, float, float]:
    pts = np.asarray(ring, dtype=np.float64)
    x0, y0 = pts.min(axis=0)
    x1, y1 = pts.max(axis=0)
    return float(x0), float(y0), float(x1), float(y1)


def point_in_ring(point: Point, ring: Sequence[Point]) -> bool:
    """Even-odd ray casting; points on the boundary are not guaranteed either way."""
    px, py = point
    inside = False
    n = len(ring)
    j = n - 1
    for i in range(n):
        xi, yi = ring[i]
        xj, yj = ring[j]
        if (yi > py) != (yj > py):
            x_cross = xi + (py - yi) * (xj - xi) / (yj - yi)
            if px < x_cross:
                inside = not inside
        j = i
    return inside


def dedupe_ring(points: Sequence[Point], eps: float = POINT_MERGE_EPSILON) -> Ring:
    """Collapse consecutive duplicates, including the wrap from last to first."""
    out: list[Point] = []
    for x, y in points:
        p = (float(x), float(y))
        if out and abs(out[-1][0] - p[0]) <= eps and abs(out[-1][1] - p[1]) <= eps:
            continue
        out.append(p)
    while (
        len(out) > 1
        and abs(out[0][0] - out[-1][0]) <= eps
        and abs(out[0][1] - out[-1][1]) <= eps
    ):
        out.pop()
    return tuple(out)
