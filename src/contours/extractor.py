"""
Contour ring extraction (marching squares over a scalar grid).

For every threshold the grid is classified into samples above the level
(``value > threshold``) and the rest. Each 2x2 cell maps its 4-bit corner
mask to directed segments through ``MS_SEGMENT_TABLE``; the segments keep the
above region on their left, so rings around raised areas come out
counter-clockwise (positive shoelace area) and rings around depressions come
out clockwise.

The grid is framed by virtual samples lying below every level. Crossings
against the frame sit exactly on the border sample, which closes rings that
would otherwise run off the grid along the grid boundary.

A sample equal to the level counts as below. Crossings on real edges are
kept ``CROSSING_SAMPLE_MARGIN`` of an edge away from both samples, so rings
touching such a sample pass next to it instead of reusing it as a vertex.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from contours.grid import ScalarGrid, ThresholdSet
from contours.rings import Point, Ring, dedupe_ring
from shared.constants import (
    CROSSING_SAMPLE_MARGIN,
    MARCHING_SQUARES_CENTER_WEIGHT,
    MIN_RING_POINTS,
    MS_AMBIGUOUS_CASES,
    MS_EDGE_BOTTOM,
    MS_EDGE_LEFT,
    MS_EDGE_RIGHT,
    MS_EDGE_TOP,
    MS_NO_CONTOUR_CASES,
    MS_SADDLE_SEGMENTS,
    MS_SEGMENT_TABLE,
)
from shared.errors import InvalidInput

logger = logging.getLogger(__name__)

# (orientation, col, row): horizontal edges join (col, row)-(col+1, row),
# vertical edges join (col, row)-(col, row+1).
EdgeKey = tuple[int, int, int]
_HORIZONTAL = 0
_VERTICAL = 1

# Saddle policy: (mask, corners TL/TR/BR/BL, threshold) -> join above corners?
SaddlePolicy = Callable[[int, tuple[float, float, float, float], float], bool]


@dataclass(frozen=True)
class ContourBand:
    """Rings of one threshold, in first-encountered (row-major scan) order."""

    threshold: float
    index: int
    rings: tuple[Ring, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.rings


def center_average_saddle(
    mask: int,
    corners: tuple[float, float, float, float],
    threshold: float,
) -> bool:
    """
    Resolve an ambiguous cell by its center value.

    The center is the mean of the four corners. When it lies above the
    threshold the two above corners are connected through the cell, otherwise
    they are cut off from each other. ``mask`` is unused by this rule but is
    part of the policy signature.
    """
    center = sum(corners) * MARCHING_SQUARES_CENTER_WEIGHT
    return center > threshold


def _edge_key(edge: int, col: int, row: int) -> EdgeKey:
    if edge == MS_EDGE_TOP:
        return _HORIZONTAL, col, row
    if edge == MS_EDGE_BOTTOM:
        return _HORIZONTAL, col, row + 1
    if edge == MS_EDGE_LEFT:
        return _VERTICAL, col, row
    if edge == MS_EDGE_RIGHT:
        return _VERTICAL, col + 1, row
    msg = f'Unknown cell edge {edge}'
    raise ValueError(msg)


def interp(
    p0: float,
    p1: float,
    v0: float,
    v1: float,
    level: float,
    margin: float = 0.0,
) -> float:
    """Linear crossing position between p0 and p1, clamped to [margin, 1 - margin]."""
    if v1 == v0:
        return p0
    t = (level - v0) / (v1 - v0)
    if t < margin:
        t = margin
    elif t > 1.0 - margin:
        t = 1.0 - margin
    return p0 + (p1 - p0) * t


def _crossing(grid: ScalarGrid, key: EdgeKey, level: float) -> Point:
    orientation, col, row = key
    if orientation == _HORIZONTAL:
        c1, r1 = col + 1, row
    else:
        c1, r1 = col, row + 1
    v0 = grid.value_at(col, row)
    v1 = grid.value_at(c1, r1)
    # Frame samples: the crossing sits on the real border sample.
    # Real edges keep it off both samples, so a sample equal to the level
    # never becomes a vertex shared by several edges.
    if v0 is None:
        return float(c1), float(r1)
    if v1 is None:
        return float(col), float(row)
    if orientation == _HORIZONTAL:
        return interp(col, c1, v0, v1, level, CROSSING_SAMPLE_MARGIN), float(row)
    return float(col), interp(row, r1, v0, v1, level, CROSSING_SAMPLE_MARGIN)


def _cell_masks(grid: ScalarGrid, level: float) -> np.ndarray:
    """
    Case masks for every cell of the framed grid.

    Element ``[r, c]`` describes the cell whose top-left sample is
    ``(c - 1, r - 1)`` in grid coordinates.
    """
    above = np.zeros((grid.height + 2, grid.width + 2), dtype=np.uint8)
    above[1:-1, 1:-1] = grid.values > level
    return (
        above[:-1, :-1]
        | (above[:-1, 1:] << 1)
        | (above[1:, 1:] << 2)
        | (above[1:, :-1] << 3)
    )


def _trace_segments(
    grid: ScalarGrid,
    level: float,
    saddle_policy: SaddlePolicy,
) -> dict[EdgeKey, EdgeKey]:
    masks = _cell_masks(grid, level)
    active_rows, active_cols = np.nonzero(~np.isin(masks, list(MS_NO_CONTOUR_CASES)))
    links: dict[EdgeKey, EdgeKey] = {}
    for r, c in zip(active_rows.tolist(), active_cols.tolist()):
        col, row = c - 1, r - 1
        mask = int(masks[r, c])
        if mask in MS_AMBIGUOUS_CASES:
            # Saddle cells never touch the frame: all four corners are real
            corners = (
                float(grid.values[row, col]),
                float(grid.values[row, col + 1]),
                float(grid.values[row + 1, col + 1]),
                float(grid.values[row + 1, col]),
            )
            joined = saddle_policy(mask, corners, level)
            pairs = MS_SADDLE_SEGMENTS[mask][1 if joined else 0]
        else:
            pairs = MS_SEGMENT_TABLE[mask]
        for start, end in pairs:
            links[_edge_key(start, col, row)] = _edge_key(end, col, row)
    return links


def extract_rings(
    grid: ScalarGrid,
    level: float,
    *,
    saddle_policy: SaddlePolicy = center_average_saddle,
) -> tuple[Ring, ...]:
    """Trace the closed rings of a single level."""
    lo, hi = grid.extent
    if not (lo <= level < hi):
        # No sample on one side of the level: nothing to draw
        return ()

    links = _trace_segments(grid, level, saddle_policy)
    visited: set[EdgeKey] = set()
    rings: list[Ring] = []
    for start in links:
        if start in visited:
            continue
        keys: list[EdgeKey] = []
        key = start
        while key not in visited:
            visited.add(key)
            keys.append(key)
            key = links[key]
        ring = dedupe_ring([_crossing(grid, k, level) for k in keys])
        if len(ring) < MIN_RING_POINTS:
            logger.debug(
                'Dropped collapsed ring at level %s (%d distinct points)',
                level,
                len(ring),
            )
            continue
        rings.append(ring)
    return tuple(rings)


def extract(
    grid: ScalarGrid,
    thresholds: ThresholdSet,
    *,
    saddle_policy: SaddlePolicy = center_average_saddle,
) -> dict[float, ContourBand]:
    """
    Build one ContourBand per threshold.

    Args:
        grid: Scalar samples.
        thresholds: Increasing contour levels.
        saddle_policy: Tie-break for ambiguous cells.

    Returns:
        Mapping threshold -> ContourBand, in threshold order. Levels outside
        the grid's value range map to empty bands.

    """
    if not isinstance(grid, ScalarGrid):
        msg = f'Expected ScalarGrid, got {type(grid).__name__}'
        raise InvalidInput(msg)
    if not isinstance(thresholds, ThresholdSet):
        thresholds = ThresholdSet(tuple(thresholds))

    bands: dict[float, ContourBand] = {}
    for index, level in enumerate(thresholds):
        rings = extract_rings(grid, level, saddle_policy=saddle_policy)
        bands[level] = ContourBand(threshold=level, index=index, rings=rings)
        logger.debug('Level %s: %d ring(s)', level, len(rings))
    return bands
