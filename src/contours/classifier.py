"""Split the rings of a contour band into outer boundaries and holes."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from contours.extractor import ContourBand
from contours.rings import Ring, bounding_box, point_in_ring, signed_area
from shared.constants import RING_AREA_EPSILON

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Polygon:
    """Outer ring (counter-clockwise) with the clockwise holes it contains."""

    threshold: float
    outer: Ring
    holes: tuple[Ring, ...] = ()

    @property
    def rings(self) -> tuple[Ring, ...]:
        return (self.outer, *self.holes)


def classify(band: ContourBand, min_area: float = RING_AREA_EPSILON) -> tuple[Polygon, ...]:
    """
    Group band rings into polygons.

    Positive signed area marks an outer ring, negative a hole. Each hole joins
    the smallest outer ring that contains its first vertex. Rings with
    ``|area| < min_area`` are dropped. Never raises.
    """
    outers: list[tuple[Ring, float, tuple[float, float, float, float]]] = []
    holes: list[Ring] = []
    for ring in band.rings:
        area = signed_area(ring)
        if abs(area) < min_area:
            logger.debug('Dropped near-zero ring at level %s (area=%g)', band.threshold, area)
            continue
        if area > 0:
            outers.append((ring, area, bounding_box(ring)))
        else:
            holes.append(ring)

    assigned: list[list[Ring]] = [[] for _ in outers]
    for hole in holes:
        px, py = hole[0]
        best: int | None = None
        best_area = 0.0
        for i, (outer, area, (x0, y0, x1, y1)) in enumerate(outers):
            if not (x0 <= px <= x1 and y0 <= py <= y1):
                continue
            if best is not None and area >= best_area:
                continue
            if point_in_ring((px, py), outer):
                best = i
                best_area = area
        if best is None:
            logger.warning(
                'Hole at level %s has no enclosing outer ring, dropped', band.threshold
            )
            continue
        assigned[best].append(hole)

    return tuple(
        Polygon(threshold=band.threshold, outer=outer, holes=tuple(assigned[i]))
        for i, (outer, _area, _bbox) in enumerate(outers)
    )
