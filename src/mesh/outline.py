"""Renderer-agnostic 2D outlines built from classified polygons."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from contours.classifier import Polygon
from contours.rings import Ring, dedupe_ring, signed_area
from shared.constants import MIN_RING_POINTS, SVG_COORD_PRECISION
from shared.errors import DegenerateGeometry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outline2D:
    """
    Outer boundary plus hole boundaries, ready for flat fill or extrusion.

    Point order and orientation are preserved from the source polygon:
    the outer ring is counter-clockwise, holes are clockwise.
    """

    threshold: float
    outer: Ring
    holes: tuple[Ring, ...] = ()

    @property
    def rings(self) -> tuple[Ring, ...]:
        return (self.outer, *self.holes)

    @property
    def vertex_count(self) -> int:
        return sum(len(r) for r in self.rings)

    @property
    def area(self) -> float:
        """Enclosed area with holes subtracted."""
        return abs(signed_area(self.outer)) - sum(abs(signed_area(h)) for h in self.holes)

    def transformed(
        self,
        scale: float = 1.0,
        offset: tuple[float, float] = (0.0, 0.0),
    ) -> Outline2D:
        """Return a copy with every point mapped to ``p * scale + offset``."""
        if not scale > 0:
            msg = f'Outline scale must be positive, got {scale}'
            raise DegenerateGeometry(msg)
        ox, oy = offset

        def _map(ring: Ring) -> Ring:
            return tuple((x * scale + ox, y * scale + oy) for x, y in ring)

        return Outline2D(
            threshold=self.threshold,
            outer=_map(self.outer),
            holes=tuple(_map(h) for h in self.holes),
        )

    def to_svg_path(self, precision: int = SVG_COORD_PRECISION) -> str:
        """SVG path data, one closed subpath per ring (fill with even-odd rule)."""

        def _fmt(v: float) -> str:
            s = f'{v:.{precision}f}'
            if '.' in s:
                s = s.rstrip('0').rstrip('.')
            return '0' if s == '-0' else s

        parts: list[str] = []
        for ring in self.rings:
            head, *tail = ring
            cmd = [f'M{_fmt(head[0])},{_fmt(head[1])}']
            cmd.extend(f'L{_fmt(x)},{_fmt(y)}' for x, y in tail)
            cmd.append('Z')
            parts.append(''.join(cmd))
        return ''.join(parts)


def build_outline(polygon: Polygon) -> Outline2D:
    """
    Copy a polygon into an Outline2D.

    Raises:
        DegenerateGeometry: the outer ring has fewer than 3 distinct points.

    """
    outer = dedupe_ring(polygon.outer)
    if len(outer) < MIN_RING_POINTS:
        msg = (
            f'Outer ring at level {polygon.threshold} has {len(outer)} distinct '
            f'point(s), need {MIN_RING_POINTS}'
        )
        raise DegenerateGeometry(msg)

    holes: list[Ring] = []
    for hole in polygon.holes:
        ring = dedupe_ring(hole)
        if len(ring) < MIN_RING_POINTS:
            logger.debug('Dropped degenerate hole at level %s', polygon.threshold)
            continue
        holes.append(ring)
    return Outline2D(threshold=polygon.threshold, outer=outer, holes=tuple(holes))
