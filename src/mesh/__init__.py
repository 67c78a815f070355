"""Outline and solid geometry built from contour polygons."""

from mesh.extrude import Solid3D, extrude
from mesh.outline import Outline2D, build_outline

__all__ = [
    'Outline2D',
    'Solid3D',
    'build_outline',
    'extrude',
]
