"""JSON-ready description of extruded contour bands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from services.color_utils import to_hex

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mesh.extrude import Solid3D
    from services.contour_pipeline import ContourLayer


def solid_to_dict(solid: Solid3D) -> dict[str, Any]:
    return {
        'depth': solid.depth,
        'axis': list(solid.axis),
        'vertices': solid.vertices.tolist(),
        'front_faces': [list(f) for f in solid.front_faces],
        'back_faces': [list(f) for f in solid.back_faces],
        'side_walls': solid.side_walls.tolist(),
        'volume': solid.volume,
    }


def solids_to_dict(layers: Sequence[ContourLayer]) -> dict[str, Any]:
    """
    Mesh description per layer.

    Front/back faces are rings of vertex indices (outer ring first, then holes);
    side walls are quads. All faces wind counter-clockwise seen from outside.
    """
    return {
        'layers': [
            {
                'threshold': layer.threshold,
                'index': layer.index,
                'color': to_hex(layer.color),
                'solids': [solid_to_dict(s) for s in layer.solids],
            }
            for layer in layers
        ]
    }
