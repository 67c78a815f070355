"""SVG document for flat contour bands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from domain.models import ContourSettings
from services.color_utils import to_hex
from shared.constants import SVG_COORD_PRECISION

if TYPE_CHECKING:
    from collections.abc import Sequence

    from services.contour_pipeline import ContourLayer


def layer_path_data(layer: ContourLayer, precision: int = SVG_COORD_PRECISION) -> str:
    return ''.join(o.to_svg_path(precision) for o in layer.outlines)


def render_svg(
    layers: Sequence[ContourLayer],
    width: float,
    height: float,
    settings: ContourSettings | None = None,
    precision: int = SVG_COORD_PRECISION,
) -> str:
    """
    Render layers as stacked even-odd filled paths, lowest level first.

    Higher bands are painted over lower ones, so each visible strip shows the
    band between two neighbouring levels.
    """
    if settings is None:
        settings = ContourSettings()
    lines = [
        '<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{width:g}" height="{height:g}" viewBox="0 0 {width:g} {height:g}">',
        f'<g class="contours" stroke="{settings.stroke}" '
        f'stroke-width="{settings.stroke_width:g}" opacity="{settings.opacity:g}">',
    ]
    for layer in sorted(layers, key=lambda lay: lay.threshold):
        lines.append(
            f'<path data-value="{layer.threshold:g}" fill="{to_hex(layer.color)}" '
            f'fill-rule="evenodd" d="{layer_path_data(layer, precision)}"/>'
        )
    lines.append('</g>')
    lines.append('</svg>')
    return '\n'.join(lines)
