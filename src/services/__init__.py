"""Services package - coloring and the contour pipeline."""

from services.color_utils import ColorMapper, build_color_lut, lerp
from services.contour_pipeline import ContourLayer, build_contour_layers
from services.palettes import NAMED_SCHEMES, parse_color, resolve_palette

__all__ = [
    'NAMED_SCHEMES',
    'ColorMapper',
    'ContourLayer',
    'build_color_lut',
    'build_contour_layers',
    'lerp',
    'parse_color',
    'resolve_palette',
]
