# Вывод контурных полос: SVG, растровый предпросмотр, JSON для тел
from render.raster import render_preview
from render.solid_json import solids_to_dict
from render.svg import render_svg

__all__ = [
    'render_preview',
    'render_svg',
    'solids_to_dict',
]
