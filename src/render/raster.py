"""Raster preview of flat contour bands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PIL import Image, ImageDraw

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mesh.outline import Outline2D
    from services.contour_pipeline import ContourLayer


def outline_mask(outline: Outline2D, size: tuple[int, int]) -> Image.Image:
    """L-mode mask: 255 inside the outer ring, 0 inside holes and outside."""
    mask = Image.new('L', size, 0)
    draw = ImageDraw.Draw(mask)
    draw.polygon(list(outline.outer), fill=255)
    for hole in outline.holes:
        draw.polygon(list(hole), fill=0)
    return mask


def render_preview(
    layers: Sequence[ContourLayer],
    size: tuple[int, int],
    *,
    background: tuple[int, int, int] = (255, 255, 255),
    opacity: float = 1.0,
) -> Image.Image:
    """
    Paint each layer's outlines in its color, lowest level first.

    Outline coordinates are used as pixel coordinates; scale them with the
    layout settings before calling.
    """
    img = Image.new('RGB', size, background)
    alpha = round(max(0.0, min(1.0, opacity)) * 255)
    for layer in sorted(layers, key=lambda lay: lay.threshold):
        fill = Image.new('RGB', size, layer.color)
        for outline in layer.outlines:
            mask = outline_mask(outline, size)
            if alpha < 255:
                mask = mask.point(lambda v: v * alpha // 255)
            img.paste(fill, mask=mask)
    return img
