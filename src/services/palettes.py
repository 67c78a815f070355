"""Named color schemes and palette parsing."""

from __future__ import annotations

import colorsys
from collections.abc import Callable, Sequence
from typing import Union

from PIL import ImageColor

from shared.constants import (
    ISOLINE_STOPS,
    RAINBOW_HUE_SPAN,
    SPECTRUM_STOPS,
    VIRIDIS_STOPS,
)
from shared.errors import InvalidInput

RGB = tuple[int, int, int]
Ramp = list[tuple[float, RGB]]
ColorSpec = Union[str, Sequence[int]]
PaletteFn = Callable[[float], RGB]
Palette = Union[str, Sequence[ColorSpec], Sequence[tuple[float, ColorSpec]], PaletteFn]


def parse_color(color: ColorSpec) -> RGB:
    """Parse '#rrggbb', CSS names, 'rgb()'/'hsl()' strings or an RGB triple."""
    if isinstance(color, str):
        try:
            rgb = ImageColor.getrgb(color)
        except ValueError as e:
            msg = f'Unknown color: {color!r}'
            raise InvalidInput(msg) from e
        return int(rgb[0]), int(rgb[1]), int(rgb[2])
    values = tuple(color)
    if len(values) < 3 or not all(0 <= int(v) <= 255 for v in values[:3]):
        msg = f'Invalid RGB color: {color!r}'
        raise InvalidInput(msg)
    return int(values[0]), int(values[1]), int(values[2])


def rainbow(t: float) -> RGB:
    """HSL rainbow: hue runs over 0.8 of a turn, full saturation, lightness 0.5."""
    r, g, b = colorsys.hls_to_rgb(t * RAINBOW_HUE_SPAN, 0.5, 1.0)
    return round(r * 255), round(g * 255), round(b * 255)


NAMED_SCHEMES: dict[str, Sequence[str] | PaletteFn] = {
    'viridis': VIRIDIS_STOPS,
    'rainbow': rainbow,
    'isoline': ISOLINE_STOPS,
    'spectrum': SPECTRUM_STOPS,
}


def _is_stop(item: object) -> bool:
    return (
        isinstance(item, (tuple, list))
        and len(item) == 2
        and isinstance(item[0], (int, float))
        and not isinstance(item[1], (int, float))
    )


def even_ramp(colors: Sequence[ColorSpec]) -> Ramp:
    """Spread colors evenly over [0, 1]."""
    rgb = [parse_color(c) for c in colors]
    if len(rgb) == 1:
        return [(0.0, rgb[0]), (1.0, rgb[0])]
    last = len(rgb) - 1
    return [(i / last, c) for i, c in enumerate(rgb)]


def resolve_palette(palette: Palette) -> Ramp | PaletteFn:
    """
    Turn a palette description into a ramp of (t, RGB) stops or a function.

    Accepts a scheme name from NAMED_SCHEMES, a list of colors (evenly
    spaced), a list of (t, color) stops, or a callable t -> RGB.
    """
    if callable(palette):
        return palette
    if isinstance(palette, str):
        scheme = NAMED_SCHEMES.get(palette.strip().lower())
        if scheme is None:
            msg = f'Unknown palette {palette!r}; known: {", ".join(sorted(NAMED_SCHEMES))}'
            raise InvalidInput(msg)
        return scheme if callable(scheme) else even_ramp(scheme)

    items = list(palette)
    if not items:
        msg = 'Palette must contain at least one color'
        raise InvalidInput(msg)
    if not all(_is_stop(it) for it in items):
        return even_ramp(items)

    ramp: Ramp = [(float(t), parse_color(c)) for t, c in items]
    prev = 0.0
    for t, _ in ramp:
        if not (0.0 <= t <= 1.0) or t < prev:
            msg = 'Palette stops must be non-decreasing positions within [0, 1]'
            raise InvalidInput(msg)
        prev = t
    if len(ramp) == 1:
        ramp = [(0.0, ramp[0][1]), (1.0, ramp[0][1])]
    return ramp
