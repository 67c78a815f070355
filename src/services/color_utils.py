"""Color utilities for contour band colorization."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from services.palettes import RGB, Palette, PaletteFn, Ramp, resolve_palette
from shared.constants import (
    COLOR_LUT_SIZE,
    DEFAULT_PALETTE,
    HCL_ACHROMATIC_CHROMA,
    LAB_WHITE_D65,
    ColorInterpolation,
)
from shared.errors import InvalidInput

if TYPE_CHECKING:
    from domain.models import ContourSettings

_LAB_DELTA = 6.0 / 29.0


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b."""
    return a + (b - a) * t


def to_hex(rgb: RGB) -> str:
    return '#{:02x}{:02x}{:02x}'.format(*rgb)


def _srgb_to_linear(c: float) -> float:
    c /= 255.0
    return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4


def _linear_to_srgb(c: float) -> int:
    c = 12.92 * c if c <= 0.0031308 else 1.055 * c ** (1.0 / 2.4) - 0.055
    return round(min(1.0, max(0.0, c)) * 255)


def _lab_f(t: float) -> float:
    if t > _LAB_DELTA**3:
        return t ** (1.0 / 3.0)
    return t / (3 * _LAB_DELTA**2) + 4.0 / 29.0


def _lab_finv(t: float) -> float:
    if t > _LAB_DELTA:
        return t**3
    return 3 * _LAB_DELTA**2 * (t - 4.0 / 29.0)


def rgb_to_lab(rgb: RGB) -> tuple[float, float, float]:
    """sRGB (0..255) -> CIE L*a*b* (D65)."""
    r, g, b = (_srgb_to_linear(c) for c in rgb)
    x = 0.4124564 * r + 0.3575761 * g + 0.1804375 * b
    y = 0.2126729 * r + 0.7151522 * g + 0.0721750 * b
    z = 0.0193339 * r + 0.1191920 * g + 0.9503041 * b
    xn, yn, zn = LAB_WHITE_D65
    fx, fy, fz = _lab_f(x / xn), _lab_f(y / yn), _lab_f(z / zn)
    return 116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz)


def lab_to_rgb(lab: tuple[float, float, float]) -> RGB:
    """CIE L*a*b* (D65) -> sRGB, clamped to the gamut."""
    lightness, a, b = lab
    fy = (lightness + 16.0) / 116.0
    fx = fy + a / 500.0
    fz = fy - b / 200.0
    xn, yn, zn = LAB_WHITE_D65
    x, y, z = xn * _lab_finv(fx), yn * _lab_finv(fy), zn * _lab_finv(fz)
    r = 3.2404542 * x - 1.5371385 * y - 0.4985314 * z
    g = -0.9692660 * x + 1.8760108 * y + 0.0415560 * z
    bl = 0.0556434 * x - 0.2040259 * y + 1.0572252 * z
    return _linear_to_srgb(r), _linear_to_srgb(g), _linear_to_srgb(bl)


def lab_to_hcl(lab: tuple[float, float, float]) -> tuple[float, float, float]:
    """L*a*b* -> (hue degrees, chroma, luminance); hue is NaN for greys."""
    lightness, a, b = lab
    chroma = math.hypot(a, b)
    if chroma < HCL_ACHROMATIC_CHROMA:
        return math.nan, 0.0, lightness
    return math.degrees(math.atan2(b, a)) % 360.0, chroma, lightness


def hcl_to_lab(h: float, c: float, lightness: float) -> tuple[float, float, float]:
    if math.isnan(h):
        return lightness, 0.0, 0.0
    rad = math.radians(h)
    return lightness, c * math.cos(rad), c * math.sin(rad)


def interpolate_rgb(c0: RGB, c1: RGB, t: float) -> RGB:
    return (
        round(lerp(c0[0], c1[0], t)),
        round(lerp(c0[1], c1[1], t)),
        round(lerp(c0[2], c1[2], t)),
    )


def interpolate_hcl(c0: RGB, c1: RGB, t: float) -> RGB:
    """Interpolate in CIE LCh along the shorter hue arc."""
    if t <= 0.0:
        return c0
    if t >= 1.0:
        return c1
    h0, ch0, l0 = lab_to_hcl(rgb_to_lab(c0))
    h1, ch1, l1 = lab_to_hcl(rgb_to_lab(c1))
    # A grey endpoint borrows the other endpoint's hue
    if math.isnan(h0) and math.isnan(h1):
        h0 = h1 = 0.0
    elif math.isnan(h0):
        h0 = h1
    elif math.isnan(h1):
        h1 = h0
    dh = h1 - h0
    if dh > 180.0:
        dh -= 360.0
    elif dh < -180.0:
        dh += 360.0
    return lab_to_rgb(hcl_to_lab(h0 + dh * t, lerp(ch0, ch1, t), lerp(l0, l1, t)))


def interpolate_ramp(
    ramp: Ramp,
    t: float,
    interpolation: ColorInterpolation = ColorInterpolation.HCL,
) -> RGB:
    """Color of a (t, RGB) ramp at t, clamped to the first and last stops."""
    if t <= ramp[0][0]:
        return ramp[0][1]
    if t >= ramp[-1][0]:
        return ramp[-1][1]
    mix = interpolate_hcl if interpolation == ColorInterpolation.HCL else interpolate_rgb
    for j in range(1, len(ramp)):
        t0, c0 = ramp[j - 1]
        t1, c1 = ramp[j]
        if t <= t1:
            local = 0.0 if t1 == t0 else (t - t0) / (t1 - t0)
            return mix(c0, c1, local)
    return ramp[-1][1]


def build_color_lut(
    source: Ramp | PaletteFn,
    lut_size: int = COLOR_LUT_SIZE,
    interpolation: ColorInterpolation = ColorInterpolation.RGB,
) -> np.ndarray:
    """
    Sample a ramp or palette function into a lookup table (LUT).

    Args:
        source: List of (t, (R, G, B)) stops with t in [0, 1], or t -> RGB
        lut_size: Number of evenly spaced samples, first at t=0, last at t=1
        interpolation: Color space used between ramp stops

    Returns:
        (lut_size, 3) uint8 array

    """
    if lut_size < 1:
        msg = f'LUT size must be positive, got {lut_size}'
        raise InvalidInput(msg)
    positions = np.linspace(0.0, 1.0, lut_size) if lut_size > 1 else np.zeros(1)
    if callable(source):
        rows = [source(float(t)) for t in positions]
    else:
        rows = [interpolate_ramp(source, float(t), interpolation) for t in positions]
    return np.array(rows, dtype=np.uint8)


def check_domain(domain: tuple[float, float]) -> tuple[float, float]:
    lo, hi = domain
    if not (math.isfinite(lo) and math.isfinite(hi)) or hi < lo:
        msg = f'Invalid color domain {domain!r}'
        raise InvalidInput(msg)
    return float(lo), float(hi)


def normalize(value: float, domain: tuple[float, float]) -> float:
    """Map value into [0, 1] against domain, clamping out-of-range input."""
    lo, hi = check_domain(domain)
    if hi == lo:
        return 0.0
    t = (value - lo) / (hi - lo)
    return min(1.0, max(0.0, t))


class ColorMapper:
    """Maps scalar values (or band ranks) to colors through a palette."""

    def __init__(
        self,
        palette: Palette = DEFAULT_PALETTE,
        interpolation: ColorInterpolation = ColorInterpolation.HCL,
        lut_size: int = COLOR_LUT_SIZE,
    ) -> None:
        self.interpolation = ColorInterpolation(interpolation)
        self._source: Ramp | PaletteFn = resolve_palette(palette)
        self._lut_size = lut_size
        self._lut: np.ndarray | None = None

    @classmethod
    def from_settings(cls, settings: ContourSettings) -> ColorMapper:
        return cls(settings.palette, settings.interpolation)

    def color_at(self, t: float) -> tuple[int, int, int]:
        """Get color at normalized position t in [0, 1]."""
        t = min(1.0, max(0.0, t))
        if callable(self._source):
            return self._source(t)
        return interpolate_ramp(self._source, t, self.interpolation)

    def color_of(self, value: float, domain: tuple[float, float]) -> tuple[int, int, int]:
        """Color of a scalar value; values outside domain take the endpoint color."""
        return self.color_at(normalize(value, domain))

    def color_of_index(self, index: int, count: int) -> tuple[int, int, int]:
        """Color of the index-th of count bands (position index / count)."""
        if count <= 0:
            msg = f'Band count must be positive, got {count}'
            raise InvalidInput(msg)
        return self.color_at(index / count)

    @property
    def lut(self) -> np.ndarray:
        """Palette sampled into a (lut_size, 3) uint8 array."""
        if self._lut is None:
            self._lut = build_color_lut(self._source, self._lut_size, self.interpolation)
        return self._lut

    def colorize(self, values: np.ndarray, domain: tuple[float, float]) -> np.ndarray:
        """Vectorised value -> RGB lookup through the LUT (HxWx3 uint8 for HxW input)."""
        lo, hi = check_domain(domain)
        inv = 1.0 / (hi - lo) if hi > lo else 0.0
        t = (np.asarray(values, dtype=np.float64) - lo) * inv
        lut = self.lut
        indices = np.clip((t * (len(lut) - 1)).astype(np.int64), 0, len(lut) - 1)
        return lut[indices]
