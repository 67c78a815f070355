from __future__ import annotations

import math

from pydantic import BaseModel, field_validator

from shared.constants import (
    DEFAULT_DEPTH_SCALE,
    DEFAULT_EXTRUDE_AXIS,
    DEFAULT_PALETTE,
    DEFAULT_THRESHOLD_COUNT,
    RING_AREA_EPSILON,
    SVG_FILL_OPACITY,
    SVG_STROKE_COLOR,
    SVG_STROKE_WIDTH,
    ColorBy,
    ColorInterpolation,
    RenderMode,
    default_render_mode,
)


class ContourSettings(BaseModel):
    """Параметры построения, раскраски и экструзии контурных полос."""

    model_config = {
        'extra': 'ignore',  # игнорировать лишние поля из профилей
    }

    # Режим: плоские полосы или экструзия
    mode: RenderMode = default_render_mode()

    # Явный список уровней; если пуст: равномерно threshold_count уровней
    thresholds: list[float] = []
    threshold_count: int = DEFAULT_THRESHOLD_COUNT
    # Площадь, ниже которой кольцо отбрасывается
    min_ring_area: float = RING_AREA_EPSILON

    # Экструзия: ось и масштаб глубины (глубина = уровень * depth_scale)
    axis: tuple[float, float, float] = DEFAULT_EXTRUDE_AXIS
    depth_scale: float = DEFAULT_DEPTH_SCALE

    # Цвет: палитра (имя схемы или список цветов), интерполяция, домен
    palette: str | list[str] = DEFAULT_PALETTE
    interpolation: ColorInterpolation = ColorInterpolation.HCL
    color_by: ColorBy = ColorBy.VALUE
    # Границы домена цвета; None: по крайним уровням
    domain_min: float | None = None
    domain_max: float | None = None

    # Размещение: координаты сетки -> p * xy_scale + offset
    xy_scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    # Оформление SVG
    stroke: str = SVG_STROKE_COLOR
    stroke_width: float = SVG_STROKE_WIDTH
    opacity: float = SVG_FILL_OPACITY

    @field_validator('axis')
    @classmethod
    def validate_axis(cls, v: tuple[float, float, float]) -> tuple[float, float, float]:
        if not all(math.isfinite(c) for c in v) or not any(c != 0 for c in v):
            msg = 'Ось экструзии должна быть ненулевым конечным вектором'
            raise ValueError(msg)
        return v

    @field_validator('xy_scale')
    @classmethod
    def validate_scale(cls, v: float) -> float:
        if not (math.isfinite(v) and v > 0):
            msg = 'Масштаб должен быть положительным'
            raise ValueError(msg)
        return v

    @field_validator('threshold_count')
    @classmethod
    def validate_threshold_count(cls, v: int) -> int:
        if v < 1:
            msg = 'Количество уровней должно быть >= 1'
            raise ValueError(msg)
        return v

    @field_validator('opacity')
    @classmethod
    def validate_opacity(cls, v: float | str) -> float:
        v = float(v)
        if not (0.0 <= v <= 1.0):
            msg = 'Значение должно быть в диапазоне [0.0, 1.0]'
            raise ValueError(msg)
        return v

    @field_validator('min_ring_area', 'stroke_width')
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        return max(float(v), 0.0)

    @property
    def offset(self) -> tuple[float, float]:
        return self.offset_x, self.offset_y

    def color_domain(self, fallback: tuple[float, float]) -> tuple[float, float]:
        """Configured color domain, filling unset ends from ``fallback``."""
        lo = fallback[0] if self.domain_min is None else self.domain_min
        hi = fallback[1] if self.domain_max is None else self.domain_max
        return lo, hi
