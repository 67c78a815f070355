"""Input types for contour extraction: scalar grids and threshold sets."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from shared.constants import MIN_GRID_SIZE
from shared.errors import InvalidInput

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


@dataclass(frozen=True)
class ScalarGrid:
    """
    Immutable rectangular grid of finite samples.

    Samples are stored row-major: ``values[row, col]`` where ``col`` is the
    x coordinate and ``row`` the y coordinate.
    """

    values: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        try:
            arr = np.array(self.values, dtype=np.float64)
        except (TypeError, ValueError) as e:
            msg = f'Grid samples must be a rectangular array of numbers: {e}'
            raise InvalidInput(msg) from e
        if arr.ndim != 2:
            msg = f'Grid must be two-dimensional, got {arr.ndim} dimension(s)'
            raise InvalidInput(msg)
        h, w = arr.shape
        if w < MIN_GRID_SIZE or h < MIN_GRID_SIZE:
            msg = f'Grid must be at least {MIN_GRID_SIZE}x{MIN_GRID_SIZE}, got {w}x{h}'
            raise InvalidInput(msg)
        if not np.isfinite(arr).all():
            msg = 'Grid contains non-finite samples'
            raise InvalidInput(msg)
        arr.setflags(write=False)
        object.__setattr__(self, 'values', arr)

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[float]]) -> ScalarGrid:
        rows_list = [list(r) for r in rows]
        widths = {len(r) for r in rows_list}
        if len(widths) > 1:
            msg = 'Grid rows have different lengths'
            raise InvalidInput(msg)
        return cls(rows_list)

    @classmethod
    def from_flat(cls, samples: Sequence[float], width: int, height: int) -> ScalarGrid:
        """Build a grid from a flat row-major sample list (x varies fastest)."""
        if width < MIN_GRID_SIZE or height < MIN_GRID_SIZE:
            msg = f'Grid must be at least {MIN_GRID_SIZE}x{MIN_GRID_SIZE}, got {width}x{height}'
            raise InvalidInput(msg)
        if len(samples) != width * height:
            msg = f'Expected {width * height} samples for {width}x{height}, got {len(samples)}'
            raise InvalidInput(msg)
        return cls([list(samples[r * width : (r + 1) * width]) for r in range(height)])

    @property
    def width(self) -> int:
        return int(self.values.shape[1])

    @property
    def height(self) -> int:
        return int(self.values.shape[0])

    @property
    def extent(self) -> tuple[float, float]:
        """(min, max) of the samples."""
        return float(self.values.min()), float(self.values.max())

    def value_at(self, col: int, row: int) -> float | None:
        """Sample at (col, row); None outside the grid."""
        if 0 <= col < self.width and 0 <= row < self.height:
            return float(self.values[row, col])
        return None


@dataclass(frozen=True)
class ThresholdSet:
    """Strictly increasing, finite contour levels."""

    values: tuple[float, ...]

    def __post_init__(self) -> None:
        vals = tuple(float(v) for v in self.values)
        if not vals:
            msg = 'Threshold set must contain at least one value'
            raise InvalidInput(msg)
        if not all(math.isfinite(v) for v in vals):
            msg = 'Threshold set contains non-finite values'
            raise InvalidInput(msg)
        for prev, cur in zip(vals, vals[1:]):
            if cur <= prev:
                msg = f'Thresholds must be strictly increasing: {prev} >= {cur}'
                raise InvalidInput(msg)
        object.__setattr__(self, 'values', vals)

    @classmethod
    def from_range(cls, start: float, stop: float, step: float) -> ThresholdSet:
        """
        Levels ``start, start + step, …`` below ``stop`` (half-open, like range).

        Values are rounded to 12 decimals so that e.g. ``from_range(-2, 2, 0.1)``
        yields ``-1.9`` rather than ``-1.9000000000000001``.
        """
        if not (math.isfinite(step) and step > 0):
            msg = f'Threshold step must be positive, got {step}'
            raise InvalidInput(msg)
        count = max(0, math.ceil((stop - start) / step))
        return cls(tuple(round(start + i * step, 12) for i in range(count)))

    @classmethod
    def from_extent(cls, grid: ScalarGrid, count: int) -> ThresholdSet:
        """``count`` evenly spaced levels strictly inside the grid's value range."""
        if count < 1:
            msg = f'Threshold count must be >= 1, got {count}'
            raise InvalidInput(msg)
        lo, hi = grid.extent
        if hi <= lo:
            msg = 'Cannot derive thresholds from a flat grid'
            raise InvalidInput(msg)
        step = (hi - lo) / (count + 1)
        return cls(tuple(lo + step * (i + 1) for i in range(count)))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self):
        return iter(self.values)

    @property
    def extent(self) -> tuple[float, float]:
        return self.values[0], self.values[-1]
