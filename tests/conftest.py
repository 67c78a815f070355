"""Pytest configuration and fixtures for contour tests."""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from contours.grid import ScalarGrid  # noqa: E402


@pytest.fixture
def peak_grid():
    """4x4 grid: 10 in the four center samples, 0 on the edges."""
    return ScalarGrid.from_rows(
        [
            [0, 0, 0, 0],
            [0, 10, 10, 0],
            [0, 10, 10, 0],
            [0, 0, 0, 0],
        ]
    )


@pytest.fixture
def annulus_grid():
    """5x5 grid: a raised 3x3 block with a dip in the middle."""
    return ScalarGrid.from_rows(
        [
            [0, 0, 0, 0, 0],
            [0, 10, 10, 10, 0],
            [0, 10, 0, 10, 0],
            [0, 10, 10, 10, 0],
            [0, 0, 0, 0, 0],
        ]
    )
