"""Tests for mesh.outline module."""

import pytest

from contours.classifier import Polygon, classify
from contours.extractor import extract
from contours.grid import ThresholdSet
from mesh.outline import Outline2D, build_outline
from shared.errors import DegenerateGeometry

SQUARE = ((0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0))
HOLE = ((1.0, 1.0), (1.0, 3.0), (3.0, 3.0), (3.0, 1.0))


class TestBuildOutline:
    def test_preserves_order(self):
        outline = build_outline(Polygon(2.0, SQUARE, (HOLE,)))
        assert outline.threshold == 2.0
        assert outline.outer == SQUARE
        assert outline.holes == (HOLE,)
        assert outline.vertex_count == 8

    def test_collapses_duplicates(self):
        outer = ((0.0, 0.0), (0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 0.0))
        outline = build_outline(Polygon(1.0, outer))
        assert outline.outer == ((0.0, 0.0), (4.0, 0.0), (4.0, 4.0))

    def test_too_few_distinct_points(self):
        outer = ((0.0, 0.0), (1.0, 1.0), (1.0, 1.0), (0.0, 0.0))
        with pytest.raises(DegenerateGeometry):
            build_outline(Polygon(1.0, outer))

    def test_degenerate_hole_dropped(self):
        hole = ((1.0, 1.0), (2.0, 2.0), (2.0, 2.0))
        outline = build_outline(Polygon(1.0, SQUARE, (hole,)))
        assert outline.holes == ()

    def test_from_extracted_polygon(self, annulus_grid):
        band = extract(annulus_grid, ThresholdSet((5.0,)))[5.0]
        outline = build_outline(classify(band)[0])
        assert outline.area == pytest.approx(8.0)


class TestOutline2D:
    def test_area_subtracts_holes(self):
        assert Outline2D(0.0, SQUARE, (HOLE,)).area == pytest.approx(12.0)

    def test_transformed(self):
        moved = Outline2D(0.0, SQUARE).transformed(2.0, (-1.0, 3.0))
        assert moved.outer[0] == (-1.0, 3.0)
        assert moved.outer[2] == (7.0, 11.0)
        assert moved.area == pytest.approx(64.0)

    def test_transformed_rejects_non_positive_scale(self):
        with pytest.raises(DegenerateGeometry):
            Outline2D(0.0, SQUARE).transformed(0.0)

    def test_svg_path(self):
        path = Outline2D(0.0, SQUARE, (HOLE,)).to_svg_path()
        assert path == 'M0,0L4,0L4,4L0,4ZM1,1L1,3L3,3L3,1Z'

    def test_svg_path_precision(self):
        outline = Outline2D(0.0, ((0.5, -0.0001), (1.25, 0.0), (100.0, 2.0)))
        assert outline.to_svg_path(precision=2) == 'M0.5,0L1.25,0L100,2Z'
        assert outline.to_svg_path(precision=0) == 'M0,0L1,0L100,2Z'
