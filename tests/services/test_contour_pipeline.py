"""Tests for services.contour_pipeline module."""

import logging

import pytest

from contours.grid import ScalarGrid, ThresholdSet
from domain.models import ContourSettings
from services.color_utils import ColorMapper
from services.contour_pipeline import (
    ContourLayer,
    build_contour_layers,
    resolve_thresholds,
)
from shared.constants import ColorBy, ColorInterpolation, RenderMode
from shared.errors import InvalidInput


@pytest.fixture
def signed_peak():
    """Peak grid shifted to span [-5, 5]."""
    return ScalarGrid.from_rows(
        [
            [-5, -5, -5, -5],
            [-5, 5, 5, -5],
            [-5, 5, 5, -5],
            [-5, -5, -5, -5],
        ]
    )


class TestResolveThresholds:
    def test_explicit(self, peak_grid):
        settings = ContourSettings(thresholds=[1.0, 2.0])
        assert resolve_thresholds(peak_grid, settings).values == (1.0, 2.0)

    def test_from_grid_extent(self, peak_grid):
        settings = ContourSettings(threshold_count=1)
        assert resolve_thresholds(peak_grid, settings).values == (5.0,)


class TestBuildContourLayers:
    def test_flat_single_peak(self, peak_grid):
        layers = build_contour_layers(peak_grid, ThresholdSet((5.0,)))
        assert len(layers) == 1
        layer = layers[0]
        assert isinstance(layer, ContourLayer)
        assert layer.threshold == 5.0
        assert len(layer.outlines) == 1
        assert layer.outlines[0].area == pytest.approx(3.5)
        assert layer.solids == ()

    def test_single_level_takes_first_palette_color(self, peak_grid):
        (layer,) = build_contour_layers(peak_grid, ThresholdSet((5.0,)))
        assert layer.color == ColorMapper('viridis').color_at(0.0)

    def test_empty_bands_omitted(self, peak_grid):
        layers = build_contour_layers(peak_grid, ThresholdSet((5.0, 20.0)))
        assert [layer.threshold for layer in layers] == [5.0]

    def test_all_empty(self):
        grid = ScalarGrid.from_rows([[1, 1], [1, 1]])
        assert build_contour_layers(grid, ThresholdSet((0.5, 2.0))) == []

    def test_holes_kept(self, annulus_grid):
        (layer,) = build_contour_layers(annulus_grid, [5.0])
        assert len(layer.outlines[0].holes) == 1

    def test_layout_applied(self, peak_grid):
        settings = ContourSettings(xy_scale=2.0, offset_x=-1.0, offset_y=10.0)
        (layer,) = build_contour_layers(peak_grid, ThresholdSet((5.0,)), settings)
        outline = layer.outlines[0]
        assert outline.area == pytest.approx(14.0)
        assert outline.outer[0] == pytest.approx((0.0, 12.0))

    def test_invalid_thresholds_propagate(self, peak_grid):
        with pytest.raises(InvalidInput):
            build_contour_layers(peak_grid, [])
        with pytest.raises(InvalidInput):
            build_contour_layers(peak_grid, [2.0, 1.0])

    def test_color_by_value(self, peak_grid):
        settings = ContourSettings(
            palette=['black', 'white'], interpolation=ColorInterpolation.RGB
        )
        layers = build_contour_layers(peak_grid, ThresholdSet((2.0, 5.0, 8.0)), settings)
        assert [layer.color for layer in layers] == [
            (0, 0, 0),
            (128, 128, 128),
            (255, 255, 255),
        ]

    def test_color_domain_override(self, peak_grid):
        settings = ContourSettings(
            palette=['black', 'white'],
            interpolation=ColorInterpolation.RGB,
            domain_min=0.0,
            domain_max=10.0,
        )
        (layer,) = build_contour_layers(peak_grid, ThresholdSet((5.0,)), settings)
        assert layer.color == (128, 128, 128)

    def test_color_by_index(self, peak_grid):
        settings = ContourSettings(palette='rainbow', color_by=ColorBy.INDEX)
        layers = build_contour_layers(peak_grid, ThresholdSet((2.0, 5.0, 8.0)), settings)
        mapper = ColorMapper('rainbow')
        assert [layer.color for layer in layers] == [
            mapper.color_of_index(i, 3) for i in range(3)
        ]

    def test_solid_mode(self, peak_grid):
        settings = ContourSettings(mode=RenderMode.SOLID, depth_scale=2.0)
        (layer,) = build_contour_layers(peak_grid, ThresholdSet((5.0,)), settings)
        (solid,) = layer.solids
        assert solid.depth == pytest.approx(10.0)
        assert solid.volume == pytest.approx(35.0)

    def test_negative_level_gives_positive_depth(self, signed_peak):
        settings = ContourSettings(mode=RenderMode.SOLID)
        (layer,) = build_contour_layers(signed_peak, ThresholdSet((-2.0,)), settings)
        assert layer.solids[0].depth == pytest.approx(2.0)

    def test_degenerate_solid_skipped(self, signed_peak, caplog):
        settings = ContourSettings(mode=RenderMode.SOLID)
        with caplog.at_level(logging.WARNING, logger='services.contour_pipeline'):
            layers = build_contour_layers(signed_peak, ThresholdSet((0.0, 2.0)), settings)
        assert [layer.threshold for layer in layers] == [2.0]
        assert 'Skipped solid at level 0.0' in caplog.text

    def test_summary_logged(self, peak_grid, caplog):
        with caplog.at_level(logging.INFO, logger='services.contour_pipeline'):
            build_contour_layers(peak_grid, ThresholdSet((5.0, 20.0)))
        assert '1 of 2 level(s) non-empty' in caplog.text

    def test_repeatable(self, annulus_grid):
        settings = ContourSettings(mode=RenderMode.SOLID)
        first = build_contour_layers(annulus_grid, ThresholdSet((2.5, 7.5)), settings)
        second = build_contour_layers(annulus_grid, ThresholdSet((2.5, 7.5)), settings)
        assert [layer.outlines for layer in first] == [layer.outlines for layer in second]
        assert [layer.color for layer in first] == [layer.color for layer in second]
