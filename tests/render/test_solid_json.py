"""Tests for render.solid_json module."""

import json

import pytest

from contours.grid import ThresholdSet
from domain.models import ContourSettings
from render.solid_json import solids_to_dict
from services.contour_pipeline import build_contour_layers
from shared.constants import RenderMode


class TestSolidsToDict:
    def test_structure(self, annulus_grid):
        settings = ContourSettings(mode=RenderMode.SOLID, depth_scale=0.5)
        layers = build_contour_layers(annulus_grid, ThresholdSet((5.0,)), settings)
        data = json.loads(json.dumps(solids_to_dict(layers)))
        (layer,) = data['layers']
        assert layer['threshold'] == 5.0
        assert layer['index'] == 0
        assert layer['color'].startswith('#')
        (solid,) = layer['solids']
        assert solid['depth'] == 2.5
        assert solid['axis'] == [0.0, 0.0, 1.0]
        n = len(solid['vertices']) // 2
        assert len(solid['side_walls']) == n
        assert len(solid['front_faces']) == len(solid['back_faces']) == 2
        assert solid['volume'] == pytest.approx(8.0 * 2.5)

    def test_flat_layers_have_no_solids(self, peak_grid):
        layers = build_contour_layers(peak_grid, ThresholdSet((5.0,)))
        assert solids_to_dict(layers)['layers'][0]['solids'] == []
