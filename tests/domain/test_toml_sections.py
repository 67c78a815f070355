"""Tests for TOML sectioned profile mapping layer."""

import tomlkit

from domain.models import ContourSettings
from domain.toml_sections import (
    SECTION_MAP,
    flat_to_sectioned,
    sectioned_to_flat,
)


class TestFlatToSectioned:
    """Tests for flat_to_sectioned()."""

    def test_creates_expected_sections(self):
        result = flat_to_sectioned(ContourSettings().model_dump(mode='json'))
        assert set(result) == {'common', *SECTION_MAP}

    def test_short_names(self):
        result = flat_to_sectioned(ContourSettings().model_dump(mode='json'))
        assert result['contours']['count'] == 10
        assert result['layout']['scale'] == 1.0
        assert result['color']['by'] == 'VALUE'
        assert result['common'] == {'mode': 'FLAT'}

    def test_none_values_skipped(self):
        result = flat_to_sectioned(ContourSettings().model_dump(mode='json'))
        assert 'domain_min' not in result['color']
        assert 'domain_max' not in result['color']

    def test_unknown_field_goes_to_common(self):
        assert flat_to_sectioned({'foo': 1}) == {'common': {'foo': 1}}


class TestSectionedToFlat:
    """Tests for sectioned_to_flat()."""

    def test_expands_short_names(self):
        flat = sectioned_to_flat({'layout': {'scale': 50.0}, 'color': {'by': 'INDEX'}})
        assert flat == {'xy_scale': 50.0, 'color_by': 'INDEX'}

    def test_flat_toml_passthrough(self):
        assert sectioned_to_flat({'mode': 'SOLID'}) == {'mode': 'SOLID'}

    def test_common_section_merged(self):
        assert sectioned_to_flat({'common': {'mode': 'SOLID'}}) == {'mode': 'SOLID'}


class TestRoundTrip:
    def test_through_toml_text(self):
        original = ContourSettings(
            mode='SOLID',
            thresholds=[-1.0, 0.5, 2.0],
            axis=(0.0, 1.0, 1.0),
            palette=['blue', 'red'],
            color_by='INDEX',
            domain_min=-3.0,
            xy_scale=50.0,
        )
        text = tomlkit.dumps(flat_to_sectioned(original.model_dump(mode='json')))
        data = tomlkit.parse(text).unwrap()
        restored = ContourSettings.model_validate(sectioned_to_flat(data))
        assert restored == original
