"""Tests for profiles module."""

from pathlib import Path

import pytest
from pydantic import ValidationError

import profiles
from domain.models import ContourSettings
from profiles import _user_profiles_dir, load_profile, save_profile
from shared.constants import ColorBy, RenderMode

SHIPPED = Path(__file__).parent.parent / 'configs' / 'profiles'


@pytest.fixture
def tmp_profiles(tmp_path, monkeypatch):
    monkeypatch.setattr(profiles, '_user_profiles_dir', lambda: tmp_path / 'profiles')
    return tmp_path / 'profiles'


class TestShippedProfiles:
    def test_project_dir_used(self):
        assert _user_profiles_dir() == SHIPPED.resolve()

    def test_default(self):
        s = load_profile(str(SHIPPED / 'default.toml'))
        assert s == ContourSettings()

    def test_terrain3d(self):
        s = load_profile(str(SHIPPED / 'terrain3d.toml'))
        assert s.mode == RenderMode.SOLID
        assert s.color_by == ColorBy.INDEX
        assert s.palette == 'rainbow'
        assert s.xy_scale == 1.0
        assert s.offset == (0.0, 0.0)
        assert s.depth_scale == 2.0
        assert len(s.thresholds) == 18
        assert 0.0 not in s.thresholds


class TestSaveLoad:
    def test_round_trip_by_name(self, tmp_profiles):
        settings = ContourSettings(mode='SOLID', depth_scale=3.0, palette=['red', 'blue'])
        path = save_profile('mine', settings)
        assert path == tmp_profiles / 'mine.toml'
        assert load_profile('mine') == settings

    def test_list_profiles(self, tmp_profiles):
        save_profile('b', ContourSettings())
        save_profile('a', ContourSettings())
        assert profiles.list_profiles() == ['a', 'b']

    def test_missing(self, tmp_profiles):
        with pytest.raises(FileNotFoundError):
            load_profile('nope')

    def test_flat_layout(self, tmp_path, tmp_profiles):
        path = tmp_path / 'flat.toml'
        path.write_text('mode = "SOLID"\nxy_scale = 2.0\n', encoding='utf-8')
        s = load_profile(str(path))
        assert s.mode == RenderMode.SOLID
        assert s.xy_scale == 2.0

    def test_invalid_values(self, tmp_path, tmp_profiles):
        path = tmp_path / 'bad.toml'
        path.write_text('[svg]\nopacity = 3.0\n', encoding='utf-8')
        with pytest.raises(ValidationError):
            load_profile(str(path))
