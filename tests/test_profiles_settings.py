import json

import pytest

from backend.data.profiles import (
    Profile,
    ProfileError,
    ProfileWindowState,
    read_profile_from_file,
    write_profile_to_file,
)
from backend.data.settings import Settings, read_settings_or_default, write_settings_to_file


class TestProfiles:
    def test_write_and_read_back(self, tmp_path):
        path = tmp_path / "nested" / "norcal.json"
        profile = Profile(
            name="NorCal",
            stations=["KSFO", "KOAK", "SJC"],
            show_input=False,
            window=ProfileWindowState(state="Normal", position={'x': 40, 'y': 60},
                                      size={'width': 320, 'height': 180}, scale_factor=1.5),
            units="hPa",
        )
        write_profile_to_file(path, profile)

        assert read_profile_from_file(path) == profile

    def test_file_uses_camel_case_keys(self, tmp_path):
        path = tmp_path / "p.json"
        write_profile_to_file(path, Profile(name="P", stations=["KSFO"]))
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == {
            'name': 'P',
            'stations': ['KSFO'],
            'showInput': True,
            'showTitlebar': True,
            'window': None,
            'units': 'inHg',
        }

    def test_minimal_profile_gets_defaults(self, tmp_path):
        path = tmp_path / "p.json"
        path.write_text(json.dumps({'stations': ['EGLL']}), encoding="utf-8")
        profile = read_profile_from_file(path)
        assert profile.stations == ['EGLL']
        assert profile.units == 'inHg'
        assert profile.window is None

    @pytest.mark.parametrize("content", [
        "{not json",
        json.dumps([]),
        json.dumps({'name': 'x'}),
        json.dumps({'stations': ['KSFO', 3]}),
        json.dumps({'stations': [], 'units': 'mmHg'}),
        json.dumps({'stations': [], 'window': {'state': 'Minimized'}}),
        json.dumps({'stations': ['KSFO'], 'window': 'Normal'}),
        json.dumps({'stations': ['KSFO'], 'window': 5}),
        json.dumps({'stations': ['KSFO'], 'window': [1, 2]}),
        json.dumps({'stations': ['KSFO'], 'window': {'position': [40, 60]}}),
        json.dumps({'stations': ['KSFO'], 'window': {'size': 'large'}}),
        json.dumps({'stations': ['KSFO'], 'window': {'scaleFactor': [2]}}),
    ])
    def test_invalid_profiles(self, tmp_path, content):
        path = tmp_path / "bad.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ProfileError, match="Invalid profile"):
            read_profile_from_file(path)

    def test_missing_profile(self, tmp_path):
        with pytest.raises(ProfileError, match="Could not read profile"):
            read_profile_from_file(tmp_path / "nope.json")

    def test_unwritable_location(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(ProfileError, match="Could not write profile"):
            write_profile_to_file(blocker / "p.json", Profile(stations=[]))


class TestSettings:
    def test_missing_file_gives_defaults(self, tmp_path):
        settings = read_settings_or_default(tmp_path / "settings.json")
        assert settings == Settings(load_most_recent_profile_on_open=True, most_recent_profile=None,
                                    always_on_top=True, auto_resize=True)

    def test_corrupt_file_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2", encoding="utf-8")
        assert read_settings_or_default(path) == Settings()

    def test_write_then_read(self, tmp_path):
        path = tmp_path / "cfg" / "settings.json"
        settings = Settings(load_most_recent_profile_on_open=False,
                            most_recent_profile="/profiles/bay.json", auto_resize=False)
        write_settings_to_file(settings, path)

        assert json.loads(path.read_text(encoding="utf-8"))['loadMostRecentProfileOnOpen'] is False
        assert read_settings_or_default(path) == settings

    def test_partial_file_fills_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({'alwaysOnTop': False}), encoding="utf-8")
        settings = read_settings_or_default(path)
        assert settings.always_on_top is False
        assert settings.load_most_recent_profile_on_open is True
