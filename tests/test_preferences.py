"""Unit tests for the dark-mode preference store."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import json

from apa_table.preferences import DARK_MODE_KEY, load_dark_mode, save_dark_mode


class TestDarkModePreference:

    def test_default_is_off(self, isolated_preferences):
        assert not isolated_preferences.exists()
        assert load_dark_mode() is False

    def test_round_trip_uses_fixed_key(self, isolated_preferences):
        save_dark_mode(True)
        assert json.loads(isolated_preferences.read_text(encoding="utf-8")) == {DARK_MODE_KEY: True}
        assert load_dark_mode() is True

    def test_toggle_off(self):
        save_dark_mode(True)
        save_dark_mode(False)
        assert load_dark_mode() is False

    def test_other_keys_preserved(self, isolated_preferences):
        isolated_preferences.write_text(json.dumps({"other": 1}), encoding="utf-8")
        save_dark_mode(True)
        assert json.loads(isolated_preferences.read_text(encoding="utf-8")) == {"other": 1, DARK_MODE_KEY: True}

    def test_corrupt_file_reads_as_off(self, isolated_preferences):
        isolated_preferences.write_text("{not json", encoding="utf-8")
        assert load_dark_mode() is False

    def test_corrupt_file_overwritten_on_save(self, isolated_preferences):
        isolated_preferences.write_text("{not json", encoding="utf-8")
        save_dark_mode(True)
        assert load_dark_mode() is True

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "nested" / "prefs.json"
        save_dark_mode(True, path)
        assert load_dark_mode(path) is True
