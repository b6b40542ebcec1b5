"""Tests for settings persistence."""

from __future__ import annotations

import json

from dirdiff.services.settings import ApplicationSettings, SettingsManager, Theme


def test_defaults_when_missing(settings_path):
    manager = SettingsManager(settings_path)

    assert manager.settings == ApplicationSettings()
    assert manager.settings.ui.theme is Theme.DARK


def test_save_and_load(settings_path):
    manager = SettingsManager(settings_path)
    manager.settings.ui.theme = Theme.LIGHT
    manager.settings.ui.window_width = 1234
    manager.settings.last_directory = "/tmp/somewhere"

    assert manager.save()

    data = json.loads(settings_path.read_text(encoding="utf-8"))
    assert data["ui"]["theme"] == "LIGHT"

    loaded = SettingsManager(settings_path).settings
    assert loaded.ui.theme is Theme.LIGHT
    assert loaded.ui.window_width == 1234
    assert loaded.last_directory == "/tmp/somewhere"


def test_corrupt_file_falls_back_to_defaults(settings_path):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text("{not json", encoding="utf-8")

    assert SettingsManager(settings_path).settings == ApplicationSettings()


def test_partial_file_keeps_defaults(settings_path):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text('{"ui": {"window_height": 500}}', encoding="utf-8")

    settings = SettingsManager(settings_path).settings

    assert settings.ui.window_height == 500
    assert settings.ui.window_width == 1000
    assert settings.ui.theme is Theme.DARK


def test_reset(settings_path):
    manager = SettingsManager(settings_path)
    manager.settings.ui.theme = Theme.LIGHT
    manager.save()

    manager.reset()

    assert SettingsManager(settings_path).settings.ui.theme is Theme.DARK


def test_remember_directory(settings_path, tmp_path):
    manager = SettingsManager(settings_path)
    listing = tmp_path / "list.json"
    listing.touch()

    manager.remember_directory(listing)
    assert manager.settings.last_directory == str(tmp_path)

    manager.remember_directory(tmp_path)
    assert SettingsManager(settings_path).settings.last_directory == str(tmp_path)


def test_theme_from_string():
    assert Theme.from_string("light") is Theme.LIGHT
    assert Theme.from_string("SYSTEM") is Theme.SYSTEM
    assert Theme.from_string("nonsense") is Theme.DARK
