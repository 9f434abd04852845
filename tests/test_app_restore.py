# tests/test_app_restore.py
import json

import pytest

from app_qt import restore_clocks, restore_theme
from clockboard_qt.models.theme_data import ThemeData
from clockboard_qt.repositories.clock_repository import ClockRepository
from clockboard_qt.repositories.settings_repository import SettingsRepository
from clockboard_qt.repositories.theme_repository import ThemeRepository
from clockboard_qt.services.theme_resolver import ThemeResolver


@pytest.fixture
def settings(tmp_path):
    return SettingsRepository(tmp_path / "settings.json")


@pytest.fixture
def resolver(font_registry):
    return ThemeResolver(font_registry)


def test_restore_theme_reports_unreadable_file(tmp_path, settings, resolver):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    settings.set_last_theme_file(str(path))

    message = restore_theme(resolver, ThemeRepository(tmp_path), settings)

    assert "Failed to load saved theme" in message
    assert str(path) in message
    assert resolver.current_theme == ThemeData()


def test_restore_theme_applies_saved_theme(tmp_path, settings, resolver):
    repo = ThemeRepository(tmp_path)
    path = repo.path_for("Ocean")
    repo.save(ThemeData(name="Ocean", accent="#0077BE"), path)
    settings.set_last_theme_file(str(path))

    assert restore_theme(resolver, repo, settings) == ""
    assert resolver.current_theme.name == "Ocean"


def test_restore_theme_without_history(tmp_path, settings, resolver):
    assert restore_theme(resolver, ThemeRepository(tmp_path), settings) == ""
    assert resolver.resources is not None


def test_restore_clocks_reports_skipped_records(tmp_path, settings):
    path = tmp_path / "clocks.json"
    path.write_text(json.dumps([
        {"Location": "Tokyo", "Labels": [], "TimeZoneId": "Asia/Tokyo", "Is24HourFormat": True},
        {"Location": "Nowhere", "Labels": [], "TimeZoneId": "Bad/Zone", "Is24HourFormat": True},
    ]), encoding="utf-8")
    settings.set_last_clock_file(str(path))

    collection, message = restore_clocks(ClockRepository(settings))

    assert [c.location for c in collection] == ["Tokyo"]
    assert collection.global_format is True
    assert "Record 1" in message
