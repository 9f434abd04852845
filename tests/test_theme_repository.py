# tests/test_theme_repository.py
import json

import pytest

from clockboard_qt.models.theme_data import JSON_KEYS, ThemeData
from clockboard_qt.repositories.theme_repository import ThemeRepository
from clockboard_qt.utils.constants import THEMES_DIR
from clockboard_qt.utils.errors import DocumentIOError, DocumentParseError


def test_defaults():
    theme = ThemeData()
    assert theme.name == "Default"
    assert theme.window_background == "#1A1A1A"
    assert theme.menu_background == "Gray"
    assert theme.menu_foreground == "Black"
    assert theme.accent == "#5AA9FF"
    assert theme.time_font_family == "pack://application:,,,/DS-DIGI.TTF#DS-Digital"
    assert theme.ui_font_family == "Arial"


def test_to_dict_uses_document_keys():
    data = ThemeData(name="Night").to_dict()
    assert set(data) == set(JSON_KEYS.values())
    assert data["Name"] == "Night"
    assert data["TimeBackground"] == "#1B2230"


def test_from_dict_missing_and_null_keys_take_defaults():
    theme = ThemeData.from_dict({"Name": "Partial", "Accent": "#000", "InfoText": None,
                                 "Sparkle": "ignored"})
    assert theme.name == "Partial"
    assert theme.accent == "#000"
    assert theme.info_text == "#E4E8EF"


@pytest.mark.parametrize("data", [[], "theme", {"Accent": 5}, {"Name": ["x"]}])
def test_from_dict_rejects_malformed(data):
    with pytest.raises(DocumentParseError):
        ThemeData.from_dict(data)


def test_with_field_copies():
    base = ThemeData()
    changed = base.with_field("accent", "Red")
    assert changed.accent == "Red"
    assert base.accent == "#5AA9FF"


def test_save_and_load(tmp_path):
    repo = ThemeRepository(tmp_path)
    theme = ThemeData(name="Ocean", accent="#0077BE", ui_font_family="Courier New")
    path = repo.path_for("Ocean")

    repo.save(theme, path)

    assert json.loads(path.read_text(encoding="utf-8"))["Accent"] == "#0077BE"
    assert repo.load(path) == theme
    assert repo.list_themes() == [path]


def test_unresolvable_values_are_stored_verbatim(tmp_path):
    repo = ThemeRepository(tmp_path)
    theme = ThemeData(accent="nonsense", time_font_family="Ghost#face")
    repo.save(theme, tmp_path / "odd.json")
    assert repo.load(tmp_path / "odd.json") == theme


def test_load_missing(tmp_path):
    with pytest.raises(DocumentIOError):
        ThemeRepository(tmp_path).load(tmp_path / "none.json")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(DocumentParseError):
        ThemeRepository(tmp_path).load(path)


def test_list_themes_missing_dir(tmp_path):
    assert ThemeRepository(tmp_path / "nope").list_themes() == []


def test_bundled_themes_load():
    repo = ThemeRepository()
    names = {path.stem for path in repo.list_themes()}
    assert {"Default", "Paper"} <= names
    assert repo.load(THEMES_DIR / "Default.json") == ThemeData()
