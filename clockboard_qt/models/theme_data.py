# clockboard_qt/models/theme_data.py
"""
Theme document model: twelve named colors and two font identifiers
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List
import logging

from ..utils.constants import DEFAULT_TIME_FONT, DEFAULT_UI_FONT
from ..utils.errors import DocumentParseError

logger = logging.getLogger(__name__)

# field name -> JSON key
JSON_KEYS = {
    "name": "Name",
    "window_background": "WindowBackground",
    "menu_background": "MenuBackground",
    "menu_foreground": "MenuForeground",
    "time_text": "TimeText",
    "time_background": "TimeBackground",
    "label_text": "LabelText",
    "label_background": "LabelBackground",
    "info_text": "InfoText",
    "info_background": "InfoBackground",
    "button_foreground": "ButtonForeground",
    "button_background": "ButtonBackground",
    "accent": "Accent",
    "time_font_family": "TimeFontFamily",
    "ui_font_family": "UiFontFamily",
}

COLOR_FIELDS: List[str] = [
    "window_background",
    "menu_background",
    "menu_foreground",
    "time_text",
    "time_background",
    "label_text",
    "label_background",
    "info_text",
    "info_background",
    "button_foreground",
    "button_background",
    "accent",
]

FONT_FIELDS: List[str] = ["time_font_family", "ui_font_family"]


@dataclass
class ThemeData:
    """
    Flat theme record

    Colors are '#RRGGBB' / '#AARRGGBB' hex strings or color names; fonts are
    system family names or packaged references like
    'pack://application:,,,/DS-DIGI.TTF#DS-Digital'. Values are not checked
    here, resolution handles bad ones.
    """
    name: str = "Default"

    window_background: str = "#1A1A1A"
    menu_background: str = "Gray"
    menu_foreground: str = "Black"

    time_text: str = "#D4EDFF"
    time_background: str = "#1B2230"

    label_text: str = "#C6D4E2"
    label_background: str = "#212B36"

    info_text: str = "#E4E8EF"
    info_background: str = "#394355"

    button_foreground: str = "#D8E8FF"
    button_background: str = "#4B5568"

    accent: str = "#5AA9FF"

    time_font_family: str = DEFAULT_TIME_FONT
    ui_font_family: str = DEFAULT_UI_FONT

    def to_dict(self) -> Dict[str, str]:
        """Document form with the JSON key names"""
        return {JSON_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ThemeData":
        """
        Build from a document; missing or null keys keep their defaults

        Raises:
            DocumentParseError: data is not an object or a value is not a string
        """
        if not isinstance(data, dict):
            raise DocumentParseError("theme document must be a JSON object")

        values = {}
        for field_name, key in JSON_KEYS.items():
            value = data.get(key)
            if value is None:
                continue
            if not isinstance(value, str):
                raise DocumentParseError(f"'{key}' must be a string")
            values[field_name] = value

        unknown = set(data) - set(JSON_KEYS.values())
        if unknown:
            logger.debug(f"Ignoring unknown theme keys: {sorted(unknown)}")

        return cls(**values)

    def with_field(self, field_name: str, value: str) -> "ThemeData":
        """Copy with one field replaced"""
        if field_name not in JSON_KEYS:
            raise AttributeError(f"ThemeData has no field {field_name!r}")
        return replace(self, **{field_name: value})
