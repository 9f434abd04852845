# clockboard_qt/repositories/settings_repository.py
"""
Repository for session state kept between runs
Last clock file, last theme file, window geometry
"""

import json
import os
from dataclasses import dataclass, asdict, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional
import logging

from ..utils.constants import (
    SETTINGS_DIR_UNIX,
    SETTINGS_DIR_WINDOWS,
    SETTINGS_FILE,
    SETTINGS_VERSION,
    WINDOW_DEFAULT_HEIGHT,
    WINDOW_DEFAULT_LEFT,
    WINDOW_DEFAULT_TOP,
    WINDOW_DEFAULT_WIDTH,
    WINDOW_MIN_VALID_SIZE,
)

# Setup logger
logger = logging.getLogger(__name__)


# ========== DATA MODELS ==========

@dataclass
class WindowGeometry:
    """Saved main window size and position"""
    width: float = WINDOW_DEFAULT_WIDTH
    height: float = WINDOW_DEFAULT_HEIGHT
    top: float = WINDOW_DEFAULT_TOP
    left: float = WINDOW_DEFAULT_LEFT

    def validated(self, screen_width: float, screen_height: float) -> "WindowGeometry":
        """
        Drop values that would put the window out of reach

        Size and position are checked separately: a bad size keeps a good
        position and the other way round.

        Args:
            screen_width: width of the virtual screen
            screen_height: height of the virtual screen

        Returns:
            New WindowGeometry with invalid parts replaced by defaults
        """
        valid_size = (self.width > WINDOW_MIN_VALID_SIZE
                      and self.height > WINDOW_MIN_VALID_SIZE)
        valid_position = (0 <= self.top < screen_height
                          and 0 <= self.left < screen_width)

        return WindowGeometry(
            width=self.width if valid_size else WINDOW_DEFAULT_WIDTH,
            height=self.height if valid_size else WINDOW_DEFAULT_HEIGHT,
            top=self.top if valid_position else WINDOW_DEFAULT_TOP,
            left=self.left if valid_position else WINDOW_DEFAULT_LEFT
        )


@dataclass
class SessionSettings:
    """Everything restored at startup"""
    version: str = SETTINGS_VERSION
    last_clock_file: str = ""
    last_theme_file: str = ""
    window: WindowGeometry = field(default_factory=WindowGeometry)
    updated_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionSettings":
        """Create from dictionary, ignoring unknown keys"""
        known = {name: data[name] for name in cls.__dataclass_fields__ if name in data}
        if isinstance(known.get("window"), dict):
            window_fields = WindowGeometry.__dataclass_fields__
            known["window"] = WindowGeometry(
                **{k: float(v) for k, v in known["window"].items() if k in window_fields}
            )
        elif "window" in known:
            known["window"] = WindowGeometry()
        for name in ("last_clock_file", "last_theme_file"):
            if name in known and not isinstance(known[name], str):
                known[name] = ""
        return cls(**known)


# ========== REPOSITORY CLASS ==========

class SettingsRepository:
    """Load and save SessionSettings as a JSON file"""

    def __init__(self, settings_path: Optional[str] = None):
        """
        Initialize repository

        Args:
            settings_path: settings file; defaults to the user config dir
        """
        if settings_path:
            self.settings_path = Path(settings_path)
        else:
            self.settings_path = self._get_default_settings_path()

        self._settings: Optional[SessionSettings] = None
        self.load_settings()

    def _get_default_settings_path(self) -> Path:
        """Get default settings path based on OS"""
        if os.name == 'nt':  # Windows
            config_dir = Path(os.environ.get('APPDATA', '')) / SETTINGS_DIR_WINDOWS
        else:  # Linux/Mac
            config_dir = Path.home() / '.config' / SETTINGS_DIR_UNIX

        return config_dir / SETTINGS_FILE

    # ========== LOAD/SAVE OPERATIONS ==========

    def load_settings(self) -> SessionSettings:
        """
        Load settings from file; a missing or corrupt file gives defaults

        Returns:
            SessionSettings object
        """
        try:
            if self.settings_path.exists():
                data = json.loads(self.settings_path.read_text(encoding='utf-8'))
                if not isinstance(data, dict):
                    raise ValueError("settings document is not an object")
                self._settings = SessionSettings.from_dict(data)
            else:
                self._settings = SessionSettings()

        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Error loading settings from {self.settings_path}: {e}")
            self._settings = SessionSettings()

        return self._settings

    def save_settings(self) -> bool:
        """
        Save settings to file

        Returns:
            True on success
        """
        try:
            self._settings.updated_at = datetime.now().isoformat()
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)
            self.settings_path.write_text(
                json.dumps(self._settings.to_dict(), indent=2, ensure_ascii=False),
                encoding='utf-8'
            )
            return True

        except OSError as e:
            logger.error(f"Error saving settings to {self.settings_path}: {e}")
            return False

    def get_settings(self) -> SessionSettings:
        return self._settings

    # ========== SPECIFIC GETTERS / SETTERS ==========

    def get_last_clock_file(self) -> str:
        return self._settings.last_clock_file

    def set_last_clock_file(self, path: str) -> bool:
        self._settings.last_clock_file = str(path)
        return self.save_settings()

    def get_last_theme_file(self) -> str:
        return self._settings.last_theme_file

    def set_last_theme_file(self, path: str) -> bool:
        self._settings.last_theme_file = str(path)
        return self.save_settings()

    def get_window_geometry(self, screen_width: float, screen_height: float) -> WindowGeometry:
        """Saved geometry, validated against the screen"""
        return self._settings.window.validated(screen_width, screen_height)

    def save_window_geometry(self, geometry: WindowGeometry) -> bool:
        self._settings.window = geometry
        return self.save_settings()
