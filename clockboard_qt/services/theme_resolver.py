# clockboard_qt/services/theme_resolver.py
"""
Turns ThemeData into concrete rendering resources (QColor / fonts)

One ThemeResolver instance is the application's theme context: apply() is
the only way to change what the UI looks like, and views listen to
theme_applied.
"""

import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import logging

from PySide6.QtCore import QCoreApplication, QObject, Signal
from PySide6.QtGui import QColor, QFont, QFontDatabase, QGuiApplication

from ..models.theme_data import COLOR_FIELDS, ThemeData
from ..utils.constants import (
    DEFAULT_TIME_FONT,
    DEFAULT_UI_FONT,
    FILE_FONT_ROOT,
    FONTS_DIR,
    PACKAGED_FONT_ROOT,
    UNIVERSAL_DEFAULT_FONT,
)
from ..utils.errors import InvalidColorError

logger = logging.getLogger(__name__)

HEX_COLOR_RE = re.compile(r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")

DEFAULT_FONT_ROOTS: Dict[str, Path] = {
    PACKAGED_FONT_ROOT: FONTS_DIR,
    FILE_FONT_ROOT: Path("/"),
}


# ========== RESOURCES ==========

@dataclass(frozen=True)
class FontHandle:
    """
    A usable font family plus the identifier it came from

    source keeps packaged references verbatim since the family name alone
    loses the file path.
    """
    family: str
    source: str
    degraded: bool = field(default=False, compare=False)

    def to_qfont(self, point_size: Optional[float] = None) -> QFont:
        font = QFont(self.family)
        if point_size:
            font.setPointSizeF(point_size)
        return font


def color_to_hex(color: QColor) -> str:
    """QColor -> '#AARRGGBB'"""
    return color.name(QColor.NameFormat.HexArgb).upper()


def color_to_css(color: QColor) -> str:
    return f"rgba({color.red()}, {color.green()}, {color.blue()}, {color.alpha()})"


@dataclass
class ResolvedTheme:
    """Active rendering resource set"""
    name: str
    colors: Dict[str, QColor]
    time_font: FontHandle
    ui_font: FontHandle

    def color(self, field_name: str) -> QColor:
        return QColor(self.colors[field_name])

    def css(self, field_name: str) -> str:
        return color_to_css(self.colors[field_name])

    def stylesheet(self) -> str:
        """Application stylesheet built from the resolved colors and fonts"""
        c = self.css
        return f"""
            QMainWindow, QDialog, QScrollArea, QWidget#ClockBoard {{
                background: {c('window_background')};
                font-family: '{self.ui_font.family}';
            }}
            QMenuBar, QMenu, QToolBar {{
                background: {c('menu_background')};
                color: {c('menu_foreground')};
            }}
            QToolBar QToolButton:checked {{
                background: {c('accent')};
            }}
            QFrame#ClockCard {{
                background: {c('time_background')};
                border: 1px solid {c('button_background')};
                border-radius: 6px;
            }}
            QFrame#ClockCard[dropTarget="true"] {{
                border: 2px solid {c('accent')};
            }}
            QLabel#TimeLabel {{
                color: {c('time_text')};
                background: {c('time_background')};
                font-family: '{self.time_font.family}';
            }}
            QLabel#LocationLabel, QLabel#InfoLabel {{
                color: {c('info_text')};
                background: {c('info_background')};
                padding: 2px 4px;
            }}
            QLabel#TagLabel {{
                color: {c('label_text')};
                background: {c('label_background')};
                padding: 2px 4px;
            }}
            QPushButton {{
                color: {c('button_foreground')};
                background: {c('button_background')};
                border: none;
                padding: 3px 8px;
            }}
            QPushButton:hover {{
                background: {c('accent')};
            }}
        """


# ========== FONT REGISTRY ==========

class QtFontRegistry:
    """Platform font registry backed by QFontDatabase (needs a QGuiApplication)"""

    def __init__(self):
        self._loaded: Dict[str, List[str]] = {}

    @staticmethod
    def _require_gui():
        if not isinstance(QCoreApplication.instance(), QGuiApplication):
            raise RuntimeError("font registry needs a running QGuiApplication")

    def has_family(self, name: str) -> bool:
        self._require_gui()
        wanted = name.casefold()
        return any(family.casefold() == wanted for family in QFontDatabase.families())

    def load_font_file(self, path: Path) -> List[str]:
        """
        Register a font file with the application

        Returns:
            Families contained in the file
        """
        self._require_gui()
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"font file not found: {path}")

        key = str(path.resolve())
        if key not in self._loaded:
            font_id = QFontDatabase.addApplicationFont(key)
            if font_id < 0:
                raise OSError(f"cannot load font file: {key}")
            self._loaded[key] = list(QFontDatabase.applicationFontFamilies(font_id))
        return self._loaded[key]

    def families(self) -> List[str]:
        self._require_gui()
        return list(QFontDatabase.families())


# ========== RESOLVER ==========

class ThemeResolver(QObject):
    """
    Resolves themes and holds the active resource set

    Color failures are per field and keep the previous color. Font failures
    walk identifier -> fallback -> universal default and never raise.
    """

    theme_applied = Signal(object)  # ResolvedTheme

    def __init__(self, font_registry=None, font_roots: Optional[Dict[str, Path]] = None,
                 parent=None):
        super().__init__(parent)
        self.font_registry = font_registry if font_registry is not None else QtFontRegistry()
        self.font_roots = dict(font_roots) if font_roots is not None else dict(DEFAULT_FONT_ROOTS)
        self._theme: Optional[ThemeData] = None
        self._resources: Optional[ResolvedTheme] = None

    @property
    def current_theme(self) -> ThemeData:
        """Last applied ThemeData (defaults before the first apply)"""
        return replace(self._theme) if self._theme else ThemeData()

    @property
    def resources(self) -> Optional[ResolvedTheme]:
        return self._resources

    # ========== COLORS ==========

    def resolve_color(self, value: str) -> QColor:
        """
        Parse '#RGB', '#RRGGBB', '#AARRGGBB' or a color name

        Raises:
            InvalidColorError: anything else
        """
        if not isinstance(value, str) or not value.strip():
            raise InvalidColorError(value)

        text = value.strip()
        if text.startswith("#") and not HEX_COLOR_RE.match(text):
            raise InvalidColorError(value)

        color = QColor(text)
        if not color.isValid():
            raise InvalidColorError(value)
        return color

    # ========== FONTS ==========

    def resolve_font(self, identifier: str, fallback_identifier: str) -> FontHandle:
        """
        Resolve a font identifier, degrading instead of failing

        Args:
            identifier: system family name or packaged reference
                        '<scheme>://<base>/<path>#<face>'
            fallback_identifier: used when identifier is empty or fails

        Returns:
            FontHandle, always
        """
        if not identifier or not identifier.strip():
            identifier = fallback_identifier

        try:
            return self._resolve_font_source(identifier)
        except Exception as e:
            logger.warning(f"Font '{identifier}' failed to load: {e}. "
                           f"Falling back to '{fallback_identifier}'")

        if fallback_identifier and fallback_identifier != identifier:
            try:
                return replace(self._resolve_font_source(fallback_identifier), degraded=True)
            except Exception as e:
                logger.warning(f"Fallback font '{fallback_identifier}' failed to load: {e}")

        logger.warning(f"Using universal default font '{UNIVERSAL_DEFAULT_FONT}'")
        return FontHandle(UNIVERSAL_DEFAULT_FONT, UNIVERSAL_DEFAULT_FONT, degraded=True)

    def _resolve_font_source(self, identifier: str) -> FontHandle:
        if not identifier or not identifier.strip():
            raise ValueError("empty font identifier")
        identifier = identifier.strip()

        if "://" in identifier:
            path, face = self.parse_packaged_font(identifier)
            families = self.font_registry.load_font_file(path)
            if not families:
                raise LookupError(f"no font families in {path}")
            if not face:
                family = families[0]
            else:
                matches = [f for f in families if f.casefold() == face.casefold()]
                if not matches:
                    raise LookupError(f"face '{face}' not found in {path} ({families})")
                family = matches[0]
            logger.debug(f"(PACK) font resolved to {family} from {path}")
            return FontHandle(family, identifier)

        if not self.font_registry.has_family(identifier):
            raise LookupError(f"font family '{identifier}' is not installed")
        logger.debug(f"(SYS) font resolved to {identifier}")
        return FontHandle(identifier, identifier)

    def parse_packaged_font(self, identifier: str) -> Tuple[Path, str]:
        """
        Split a packaged reference into (font file path, face name)

        Raises:
            ValueError: unknown scheme/base or empty path
        """
        for root, directory in self.font_roots.items():
            if identifier.lower().startswith(root.lower()):
                relative, _, face = identifier[len(root):].partition("#")
                if relative.startswith("./"):
                    relative = relative[2:]
                if not relative:
                    raise ValueError(f"no font file in '{identifier}'")
                return Path(directory) / relative, face.strip()

        raise ValueError(f"unsupported font reference '{identifier}'")

    # ========== APPLY / CAPTURE ==========

    def apply(self, theme: ThemeData) -> ResolvedTheme:
        """
        Resolve every field and install the result as the active set

        Returns:
            The new ResolvedTheme
        """
        previous = self._resources
        defaults = ThemeData()

        colors: Dict[str, QColor] = {}
        for field_name in COLOR_FIELDS:
            try:
                colors[field_name] = self.resolve_color(getattr(theme, field_name))
            except InvalidColorError as e:
                if previous is not None:
                    kept = previous.color(field_name)
                else:
                    kept = self.resolve_color(getattr(defaults, field_name))
                logger.warning(f"Theme field '{field_name}': {e}; keeping {color_to_hex(kept)}")
                colors[field_name] = kept

        resources = ResolvedTheme(
            name=theme.name,
            colors=colors,
            time_font=self.resolve_font(theme.time_font_family, DEFAULT_TIME_FONT),
            ui_font=self.resolve_font(theme.ui_font_family, DEFAULT_UI_FONT)
        )

        self._resources = resources
        self._theme = replace(theme)
        logger.info(f"Theme '{theme.name}' applied")
        self.theme_applied.emit(resources)
        return resources

    def capture_current(self, name: Optional[str] = None) -> ThemeData:
        """
        Read the active resource set back into a ThemeData

        Colors come back as '#AARRGGBB'; fonts as the identifier that
        produced the active handle. name defaults to the applied theme's name.
        """
        if name is None:
            name = self.current_theme.name
        if self._resources is None:
            return ThemeData(name=name)

        values = {field_name: color_to_hex(self._resources.colors[field_name])
                  for field_name in COLOR_FIELDS}
        return ThemeData(
            name=name,
            time_font_family=self._resources.time_font.source,
            ui_font_family=self._resources.ui_font.source,
            **values
        )

    def update_field(self, field_name: str, value: str) -> ResolvedTheme:
        """Change one field of the current theme and re-apply"""
        return self.apply(self.current_theme.with_field(field_name, value))
