# clockboard_qt/views/dialogs/theme_editor_dialog.py
"""
Theme editor - edit colors and fonts live, load and save theme files
"""

from typing import Dict, List, Tuple
import logging

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QLineEdit,
    QPushButton, QComboBox, QColorDialog, QFileDialog, QMessageBox, QFrame
)
from PySide6.QtGui import QColor

from ...models.theme_data import COLOR_FIELDS, JSON_KEYS, ThemeData
from ...utils.constants import DEFAULT_UI_FONT, FILE_DIALOG_FILTER, TIME_FONT_CHOICES
from ...utils.errors import ClockBoardError, InvalidColorError

logger = logging.getLogger(__name__)


class ThemeEditorDialog(QDialog):
    """
    Editor over the application's ThemeResolver

    Every change builds a new ThemeData and applies it, so the board
    repaints while the user types.
    """

    def __init__(self, resolver, theme_repo, settings_repo=None, parent=None):
        super().__init__(parent)
        self.resolver = resolver
        self.theme_repo = theme_repo
        self.settings_repo = settings_repo

        self.setWindowTitle("Theme Editor")
        self.resize(520, 560)

        self._current: ThemeData = resolver.capture_current()
        self._color_edits: Dict[str, QLineEdit] = {}
        self._swatches: Dict[str, QFrame] = {}
        self._loading = False

        self.setup_ui()
        self.load_fields_from_theme(self._current)

    def setup_ui(self):
        layout = QVBoxLayout(self)

        grid = QGridLayout()
        for row, field_name in enumerate(COLOR_FIELDS):
            grid.addWidget(QLabel(JSON_KEYS[field_name]), row, 0)

            edit = QLineEdit()
            edit.textChanged.connect(self.update_theme_from_fields)
            grid.addWidget(edit, row, 1)
            self._color_edits[field_name] = edit

            swatch = QFrame()
            swatch.setFixedSize(24, 18)
            swatch.setFrameShape(QFrame.Box)
            grid.addWidget(swatch, row, 2)
            self._swatches[field_name] = swatch

            pick = QPushButton("…")
            pick.setFixedWidth(28)
            pick.clicked.connect(lambda checked=False, f=field_name: self.pick_color(f))
            grid.addWidget(pick, row, 3)

        row = len(COLOR_FIELDS)
        self.time_font_combo = QComboBox()
        grid.addWidget(QLabel(JSON_KEYS["time_font_family"]), row, 0)
        grid.addWidget(self.time_font_combo, row, 1, 1, 3)

        self.ui_font_combo = QComboBox()
        grid.addWidget(QLabel(JSON_KEYS["ui_font_family"]), row + 1, 0)
        grid.addWidget(self.ui_font_combo, row + 1, 1, 1, 3)

        layout.addLayout(grid)

        self._fill_font_combo(self.time_font_combo, self._font_options(TIME_FONT_CHOICES))
        ui_choices = [(DEFAULT_UI_FONT, DEFAULT_UI_FONT)] + TIME_FONT_CHOICES
        self._fill_font_combo(self.ui_font_combo, self._font_options(ui_choices))
        self.time_font_combo.currentIndexChanged.connect(self.update_theme_from_fields)
        self.ui_font_combo.currentIndexChanged.connect(self.update_theme_from_fields)

        buttons = QHBoxLayout()
        load_btn = QPushButton("Load Theme…")
        load_btn.clicked.connect(self.load_theme)
        save_btn = QPushButton("Save Theme…")
        save_btn.clicked.connect(self.save_theme)
        reset_btn = QPushButton("Defaults")
        reset_btn.clicked.connect(lambda: self.set_theme(ThemeData()))
        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.accept)
        for button in (load_btn, save_btn, reset_btn):
            buttons.addWidget(button)
        buttons.addStretch(1)
        buttons.addWidget(close_btn)
        layout.addLayout(buttons)

    # ========== FONT OPTIONS ==========

    def _font_options(self, preferred: List[Tuple[str, str]]) -> List[Tuple[str, str]]:
        """Preferred entries plus installed families, sorted by display name"""
        options = list(preferred)
        known = {value.casefold() for _, value in options}
        try:
            families = self.resolver.font_registry.families()
        except (AttributeError, RuntimeError) as e:
            logger.debug(f"No system font list: {e}")
            families = []
        for family in families:
            if family.casefold() not in known:
                options.append((family, family))
                known.add(family.casefold())
        return sorted(options, key=lambda option: option[0].casefold())

    @staticmethod
    def _fill_font_combo(combo: QComboBox, options: List[Tuple[str, str]]):
        for display, value in options:
            combo.addItem(display, value)

    @staticmethod
    def _select_font(combo: QComboBox, value: str):
        for index in range(combo.count()):
            if str(combo.itemData(index)).casefold() == (value or "").casefold():
                combo.setCurrentIndex(index)
                return
        combo.addItem(value, value)
        combo.setCurrentIndex(combo.count() - 1)

    # ========== FIELDS ==========

    def load_fields_from_theme(self, theme: ThemeData):
        self._loading = True
        try:
            for field_name, edit in self._color_edits.items():
                edit.setText(getattr(theme, field_name))
            self._select_font(self.time_font_combo, theme.time_font_family)
            self._select_font(self.ui_font_combo, theme.ui_font_family)
        finally:
            self._loading = False
        self.paint_all_swatches()

    def update_theme_from_fields(self, *args):
        if self._loading:
            return

        values = {field_name: edit.text().strip()
                  for field_name, edit in self._color_edits.items()}
        self._current = ThemeData(
            name=self._current.name,
            time_font_family=self.time_font_combo.currentData() or "",
            ui_font_family=self.ui_font_combo.currentData() or "",
            **values
        )
        self.apply_and_refresh()

    def set_theme(self, theme: ThemeData):
        self._current = theme
        self.load_fields_from_theme(theme)
        self.apply_and_refresh()

    def apply_and_refresh(self):
        self.resolver.apply(self._current)
        self.paint_all_swatches()

    def paint_all_swatches(self):
        for field_name, swatch in self._swatches.items():
            try:
                color = self.resolver.resolve_color(self._color_edits[field_name].text())
            except InvalidColorError:
                continue
            swatch.setStyleSheet(f"background: {color.name(QColor.NameFormat.HexArgb)};")

    def pick_color(self, field_name: str):
        edit = self._color_edits[field_name]
        try:
            initial = self.resolver.resolve_color(edit.text())
        except InvalidColorError:
            initial = QColor("black")
        color = QColorDialog.getColor(initial, self, JSON_KEYS[field_name],
                                      QColorDialog.ShowAlphaChannel)
        if color.isValid():
            edit.setText(color.name(QColor.NameFormat.HexArgb).upper())

    # ========== LOAD / SAVE ==========

    def load_theme(self):
        path, _ = QFileDialog.getOpenFileName(self, "Load Theme", str(self.theme_repo.theme_dir),
                                              FILE_DIALOG_FILTER)
        if not path:
            return
        try:
            theme = self.theme_repo.load(path)
        except ClockBoardError as e:
            QMessageBox.critical(self, "Error", f"Failed to load theme:\n\n{e}")
            return

        self.set_theme(theme)
        if self.settings_repo:
            self.settings_repo.set_last_theme_file(path)

    def save_theme(self):
        default_path = str(self.theme_repo.path_for(self._current.name))
        path, _ = QFileDialog.getSaveFileName(self, "Save Theme", default_path, FILE_DIALOG_FILTER)
        if not path:
            return
        try:
            self.theme_repo.save(self._current, path)
        except ClockBoardError as e:
            QMessageBox.critical(self, "Error", f"Failed to save theme:\n\n{e}")
            return

        if self.settings_repo:
            self.settings_repo.set_last_theme_file(path)
