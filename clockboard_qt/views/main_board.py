# clockboard_qt/views/main_board.py
"""
Main board window
Toolbar (add, load, save, theme, 12/24h) + grid of clock cards
One shared timer ticks every card once per second
"""

from datetime import datetime, timezone
from typing import Dict
import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QGridLayout, QScrollArea, QToolBar,
    QFileDialog, QMessageBox
)
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QGuiApplication

from ..models.clock_entity import ClockEntity
from ..repositories.clock_repository import ClockLoadResult
from ..repositories.settings_repository import WindowGeometry
from ..services.clock_collection import ChangeKind, ClockCollection, ClockCollectionEvent
from ..utils.constants import (
    APP_NAME,
    CLOCK_GRID_SPACING,
    CLOCK_WIDGET_WIDTH,
    FILE_DIALOG_FILTER,
    TICK_INTERVAL_MS,
)
from ..utils.errors import ClockBoardError
from .dialogs.clock_dialog import ClockDialog
from .dialogs.theme_editor_dialog import ThemeEditorDialog
from .widgets.clock_widget import ClockWidget

logger = logging.getLogger(__name__)


class MainBoard(QMainWindow):
    """
    Presentation layer over ClockCollection and ThemeResolver

    The board only subscribes to collection events and re-lays out the
    cards; all ordering logic lives in the collection.
    """

    def __init__(self, collection: ClockCollection, clock_repo, theme_repo,
                 settings_repo, resolver, parent=None):
        super().__init__(parent)
        self.collection = collection
        self.clock_repo = clock_repo
        self.theme_repo = theme_repo
        self.settings_repo = settings_repo
        self.resolver = resolver

        self.widgets: Dict[str, ClockWidget] = {}

        self.setWindowTitle(APP_NAME)
        self.setup_ui()
        self.restore_geometry()

        # Wire model -> view
        self.collection.changed.connect(self.on_collection_changed)
        self.resolver.theme_applied.connect(self.on_theme_applied)

        # Tick
        self.timer = QTimer(self)
        self.timer.timeout.connect(self.tick)
        self.timer.start(TICK_INTERVAL_MS)

        self.rebuild_cards()
        if self.resolver.resources is not None:
            self.on_theme_applied(self.resolver.resources)

    # ========== UI ==========

    def setup_ui(self):
        toolbar = QToolBar("Main")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        add_action = QAction("Add Clock", self)
        add_action.triggered.connect(self.add_clock)
        toolbar.addAction(add_action)

        load_action = QAction("Load Clocks…", self)
        load_action.triggered.connect(self.load_clocks)
        toolbar.addAction(load_action)

        save_action = QAction("Save Clocks…", self)
        save_action.triggered.connect(self.save_clocks)
        toolbar.addAction(save_action)

        toolbar.addSeparator()

        theme_action = QAction("Theme…", self)
        theme_action.triggered.connect(self.open_theme_editor)
        toolbar.addAction(theme_action)

        self.format_action = QAction("24-hour", self)
        self.format_action.setCheckable(True)
        self.format_action.setChecked(self.collection.global_format)
        self.format_action.toggled.connect(self.collection.set_global_format)
        toolbar.addAction(self.format_action)

        self.board = QWidget()
        self.board.setObjectName("ClockBoard")
        self.grid = QGridLayout(self.board)
        self.grid.setSpacing(CLOCK_GRID_SPACING)
        self.grid.setAlignment(Qt.AlignTop | Qt.AlignLeft)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.board)
        self.setCentralWidget(scroll)

    def restore_geometry(self):
        screen = QGuiApplication.primaryScreen()
        virtual = screen.virtualGeometry() if screen else None
        width = virtual.width() if virtual else 0
        height = virtual.height() if virtual else 0

        geometry = self.settings_repo.get_window_geometry(width, height)
        self.resize(int(geometry.width), int(geometry.height))
        self.move(int(geometry.left), int(geometry.top))

    def _columns(self) -> int:
        available = max(self.centralWidget().viewport().width(), CLOCK_WIDGET_WIDTH)
        return max(1, available // (CLOCK_WIDGET_WIDTH + CLOCK_GRID_SPACING))

    # ========== CARDS ==========

    def rebuild_cards(self):
        """Drop cards for removed clocks, create missing ones, re-lay out"""
        current_ids = set(self.collection.ids())
        for clock_id in list(self.widgets):
            if clock_id not in current_ids:
                widget = self.widgets.pop(clock_id)
                self.grid.removeWidget(widget)
                widget.deleteLater()

        for entity in self.collection:
            if entity.clock_id not in self.widgets:
                self.widgets[entity.clock_id] = self._create_card(entity)

        self.relayout()

    def _create_card(self, entity: ClockEntity) -> ClockWidget:
        widget = ClockWidget(entity, self.board)
        widget.remove_requested.connect(self.collection.remove)
        widget.move_up_requested.connect(self.collection.move_up)
        widget.move_down_requested.connect(self.collection.move_down)
        widget.edit_requested.connect(self.edit_clock)
        widget.dropped_on.connect(self.collection.move)
        if self.resolver.resources is not None:
            widget.apply_theme(self.resolver.resources)
        return widget

    def relayout(self):
        columns = self._columns()
        for widget in self.widgets.values():
            self.grid.removeWidget(widget)
        for index, clock_id in enumerate(self.collection.ids()):
            self.grid.addWidget(self.widgets[clock_id], index // columns, index % columns)

    def on_collection_changed(self, event: ClockCollectionEvent):
        if event.kind in (ChangeKind.ADDED, ChangeKind.REMOVED, ChangeKind.RESET):
            self.rebuild_cards()
        elif event.kind == ChangeKind.MOVED:
            self.relayout()
        elif event.kind == ChangeKind.EDITED:
            widget = self.widgets.get(event.clock_id)
            if widget:
                widget.refresh_labels()
                widget.update_time()
        elif event.kind == ChangeKind.FORMAT_CHANGED:
            self.format_action.blockSignals(True)
            self.format_action.setChecked(self.collection.global_format)
            self.format_action.blockSignals(False)
            self.tick()

    def tick(self):
        now = datetime.now(timezone.utc)
        for widget in self.widgets.values():
            widget.update_time(now)

    def on_theme_applied(self, resources):
        self.setStyleSheet(resources.stylesheet())
        for widget in self.widgets.values():
            widget.apply_theme(resources)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.relayout()

    # ========== ACTIONS ==========

    def add_clock(self):
        dialog = ClockDialog(parent=self)
        if not dialog.exec():
            return
        try:
            entity = ClockEntity.create(dialog.location, dialog.labels,
                                        dialog.time_zone_id, self.collection.global_format)
        except ClockBoardError as e:
            QMessageBox.warning(self, "Add Clock", str(e))
            return
        self.collection.add(entity)

    def edit_clock(self, clock_id: str):
        entity = self.collection.get(clock_id)
        dialog = ClockDialog(entity.time_zone_id, entity.labels, entity.location, parent=self)
        if not dialog.exec():
            return
        try:
            self.collection.edit(clock_id, dialog.time_zone_id, dialog.labels)
        except ClockBoardError as e:
            QMessageBox.warning(self, "Edit Clock", str(e))

    def save_clocks(self):
        path, _ = QFileDialog.getSaveFileName(self, "Save Clocks", "", FILE_DIALOG_FILTER)
        if not path:
            return
        try:
            self.clock_repo.save(self.collection, path)
        except ClockBoardError as e:
            QMessageBox.critical(self, "Error", f"Failed to save clocks:\n\n{e}")

    def load_clocks(self):
        path, _ = QFileDialog.getOpenFileName(self, "Load Clocks", "", FILE_DIALOG_FILTER)
        if not path:
            return
        try:
            result = self.clock_repo.load(path)
        except ClockBoardError as e:
            QMessageBox.critical(self, "Error", f"Failed to load clocks:\n\n{e}")
            return
        self.show_load_result(result)

    def show_load_result(self, result: ClockLoadResult):
        """Install loaded clocks and report skipped records"""
        self.collection.replace_all(result.entities, result.global_format)
        self.format_action.blockSignals(True)
        self.format_action.setChecked(result.global_format)
        self.format_action.blockSignals(False)

        if result.errors:
            details = "\n".join(str(error) for error in result.errors)
            QMessageBox.warning(self, "Load Clocks",
                                f"Some clocks could not be loaded:\n\n{details}")

    def open_theme_editor(self):
        ThemeEditorDialog(self.resolver, self.theme_repo, self.settings_repo, self).exec()

    # ========== SHUTDOWN ==========

    def closeEvent(self, event):
        self.settings_repo.save_window_geometry(WindowGeometry(
            width=self.width(),
            height=self.height(),
            top=self.y(),
            left=self.x()
        ))
        super().closeEvent(event)
