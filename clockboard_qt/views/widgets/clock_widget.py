# clockboard_qt/views/widgets/clock_widget.py
"""
Clock Widget - one card on the board
Shows location, time, date, UTC offset, DST state and labels
Buttons for move up/down, edit, remove; drag a card onto another to reorder
"""

from datetime import datetime, timezone
from typing import Optional
import logging

from PySide6.QtWidgets import (
    QFrame, QVBoxLayout, QHBoxLayout, QLabel, QPushButton
)
from PySide6.QtCore import Qt, Signal, QMimeData, QPoint
from PySide6.QtGui import QDrag, QMouseEvent, QDragEnterEvent, QDropEvent

from ...models.clock_entity import ClockEntity
from ...services.theme_resolver import ResolvedTheme
from ...utils.constants import CLOCK_MIME_TYPE, CLOCK_WIDGET_HEIGHT, CLOCK_WIDGET_WIDTH

# Logger
logger = logging.getLogger(__name__)


class ClockWidget(QFrame):
    """
    Card rendering a ClockEntity

    The widget never mutates the entity; every user action is emitted as a
    signal carrying the clock id and handled by the board.
    """

    # Signals
    remove_requested = Signal(str)  # clock_id
    move_up_requested = Signal(str)  # clock_id
    move_down_requested = Signal(str)  # clock_id
    edit_requested = Signal(str)  # clock_id
    dropped_on = Signal(str, str)  # source clock_id, target clock_id

    def __init__(self, entity: ClockEntity, parent=None):
        super().__init__(parent)
        self.entity = entity
        self.drag_start_pos: Optional[QPoint] = None

        self.setObjectName("ClockCard")
        self.setFixedSize(CLOCK_WIDGET_WIDTH, CLOCK_WIDGET_HEIGHT)
        self.setAcceptDrops(True)

        self.setup_ui()
        self.refresh_labels()
        self.update_time()

    @property
    def clock_id(self) -> str:
        return self.entity.clock_id

    def setup_ui(self):
        """Setup UI components"""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(3)

        # Header: location + buttons
        header = QHBoxLayout()
        self.location_label = QLabel()
        self.location_label.setObjectName("LocationLabel")
        header.addWidget(self.location_label, 1)

        for text, tip, signal in (
                ("▲", "Move up", self.move_up_requested),
                ("▼", "Move down", self.move_down_requested),
                ("✎", "Edit", self.edit_requested),
                ("✕", "Remove", self.remove_requested),
        ):
            button = QPushButton(text)
            button.setToolTip(tip)
            button.setFixedWidth(28)
            button.clicked.connect(lambda checked=False, s=signal: s.emit(self.clock_id))
            header.addWidget(button)
        layout.addLayout(header)

        # Time
        self.time_label = QLabel()
        self.time_label.setObjectName("TimeLabel")
        self.time_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.time_label, 1)

        # Info row: date | UTC offset | DST
        info = QHBoxLayout()
        self.date_label = QLabel()
        self.utc_label = QLabel()
        self.dst_label = QLabel()
        for label in (self.date_label, self.utc_label, self.dst_label):
            label.setObjectName("InfoLabel")
            label.setAlignment(Qt.AlignCenter)
            info.addWidget(label)
        layout.addLayout(info)

        # Labels
        self.labels_layout = QHBoxLayout()
        self.labels_layout.setSpacing(2)
        layout.addLayout(self.labels_layout)

    # ========== CONTENT ==========

    def update_time(self, now_utc: Optional[datetime] = None):
        """Recompute the display strings; called once per tick"""
        display = self.entity.compute_display(now_utc or datetime.now(timezone.utc))
        self.time_label.setText(display.time_text)
        self.date_label.setText(display.date_text)
        self.utc_label.setText(display.utc_offset_label)
        self.dst_label.setText(display.dst_label)

    def refresh_labels(self):
        """Rebuild location and label chips after an edit"""
        self.location_label.setText(self.entity.location)
        self.setToolTip(self.entity.time_zone_id)

        while self.labels_layout.count():
            item = self.labels_layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()

        for text in self.entity.display_labels:
            chip = QLabel(text)
            chip.setObjectName("TagLabel")
            self.labels_layout.addWidget(chip)
        self.labels_layout.addStretch(1)

    def apply_theme(self, resources: ResolvedTheme):
        """Fonts are set directly; colors come from the window stylesheet"""
        self.time_label.setFont(resources.time_font.to_qfont(36))
        ui_font = resources.ui_font.to_qfont(10)
        for label in (self.location_label, self.date_label, self.utc_label, self.dst_label):
            label.setFont(ui_font)

    # ========== DRAG & DROP ==========

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.LeftButton:
            self.drag_start_pos = event.position().toPoint()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        if not (event.buttons() & Qt.LeftButton) or self.drag_start_pos is None:
            return
        if (event.position().toPoint() - self.drag_start_pos).manhattanLength() < 10:
            return

        mime = QMimeData()
        mime.setData(CLOCK_MIME_TYPE, self.clock_id.encode("utf-8"))
        drag = QDrag(self)
        drag.setMimeData(mime)
        drag.setPixmap(self.grab())
        drag.setHotSpot(self.drag_start_pos)
        self.drag_start_pos = None
        drag.exec(Qt.MoveAction)

    def mouseReleaseEvent(self, event: QMouseEvent):
        self.drag_start_pos = None
        super().mouseReleaseEvent(event)

    def dragEnterEvent(self, event: QDragEnterEvent):
        if event.mimeData().hasFormat(CLOCK_MIME_TYPE):
            self._set_drop_highlight(True)
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event):
        self._set_drop_highlight(False)

    def dropEvent(self, event: QDropEvent):
        self._set_drop_highlight(False)
        if not event.mimeData().hasFormat(CLOCK_MIME_TYPE):
            event.ignore()
            return

        source_id = bytes(event.mimeData().data(CLOCK_MIME_TYPE)).decode("utf-8")
        event.acceptProposedAction()
        if source_id != self.clock_id:
            self.dropped_on.emit(source_id, self.clock_id)

    def _set_drop_highlight(self, on: bool):
        self.setProperty("dropTarget", on)
        self.style().unpolish(self)
        self.style().polish(self)
