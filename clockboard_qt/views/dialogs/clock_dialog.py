# clockboard_qt/views/dialogs/clock_dialog.py
"""
Dialog to add or edit a clock: time zone, location, comma separated labels
"""

from typing import List, Optional

from PySide6.QtWidgets import (
    QDialog, QDialogButtonBox, QFormLayout, QComboBox, QLineEdit, QVBoxLayout
)

from ...services.timezone_adapter import available_time_zones


def split_labels(text: str) -> List[str]:
    """'New York, NY , East' -> ['New York', 'NY', 'East']"""
    return [part.strip() for part in text.split(",")]


class ClockDialog(QDialog):
    """Time zone + labels picker"""

    def __init__(self, time_zone_id: Optional[str] = None, labels: Optional[List[str]] = None,
                 location: Optional[str] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Edit Clock" if time_zone_id else "Add Clock")
        self.setModal(True)
        self.resize(420, 160)

        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.time_zone_combo = QComboBox()
        self.time_zone_combo.setEditable(True)
        self.time_zone_combo.addItems(available_time_zones())
        if time_zone_id:
            index = self.time_zone_combo.findText(time_zone_id)
            if index < 0:
                self.time_zone_combo.addItem(time_zone_id)
                index = self.time_zone_combo.count() - 1
            self.time_zone_combo.setCurrentIndex(index)
        form.addRow("Time zone:", self.time_zone_combo)

        self.location_edit = QLineEdit(location or "")
        self.location_edit.setPlaceholderText("Defaults to the time zone name")
        # Edit keeps the location; only time zone and labels change
        self.location_edit.setEnabled(not time_zone_id)
        form.addRow("Location:", self.location_edit)

        self.labels_edit = QLineEdit(", ".join(labels or []))
        self.labels_edit.setPlaceholderText("Comma separated")
        form.addRow("Labels:", self.labels_edit)

        layout.addLayout(form)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    @property
    def time_zone_id(self) -> str:
        return self.time_zone_combo.currentText().strip()

    @property
    def location(self) -> str:
        return self.location_edit.text().strip() or self.time_zone_id

    @property
    def labels(self) -> List[str]:
        return split_labels(self.labels_edit.text())
