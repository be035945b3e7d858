from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
)

from homeguard.core.errors import InvalidOperationError
from homeguard.domain.models import Sensor, SensorType
from homeguard.services.security_service import SecurityService
from homeguard.ui.adapters.status_rows import sensor_rows
from homeguard.ui.theme import COLOR_CRIT, COLOR_OK


class SensorPanel(QFrame):
    """
    Sensor table with add / toggle / remove actions.
    """

    def __init__(self, service: SecurityService, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("Card")
        self._service = service
        self._sensors: List[Sensor] = []

        title = QLabel("Sensor Management")
        title.setStyleSheet("font-size: 14px; font-weight: 700;")

        self.table = QTableWidget(0, 3)
        self.table.setHorizontalHeaderLabels(["Sensor", "Type", "Status"])
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)

        self.toggle_btn = QPushButton("Toggle")
        self.remove_btn = QPushButton("Remove")
        self.toggle_btn.clicked.connect(self._on_toggle)
        self.remove_btn.clicked.connect(self._on_remove)

        actions = QHBoxLayout()
        actions.addStretch(1)
        actions.addWidget(self.toggle_btn)
        actions.addWidget(self.remove_btn)

        self.name_edit = QLineEdit()
        self.name_edit.setPlaceholderText("Sensor name")
        self.type_combo = QComboBox()
        self.type_combo.addItems([t.value for t in SensorType])
        self.add_btn = QPushButton("Add New Sensor")
        self.add_btn.clicked.connect(self._on_add)

        add_row = QHBoxLayout()
        add_row.addWidget(self.name_edit, 1)
        add_row.addWidget(self.type_combo)
        add_row.addWidget(self.add_btn)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)
        layout.addWidget(title)
        layout.addWidget(self.table)
        layout.addLayout(actions)
        layout.addLayout(add_row)

        self.refresh()

    def refresh(self) -> None:
        self._sensors = sorted(self._service.get_sensors(), key=lambda s: (s.name, s.sensor_type.value.title()))
        rows = sensor_rows(self._sensors)
        self.table.setRowCount(len(rows))
        for i, (name, typ, status) in enumerate(rows):
            self._item(i, 0, name)
            self._item(i, 1, typ)
            self._item(i, 2, status, status=True)
        self.table.resizeColumnsToContents()

    def _item(self, row: int, col: int, text: str, status: bool = False) -> None:
        item = QTableWidgetItem(text)
        item.setFlags(item.flags() & ~Qt.ItemIsEditable)
        if status:
            item.setTextAlignment(Qt.AlignCenter)
            item.setForeground(Qt.white)
            color = COLOR_CRIT if text == "Active" else COLOR_OK
            item.setBackground(QBrush(QColor(color)))
        self.table.setItem(row, col, item)

    def _selected(self) -> Optional[Sensor]:
        row = self.table.currentRow()
        if 0 <= row < len(self._sensors):
            return self._sensors[row]
        return None

    def _on_add(self) -> None:
        name = self.name_edit.text().strip()
        if not name:
            return
        sensor = Sensor(name=name, sensor_type=SensorType(self.type_combo.currentText()))
        try:
            self._service.add_sensor(sensor)
        except InvalidOperationError as e:
            QMessageBox.warning(self, "Cannot add sensor", str(e))
            return
        self.name_edit.clear()
        self.refresh()

    def _on_toggle(self) -> None:
        sensor = self._selected()
        if sensor is None:
            return
        self._service.change_sensor_activation_status(sensor, not sensor.active)
        self.refresh()

    def _on_remove(self) -> None:
        sensor = self._selected()
        if sensor is None:
            return
        try:
            self._service.remove_sensor(sensor)
        except InvalidOperationError as e:
            QMessageBox.warning(self, "Cannot remove sensor", str(e))
        self.refresh()
