from __future__ import annotations

from typing import List

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
)

from homeguard.domain.events import StatusEventKind
from homeguard.ui.adapters.status_rows import EventRow
from homeguard.ui.theme import COLOR_CRIT, COLOR_TEXT_MUTED

ALL_KINDS = "All"
_COLUMNS = ("Time", "Kind", "Value", "Message")
_HIGHLIGHT = {"ALARM", "THREAT"}


class EventLog(QFrame):
    """
    Newest-first log of status notifications, filterable by kind.

    Rows are kept so switching the filter re-renders without a round trip
    to the history.
    """

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("Card")
        self._rows: List[EventRow] = []

        heading = QLabel("Event Log")
        heading.setStyleSheet("font-size: 14px; font-weight: 700;")

        self.kind_filter = QComboBox()
        self.kind_filter.addItem(ALL_KINDS)
        for kind in StatusEventKind:
            self.kind_filter.addItem(kind.value)
        self.kind_filter.currentTextChanged.connect(lambda _text: self._render())

        self.count_label = QLabel()
        self.count_label.setStyleSheet(f"color: {COLOR_TEXT_MUTED};")

        bar = QHBoxLayout()
        bar.addWidget(heading)
        bar.addWidget(self.count_label)
        bar.addStretch(1)
        bar.addWidget(self.kind_filter)
        self.clear_btn = QPushButton("Clear")
        bar.addWidget(self.clear_btn)

        self.table = QTableWidget(0, len(_COLUMNS))
        self.table.setHorizontalHeaderLabels(list(_COLUMNS))
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)

        box = QVBoxLayout(self)
        box.setContentsMargins(12, 12, 12, 12)
        box.setSpacing(8)
        box.addLayout(bar)
        box.addWidget(self.table)

    def set_rows(self, rows: List[EventRow]) -> None:
        self._rows = list(rows)
        self._render()

    def _visible_rows(self) -> List[EventRow]:
        kind = self.kind_filter.currentText()
        if kind == ALL_KINDS:
            return self._rows
        return [r for r in self._rows if r[1] == kind]

    def _render(self) -> None:
        rows = self._visible_rows()
        self.count_label.setText(f"({len(rows)})")
        self.table.setRowCount(len(rows))
        for r, row in enumerate(rows):
            alert = row[2] in _HIGHLIGHT
            for c, text in enumerate(row):
                cell = QTableWidgetItem(text)
                if c < 3:
                    cell.setTextAlignment(Qt.AlignCenter)
                if alert:
                    cell.setForeground(QColor(COLOR_CRIT))
                self.table.setItem(r, c, cell)
        self.table.resizeColumnsToContents()
