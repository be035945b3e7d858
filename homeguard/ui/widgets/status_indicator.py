from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel

from homeguard.domain.models import AlarmStatus
from homeguard.ui.adapters.status_rows import alarm_level
from homeguard.ui.theme import COLOR_TEXT_MUTED, LEVEL_COLORS


class StatusIndicator(QFrame):
    """
    Alarm banner: colored dot + status text.
    """

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("Card")

        self._dot = QLabel("●")
        self._text = QLabel()
        self._text.setStyleSheet(f"color: {COLOR_TEXT_MUTED}; font-size: 16px; font-weight: 700;")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 10, 12, 10)
        layout.addWidget(self._dot, 0, Qt.AlignVCenter)
        layout.addWidget(self._text, 0, Qt.AlignVCenter)
        layout.addStretch(1)

        self.set_status(AlarmStatus.NO_ALARM)

    def set_status(self, status: AlarmStatus) -> None:
        level, text = alarm_level(status)
        self._dot.setStyleSheet(f"color: {LEVEL_COLORS[level]}; font-size: 18px;")
        self._text.setText(f"System Status: {text}")
