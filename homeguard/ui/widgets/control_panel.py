from __future__ import annotations

from typing import Dict

from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout

from homeguard.domain.models import ArmingStatus
from homeguard.services.security_service import SecurityService
from homeguard.ui.adapters.status_rows import arming_label


class ControlPanel(QFrame):
    """
    One button per arming status; the current status is shown as checked.
    """

    def __init__(self, service: SecurityService, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("Card")
        self._service = service

        title = QLabel("System Control")
        title.setStyleSheet("font-size: 14px; font-weight: 700;")

        self._buttons: Dict[ArmingStatus, QPushButton] = {}
        row = QHBoxLayout()
        for status in ArmingStatus:
            btn = QPushButton(arming_label(status))
            btn.setCheckable(True)
            btn.clicked.connect(lambda _checked=False, s=status: self._service.set_arming_status(s))
            self._buttons[status] = btn
            row.addWidget(btn)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)
        layout.addWidget(title)
        layout.addLayout(row)

        self.set_arming(service.get_arming_status())

    def set_arming(self, status: ArmingStatus) -> None:
        for s, btn in self._buttons.items():
            btn.setChecked(s is status)
