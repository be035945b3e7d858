from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPixmap
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout

from homeguard.domain.models import CameraImage
from homeguard.services.security_service import SecurityService
from homeguard.ui.adapters.status_rows import verdict_text
from homeguard.ui.theme import COLOR_CRIT, COLOR_OK, COLOR_TEXT_MUTED
from simulator.sensors.camera import CameraModel


class ImagePanel(QFrame):
    """
    Camera preview with manual refresh and scan actions.

    "Refresh camera" grabs a new frame from the simulated camera,
    "Scan picture" runs it through the service's classifier.
    """

    def __init__(self, service: SecurityService, camera: CameraModel, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("Card")
        self._service = service
        self._camera = camera
        self._image: Optional[CameraImage] = None

        title = QLabel(f"Camera Feed ({camera.name})")
        title.setStyleSheet("font-size: 14px; font-weight: 700;")

        self.preview = QLabel("No image")
        self.preview.setAlignment(Qt.AlignCenter)
        self.preview.setMinimumSize(camera.width, camera.height)

        self.verdict = QLabel()

        self.refresh_btn = QPushButton("Refresh camera")
        self.scan_btn = QPushButton("Scan picture")
        self.scan_btn.setEnabled(False)
        self.refresh_btn.clicked.connect(self._on_refresh)
        self.scan_btn.clicked.connect(self._on_scan)

        buttons = QHBoxLayout()
        buttons.addWidget(self.refresh_btn)
        buttons.addWidget(self.scan_btn)
        buttons.addStretch(1)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)
        layout.addWidget(title)
        layout.addWidget(self.preview, stretch=1)
        layout.addWidget(self.verdict)
        layout.addLayout(buttons)

        self.set_verdict(service.get_last_threat_verdict())

    def set_verdict(self, verdict: Optional[bool]) -> None:
        if verdict is None:
            color = COLOR_TEXT_MUTED
        else:
            color = COLOR_CRIT if verdict else COLOR_OK
        self.verdict.setStyleSheet(f"color: {color}; font-weight: 600;")
        self.verdict.setText(verdict_text(verdict))

    def _on_refresh(self) -> None:
        self._image = self._camera.capture()
        img = self._image
        qimg = QImage(img.data, img.width, img.height, img.width, QImage.Format_Grayscale8)
        self.preview.setPixmap(QPixmap.fromImage(qimg))
        self.scan_btn.setEnabled(True)

    def _on_scan(self) -> None:
        if self._image is None:
            return
        self._service.process_image(self._image)
