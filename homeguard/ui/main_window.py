from __future__ import annotations

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QHBoxLayout, QMainWindow, QPushButton, QSplitter, QVBoxLayout, QWidget

from homeguard.bootstrap import AppWiring
from homeguard.domain.models import AlarmStatus, ArmingStatus, Sensor
from homeguard.ui.adapters.status_rows import event_rows
from homeguard.ui.widgets.control_panel import ControlPanel
from homeguard.ui.widgets.event_log import EventLog
from homeguard.ui.widgets.image_panel import ImagePanel
from homeguard.ui.widgets.sensor_panel import SensorPanel
from homeguard.ui.widgets.status_indicator import StatusIndicator


class _WindowListener:
    """Forwards service notifications to the window widgets."""

    def __init__(self, window: "MainWindow") -> None:
        self._window = window

    def alarm_status_changed(self, status: AlarmStatus) -> None:
        self._window.status.set_status(status)
        self._window.refresh_log()

    def sensor_status_changed(self, sensor: Sensor, active: bool) -> None:
        self._window.sensor_panel.refresh()
        self._window.refresh_log()

    def threat_detected(self, detected: bool) -> None:
        self._window.image_panel.set_verdict(detected)
        self._window.refresh_log()

    def arming_status_changed(self, status: ArmingStatus) -> None:
        self._window.control_panel.set_arming(status)
        self._window.refresh_log()


class MainWindow(QMainWindow):
    """
    Main security window.
    - Top: alarm banner + simulation toggle
    - Middle: arming controls, camera feed
    - Bottom: sensor table + event log

    All service calls, including simulator steps driven by the timer,
    run on the UI thread.
    """

    def __init__(self, wiring: AppWiring) -> None:
        super().__init__()
        self.setWindowTitle("Home Security")
        self.resize(1200, 820)

        self.wiring = wiring
        service = wiring.service

        root = QWidget()
        self.setCentralWidget(root)
        layout = QVBoxLayout(root)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        # Top bar
        top = QHBoxLayout()
        self.status = StatusIndicator()
        self.sim_btn = QPushButton("Simulate")
        self.sim_btn.setCheckable(True)
        self.sim_btn.toggled.connect(self._on_sim_toggled)
        top.addWidget(self.status)
        top.addStretch(1)
        top.addWidget(self.sim_btn)
        layout.addLayout(top)

        # Middle: controls + camera
        self.control_panel = ControlPanel(service)
        self.image_panel = ImagePanel(service, wiring.camera)
        middle = QVBoxLayout()
        middle.addWidget(self.control_panel)
        middle.addWidget(self.image_panel, stretch=1)
        layout.addLayout(middle, stretch=3)

        # Bottom: tables (splitter)
        bottom_splitter = QSplitter()
        bottom_splitter.setChildrenCollapsible(False)

        self.sensor_panel = SensorPanel(service)
        self.event_log = EventLog()
        self.event_log.clear_btn.clicked.connect(self._clear_log)

        bottom_splitter.addWidget(self.sensor_panel)
        bottom_splitter.addWidget(self.event_log)
        bottom_splitter.setStretchFactor(0, 2)
        bottom_splitter.setStretchFactor(1, 3)
        layout.addWidget(bottom_splitter, stretch=2)

        self.status.set_status(service.get_alarm_status())
        self.refresh_log()

        self._listener = _WindowListener(self)
        service.add_listener(self._listener)

        # Simulation timer
        self.timer = QTimer(self)
        self.timer.setInterval(wiring.config.simulator.tick_ms)
        self.timer.timeout.connect(lambda: self.wiring.simulator.step())

    def refresh_log(self) -> None:
        self.event_log.set_rows(event_rows(self.wiring.history.events))

    def _clear_log(self) -> None:
        self.wiring.history.clear()
        self.refresh_log()

    def _on_sim_toggled(self, checked: bool) -> None:
        if checked:
            self.timer.start()
        else:
            self.timer.stop()

    def closeEvent(self, event) -> None:
        self.timer.stop()
        self.wiring.service.remove_listener(self._listener)
        super().closeEvent(event)
