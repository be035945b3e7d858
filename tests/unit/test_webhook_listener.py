"""
Unit tests for homeguard.notification.webhook_listener.WebhookStatusListener.

The listener is wired to a fake worker, so no thread or HTTP call is
involved. We verify:
- which notifications become webhook events
- event type, severity, source and timestamp
- payload built from the live service state
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, cast

import pytest

from homeguard.core.state.memory_repository import InMemorySecurityRepository
from homeguard.domain.models import AlarmStatus, ArmingStatus, Sensor, SensorType
from homeguard.notification.base import NotificationEvent
from homeguard.notification.notification_thread import NotificationWorkerThread
from homeguard.notification.webhook_listener import WebhookStatusListener
from homeguard.services.security_service import SecurityService

TS = datetime(2026, 1, 1, 12, 30, 0)


@dataclass
class FakeWorker:
    """Records emitted notification events."""

    emitted: List[NotificationEvent] = field(default_factory=list)

    def emit(self, event: NotificationEvent) -> None:
        self.emitted.append(event)


@dataclass
class AlwaysThreat:
    def contains_threat(self, image: object, confidence_threshold: float) -> bool:
        return True


def _mk() -> tuple:
    service = SecurityService(repository=InMemorySecurityRepository(), classifier=AlwaysThreat())
    worker = FakeWorker()
    listener = WebhookStatusListener(
        reader=service,
        worker=cast(NotificationWorkerThread, worker),
        source="test-home",
        clock=lambda: TS,
    )
    service.add_listener(listener)
    return service, worker


@pytest.mark.parametrize(
    "status,severity",
    [
        (AlarmStatus.NO_ALARM, "INFO"),
        (AlarmStatus.PENDING_ALARM, "WARNING"),
        (AlarmStatus.ALARM, "CRITICAL"),
    ],
)
def test_alarm_status_severity(status: AlarmStatus, severity: str) -> None:
    worker = FakeWorker()
    listener = WebhookStatusListener(
        reader=SecurityService(repository=InMemorySecurityRepository(), classifier=AlwaysThreat()),
        worker=cast(NotificationWorkerThread, worker),
        clock=lambda: TS,
    )

    listener.alarm_status_changed(status)

    (ev,) = worker.emitted
    assert ev.type == "alarm_status"
    assert ev.severity == severity
    assert ev.source == "homeguard"
    assert ev.ts == "2026-01-01T12:30:00"
    assert ev.payload["event"]["value"] == status.value


def test_sensor_changes_are_not_forwarded() -> None:
    service, worker = _mk()
    service.add_sensor(Sensor(name="Door", sensor_type=SensorType.DOOR))

    service.change_sensor_activation_status(Sensor(name="Door", sensor_type=SensorType.DOOR), True)

    assert worker.emitted == []


def test_service_flow_emits_alarm_verdict_and_arming_events() -> None:
    service, worker = _mk()

    service.set_arming_status(ArmingStatus.ARMED_HOME)
    service.process_image(object())

    assert [(e.type, e.severity) for e in worker.emitted] == [
        ("arming_status", "INFO"),
        ("alarm_status", "CRITICAL"),
        ("threat_verdict", "WARNING"),
    ]
    alarm_event = worker.emitted[1]
    assert alarm_event.source == "test-home"
    assert alarm_event.payload["state"]["alarm_status"] == "ALARM"
    assert alarm_event.payload["state"]["arming_status"] == "ARMED_HOME"
    assert worker.emitted[2].payload["event"]["value"] == "THREAT"
