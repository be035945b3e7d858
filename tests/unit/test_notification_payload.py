"""
Unit tests for homeguard.notification.payload.

These tests validate that build_status_webhook_payload:
- produces the expected payload structure (type/event/state)
- formats timestamps with second precision
- lists active sensors in name order
- adds history-based totals only when a history is given

No I/O is performed; tests use an in-memory fake reader.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Set

from homeguard.core.state.status_history import StatusHistory
from homeguard.domain.models import AlarmStatus, ArmingStatus, Sensor, SensorType
from homeguard.notification.payload import build_status_webhook_payload


@dataclass
class FakeReader:
    """Read API double returning fixed state."""

    alarm: AlarmStatus = AlarmStatus.NO_ALARM
    arming: ArmingStatus = ArmingStatus.DISARMED
    sensors: Set[Sensor] = field(default_factory=set)

    def get_alarm_status(self) -> AlarmStatus:
        return self.alarm

    def get_arming_status(self) -> ArmingStatus:
        return self.arming

    def get_sensors(self) -> Set[Sensor]:
        return set(self.sensors)


def test_payload_structure_and_state_snapshot() -> None:
    reader = FakeReader(
        alarm=AlarmStatus.PENDING_ALARM,
        arming=ArmingStatus.ARMED_AWAY,
        sensors={
            Sensor(name="Window", sensor_type=SensorType.WINDOW, active=True),
            Sensor(name="Door", sensor_type=SensorType.DOOR, active=True),
            Sensor(name="Hall", sensor_type=SensorType.MOTION),
        },
    )
    ts = datetime(2026, 1, 1, 10, 0, 5, 123456)

    payload = build_status_webhook_payload(reader, "alarm_status", "PENDING_ALARM", ts)

    assert payload["type"] == "alarm_status"
    assert payload["event"] == {"value": "PENDING_ALARM", "timestamp": "2026-01-01T10:00:05"}
    assert payload["state"] == {
        "alarm_status": "PENDING_ALARM",
        "arming_status": "ARMED_AWAY",
        "sensors_total": 3,
        "sensors_active": 2,
        "active_sensors": [
            {"name": "Door", "type": "DOOR"},
            {"name": "Window", "type": "WINDOW"},
        ],
    }
    assert "totals" not in payload


def test_payload_totals_from_history() -> None:
    history = StatusHistory(clock=lambda: datetime(2026, 1, 1, 10, 0, 0))
    history.alarm_status_changed(AlarmStatus.PENDING_ALARM)
    history.alarm_status_changed(AlarmStatus.ALARM)
    history.threat_detected(True)
    history.arming_status_changed(ArmingStatus.DISARMED)
    history.alarm_status_changed(AlarmStatus.NO_ALARM)

    payload = build_status_webhook_payload(
        FakeReader(), "arming_status", "DISARMED", datetime(2026, 1, 1, 10, 0, 1), history
    )

    assert payload["totals"] == {
        "events_total": 5,
        "event_counts_by_kind": {"ALARM_STATUS": 3, "THREAT_VERDICT": 1, "ARMING_STATUS": 1},
        "alarms_raised": 1,
    }
