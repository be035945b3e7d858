"""
Unit tests for homeguard.ui.adapters.status_rows.

These helpers turn domain objects into plain table rows and labels, so they
are tested without a Qt application.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from homeguard.domain.events import StatusEvent, StatusEventKind
from homeguard.domain.models import AlarmStatus, ArmingStatus, Sensor, SensorType
from homeguard.ui.adapters.status_rows import alarm_level, arming_label, event_rows, sensor_rows, verdict_text


def test_alarm_level_mapping() -> None:
    assert alarm_level(AlarmStatus.NO_ALARM)[0] == "OK"
    assert alarm_level(AlarmStatus.PENDING_ALARM)[0] == "WARNING"
    assert alarm_level(AlarmStatus.ALARM)[0] == "CRITICAL"


def test_labels() -> None:
    assert arming_label(ArmingStatus.ARMED_HOME) == "Armed - At Home"
    assert verdict_text(None) == "No picture scanned yet"
    assert verdict_text(True) != verdict_text(False)


def test_sensor_rows_sorted_by_name() -> None:
    rows = sensor_rows(
        [
            Sensor(name="Window", sensor_type=SensorType.WINDOW, active=True),
            Sensor(name="Door", sensor_type=SensorType.DOOR),
        ]
    )

    assert rows == [("Door", "Door", "Inactive"), ("Window", "Window", "Active")]


def test_event_rows_newest_first_and_limited() -> None:
    t0 = datetime(2026, 1, 1, 7, 0, 0)
    events = [
        StatusEvent(
            kind=StatusEventKind.ALARM_STATUS,
            timestamp=t0 + timedelta(seconds=i),
            value=str(i),
            message=f"m{i}",
        )
        for i in range(5)
    ]

    rows = event_rows(events, limit=2)

    assert rows == [
        ("07:00:04", "ALARM_STATUS", "4", "m4"),
        ("07:00:03", "ALARM_STATUS", "3", "m3"),
    ]
