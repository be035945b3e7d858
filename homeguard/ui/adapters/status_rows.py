from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from homeguard.domain.events import StatusEvent
from homeguard.domain.models import AlarmStatus, ArmingStatus, Sensor

SensorRow = Tuple[str, str, str]  # name, type, status
EventRow = Tuple[str, str, str, str]  # time, kind, value, message

_ALARM_LEVELS = {
    AlarmStatus.NO_ALARM: ("OK", "No alarm"),
    AlarmStatus.PENDING_ALARM: ("WARNING", "Alarm pending"),
    AlarmStatus.ALARM: ("CRITICAL", "ALARM"),
}

_ARMING_LABELS = {
    ArmingStatus.DISARMED: "Disarmed",
    ArmingStatus.ARMED_HOME: "Armed - At Home",
    ArmingStatus.ARMED_AWAY: "Armed - Away",
}


def alarm_level(status: AlarmStatus) -> Tuple[str, str]:
    """
    Map an alarm status to an indicator level and banner text.

    Returns
    -------
    tuple of (str, str)
        Level ('OK' | 'WARNING' | 'CRITICAL') and display text.
    """
    return _ALARM_LEVELS[status]


def arming_label(status: ArmingStatus) -> str:
    return _ARMING_LABELS[status]


def verdict_text(verdict: Optional[bool]) -> str:
    if verdict is None:
        return "No picture scanned yet"
    return "Threat detected in camera view" if verdict else "Camera shows no threat"


def sensor_rows(sensors: Iterable[Sensor]) -> List[SensorRow]:
    rows: List[SensorRow] = []
    for s in sensors:
        rows.append((s.name, s.sensor_type.value.title(), "Active" if s.active else "Inactive"))
    rows.sort(key=lambda r: (r[0], r[1]))
    return rows


def event_rows(events: List[StatusEvent], limit: int = 200) -> List[EventRow]:
    """
    Build log rows from status events, newest first.
    """
    rows: List[EventRow] = []
    for e in reversed(events[-limit:]):
        rows.append(
            (
                e.timestamp.strftime("%H:%M:%S"),
                e.kind.value,
                e.value,
                e.message,
            )
        )
    return rows
