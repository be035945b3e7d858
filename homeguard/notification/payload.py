from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Any, Dict, Optional, Protocol, Set

from homeguard.core.state.status_history import StatusHistory
from homeguard.domain.events import StatusEventKind
from homeguard.domain.models import AlarmStatus, ArmingStatus, Sensor


class StatusReader(Protocol):
    """Read side of the security service used to snapshot current state."""

    def get_alarm_status(self) -> AlarmStatus:
        ...

    def get_arming_status(self) -> ArmingStatus:
        ...

    def get_sensors(self) -> Set[Sensor]:
        ...


def _iso(ts: datetime) -> str:
    """
    Convert datetime to ISO-8601 string with second precision.
    """
    return ts.isoformat(timespec="seconds")


def build_status_webhook_payload(
    reader: StatusReader,
    event_type: str,
    value: str,
    ts: datetime,
    history: Optional[StatusHistory] = None,
) -> Dict[str, Any]:
    """
    Build a webhook payload for one status change plus a state snapshot.

    The payload includes:
    - "event": what changed (type, new value, timestamp)
    - "state": current alarm/arming status and sensor activity
    - "totals": counters computed from the status history, when available

    Parameters
    ----------
    reader
        Security service (or anything exposing its read API).
    event_type
        Notification type, e.g. "alarm_status".
    value
        New value as text.
    ts
        Timestamp of the change.
    history
        Optional status history used for the totals section.

    Returns
    -------
    dict
        Payload with keys "type", "event", "state" and (optionally) "totals".
    """
    sensors = sorted(reader.get_sensors(), key=lambda s: (s.name, s.sensor_type.value))
    active = [s for s in sensors if s.active]

    payload: Dict[str, Any] = {
        "type": event_type,
        "event": {
            "value": value,
            "timestamp": _iso(ts),
        },
        "state": {
            "alarm_status": reader.get_alarm_status().value,
            "arming_status": reader.get_arming_status().value,
            "sensors_total": len(sensors),
            "sensors_active": len(active),
            "active_sensors": [{"name": s.name, "type": s.sensor_type.value} for s in active],
        },
    }

    if history is not None:
        events = history.events
        by_kind = Counter(e.kind.value for e in events)
        alarms_raised = sum(
            1 for e in events if e.kind is StatusEventKind.ALARM_STATUS and e.value == AlarmStatus.ALARM.value
        )
        payload["totals"] = {
            "events_total": len(events),
            "event_counts_by_kind": {k: int(v) for k, v in by_kind.items()},
            "alarms_raised": alarms_raised,
        }

    return payload
