from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Deque, List, Optional

from homeguard.domain.events import StatusEvent, StatusEventKind
from homeguard.domain.models import AlarmStatus, ArmingStatus, Sensor


@dataclass
class StatusHistory:
    """
    Status listener that records every notification as a `StatusEvent`.

    The history backs the event log in the UI and the totals section of
    webhook payloads.

    Notes
    -----
    - Thread-safe: all access is guarded by a single lock.
    - Bounded: once ``max_events`` is reached the oldest events are dropped.
    - ``events`` returns a copy so callers can iterate while the service keeps
      notifying.

    Parameters
    ----------
    max_events
        Maximum number of events kept.
    clock
        Timestamp source (overridable for tests).
    """

    max_events: int = 500
    clock: Callable[[], datetime] = datetime.now

    _events: Deque[StatusEvent] = field(init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self._events = deque(maxlen=self.max_events)

    # --- StatusListener callbacks ---
    def alarm_status_changed(self, status: AlarmStatus) -> None:
        self._add(StatusEventKind.ALARM_STATUS, status.value, f"Alarm status is now {status.value}")

    def sensor_status_changed(self, sensor: Sensor, active: bool) -> None:
        value = "ACTIVE" if active else "INACTIVE"
        self._add(
            StatusEventKind.SENSOR_STATUS,
            value,
            f"{sensor.sensor_type.value.title()} sensor '{sensor.name}' is {value.lower()}",
            source=sensor.name,
        )

    def threat_detected(self, detected: bool) -> None:
        value = "THREAT" if detected else "CLEAR"
        message = "Camera shows a threat" if detected else "Camera shows no threat"
        self._add(StatusEventKind.THREAT_VERDICT, value, message)

    def arming_status_changed(self, status: ArmingStatus) -> None:
        self._add(StatusEventKind.ARMING_STATUS, status.value, f"System set to {status.value}")

    # --- Query API ---
    @property
    def events(self) -> List[StatusEvent]:
        """
        Snapshot copy of recorded events, oldest first.
        """
        with self._lock:
            return list(self._events)

    def latest(self, kind: StatusEventKind) -> Optional[StatusEvent]:
        """
        Return the most recent event of ``kind``, if any.
        """
        with self._lock:
            for ev in reversed(self._events):
                if ev.kind is kind:
                    return ev
        return None

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def _add(self, kind: StatusEventKind, value: str, message: str, source: Optional[str] = None) -> None:
        ev = StatusEvent(kind=kind, timestamp=self.clock(), value=value, message=message, source=source)
        with self._lock:
            self._events.append(ev)
