from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from homeguard.core.state.status_history import StatusHistory
from homeguard.domain.models import AlarmStatus, ArmingStatus, Sensor
from homeguard.notification.base import NotificationEvent
from homeguard.notification.notification_thread import NotificationWorkerThread
from homeguard.notification.payload import StatusReader, build_status_webhook_payload

_ALARM_SEVERITY = {
    AlarmStatus.NO_ALARM: "INFO",
    AlarmStatus.PENDING_ALARM: "WARNING",
    AlarmStatus.ALARM: "CRITICAL",
}


class WebhookStatusListener:
    """
    Status listener bridging service notifications to the webhook worker.

    Responsibilities
    ----------------
    - Turn alarm status changes, camera verdicts and arming changes into
      `NotificationEvent` objects with a state snapshot payload.
    - Hand them to `NotificationWorkerThread` (non-blocking).

    Sensor toggles are not forwarded; they are visible in the "state" section
    of the next payload.

    Parameters
    ----------
    reader
        Security service used to snapshot the current state.
    worker
        Notification worker performing the actual delivery.
    history
        Optional status history for payload totals.
    source
        Controller name reported in every event.
    clock
        Timestamp source (overridable for tests).
    """

    def __init__(
        self,
        reader: StatusReader,
        worker: NotificationWorkerThread,
        history: Optional[StatusHistory] = None,
        source: str = "homeguard",
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._reader = reader
        self._worker = worker
        self._history = history
        self._source = source
        self._clock = clock

    def alarm_status_changed(self, status: AlarmStatus) -> None:
        self._emit("alarm_status", status.value, _ALARM_SEVERITY[status])

    def sensor_status_changed(self, sensor: Sensor, active: bool) -> None:
        return None

    def threat_detected(self, detected: bool) -> None:
        self._emit("threat_verdict", "THREAT" if detected else "CLEAR", "WARNING" if detected else "INFO")

    def arming_status_changed(self, status: ArmingStatus) -> None:
        self._emit("arming_status", status.value, "INFO")

    def _emit(self, event_type: str, value: str, severity: str) -> None:
        ts = self._clock()
        payload = build_status_webhook_payload(self._reader, event_type, value, ts, self._history)
        self._worker.emit(
            NotificationEvent(
                type=event_type,
                payload=payload,
                severity=severity,
                source=self._source,
                ts=ts.isoformat(timespec="seconds"),
            )
        )
