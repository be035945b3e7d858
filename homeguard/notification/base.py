from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol


@dataclass(frozen=True)
class NotificationEvent:
    """
    Outbound message handed to the notification layer.

    A `NotificationEvent` says *what should be communicated* (an alarm status
    change, a camera verdict, an arming change), not *how* it is delivered.

    Parameters
    ----------
    type
        Event type identifier (e.g., "alarm_status", "threat_verdict",
        "arming_status").
    payload
        JSON-serializable body delivered by the notifier.
    severity
        Optional severity label ("INFO", "WARNING", "CRITICAL").
    source
        Optional source identifier (e.g., controller or camera name).
    ts
        Optional ISO-8601 timestamp of the underlying change.
    """

    type: str
    payload: Dict[str, Any]
    severity: Optional[str] = None
    source: Optional[str] = None
    ts: Optional[str] = None


class Notifier(Protocol):
    """
    Protocol interface for notification delivery.

    Any object with a matching ``notify(event)`` method can be plugged into
    `NotificationWorkerThread`; implementations raise on delivery failure so
    the worker can retry.
    """

    def notify(self, event: NotificationEvent) -> None:
        ...
