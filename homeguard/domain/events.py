"""
Status event domain models.

A `StatusEvent` represents *what happened* at a specific time (alarm status
changed, sensor toggled, camera verdict received, arming changed), while the
repository holds *what is currently true*.

Events are typically used for:
- the event log shown in the UI
- webhook notification payloads
- post-analysis of a simulation run
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class StatusEventKind(str, Enum):
    """
    Category of a status event.

    Members
    -------
    ALARM_STATUS : str
        The headline alarm status changed.
    ARMING_STATUS : str
        The arming status was set.
    SENSOR_STATUS : str
        A sensor's activation flag was written.
    THREAT_VERDICT : str
        The image classifier returned a verdict.
    """

    ALARM_STATUS = "ALARM_STATUS"
    ARMING_STATUS = "ARMING_STATUS"
    SENSOR_STATUS = "SENSOR_STATUS"
    THREAT_VERDICT = "THREAT_VERDICT"


@dataclass(frozen=True)
class StatusEvent:
    """
    Immutable record of one listener notification.

    Parameters
    ----------
    kind
        Event category.
    timestamp
        When the notification was received.
    value
        New value as text (enum value, ``"ACTIVE"``/``"INACTIVE"``, or
        ``"THREAT"``/``"CLEAR"``).
    message
        Human-readable description (used in UI/logs).
    source
        Optional originating sensor name for SENSOR_STATUS events.
    """

    kind: StatusEventKind
    timestamp: datetime
    value: str
    message: str
    source: Optional[str] = None
