"""
Domain models and enums.

This module defines the core domain-level types used across the system:
- Alarm and arming statuses (the headline state of the controller)
- Sensor types and the Sensor entity
- CameraImage, the opaque frame handed to the image classifier

Sensors are mutable (their ``active`` flag changes over time) but their
identity is the ``(name, sensor_type)`` pair, so they can be kept in sets and
matched across reconstruction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Tuple


class AlarmStatus(str, Enum):
    """
    Headline security state of the controller.

    Members
    -------
    NO_ALARM : str
        Nothing suspicious is going on.
    PENDING_ALARM : str
        A sensor tripped while armed; the system suspects an intrusion.
    ALARM : str
        The alarm is fully triggered.
    """

    NO_ALARM = "NO_ALARM"
    PENDING_ALARM = "PENDING_ALARM"
    ALARM = "ALARM"


class ArmingStatus(str, Enum):
    """
    Whether sensor activations are allowed to escalate the alarm.

    Members
    -------
    DISARMED : str
        Sensor triggers never escalate the alarm.
    ARMED_HOME : str
        Armed while occupants are at home; the camera check is active.
    ARMED_AWAY : str
        Armed while the house is empty.
    """

    DISARMED = "DISARMED"
    ARMED_HOME = "ARMED_HOME"
    ARMED_AWAY = "ARMED_AWAY"

    @property
    def is_armed(self) -> bool:
        return self is not ArmingStatus.DISARMED


class SensorType(str, Enum):
    """Kind of physical detector. Descriptive only."""

    DOOR = "DOOR"
    WINDOW = "WINDOW"
    MOTION = "MOTION"


@dataclass(unsafe_hash=True)
class Sensor:
    """
    Binary detector registered with the controller.

    Parameters
    ----------
    name
        Human-readable sensor name (e.g., "Front Door").
    sensor_type
        Detector category.
    active
        Whether the sensor is currently signaling. Excluded from equality and
        hashing: two sensors with the same name and type are the same sensor.

    Notes
    -----
    Only the security service changes ``active``; the name and type must not be
    mutated once the sensor is stored in a set.
    """

    name: str
    sensor_type: SensorType
    active: bool = field(default=False, compare=False)

    @property
    def key(self) -> Tuple[str, SensorType]:
        """Identity pair used for set membership and repository lookups."""
        return (self.name, self.sensor_type)


@dataclass(frozen=True)
class CameraImage:
    """
    Single frame captured by a camera.

    The security service never inspects the frame; it is passed through to the
    image classifier as-is.

    Parameters
    ----------
    source
        Camera name.
    width, height
        Frame dimensions in pixels.
    data
        Raw pixel payload (format defined by the producing camera).
    captured_at
        Capture timestamp.
    """

    source: str
    width: int
    height: int
    data: bytes
    captured_at: datetime
