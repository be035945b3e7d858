from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Union

from homeguard.domain.models import CameraImage, Sensor


@dataclass(frozen=True)
class SensorToggle:
    """
    Request to change a sensor's activation flag.

    Parameters
    ----------
    sensor
        Target sensor (matched by name and type).
    active
        Desired activation value.
    timestamp
        Simulation time of the toggle.
    """

    sensor: Sensor
    active: bool
    timestamp: datetime


SimMessage = Union[SensorToggle, CameraImage]
