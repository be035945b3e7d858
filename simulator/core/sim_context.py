from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import FrozenSet

from homeguard.domain.models import ArmingStatus, Sensor


@dataclass(frozen=True)
class SimContext:
    """
    Immutable context passed into each model tick.

    The engine builds one `SimContext` per simulation step from the security
    service's read API, so models never talk to the service directly.

    Parameters
    ----------
    now
        Current simulation timestamp for this tick.
    sensors
        Snapshot of the registered sensors (with their current flags).
    arming_status
        Arming status at the start of the tick.
    """

    now: datetime
    sensors: FrozenSet[Sensor]
    arming_status: ArmingStatus
