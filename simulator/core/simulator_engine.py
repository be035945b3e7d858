from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from homeguard.domain.models import CameraImage
from homeguard.services.security_service import SecurityService
from simulator.core.sim_context import SimContext
from simulator.domain.messages import SensorToggle, SimMessage
from simulator.sensors.base import SimModel

log = logging.getLogger(__name__)


@dataclass
class SimulatorEngine:
    """
    Drive simulated actors against the security service.

    Each :meth:`step` snapshots the service state into a `SimContext`, ticks
    every model, and forwards the emitted messages to the service:

    - `SensorToggle` -> ``change_sensor_activation_status``
    - `CameraImage`  -> ``process_image``

    Steps run in the caller's thread, so a UI timer or a plain loop can act as
    the single logical caller of the service.

    Parameters
    ----------
    service
        Security service receiving the simulated events.
    models
        Simulated actors ticked in order.
    """

    service: SecurityService
    models: List[SimModel]

    def step(self, now: Optional[datetime] = None) -> List[SimMessage]:
        """
        Run one simulation tick.

        Parameters
        ----------
        now
            Simulation timestamp. If None, uses local current time.

        Returns
        -------
        list of SimMessage
            Messages emitted (and dispatched) during this tick.
        """
        ts = now or datetime.now()
        ctx = SimContext(
            now=ts,
            sensors=frozenset(self.service.get_sensors()),
            arming_status=self.service.get_arming_status(),
        )

        out: List[SimMessage] = []
        for model in self.models:
            msgs = model.tick(ctx)
            for m in msgs:
                self._dispatch(m)
            out.extend(msgs)
        return out

    def _dispatch(self, msg: SimMessage) -> None:
        if isinstance(msg, SensorToggle):
            log.debug("Simulated %s -> %s", msg.sensor.name, "active" if msg.active else "inactive")
            if msg.active:
                self.service.change_sensor_activation_status(msg.sensor)
            else:
                self.service.change_sensor_activation_status(msg.sensor, False)
        elif isinstance(msg, CameraImage):
            self.service.process_image(msg)
        else:
            raise TypeError(f"unsupported simulator message: {type(msg).__name__}")
