from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from simulator.core.sim_context import SimContext
from simulator.domain.messages import SensorToggle, SimMessage
from simulator.sensors.base import SimModel


@dataclass
class RandomSensorTrigger(SimModel):
    """
    Randomly trips and releases registered sensors.

    On each emitting tick every sensor gets one draw:
    - inactive sensors activate with ``activate_probability``
    - active sensors deactivate with ``deactivate_probability``

    Sensors are visited in name order so a seeded run is reproducible.

    Parameters
    ----------
    activate_probability
        Chance (0..1) that an inactive sensor trips on a tick.
    deactivate_probability
        Chance (0..1) that an active sensor releases on a tick.
    seed
        Optional seed for the random generator.
    """

    activate_probability: float = 0.05
    deactivate_probability: float = 0.3
    seed: Optional[int] = None

    _rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def tick(self, ctx: SimContext) -> List[SimMessage]:
        if not self.should_emit(ctx.now):
            return []

        out: List[SimMessage] = []
        for sensor in sorted(ctx.sensors, key=lambda s: (s.name, s.sensor_type.value)):
            draw = self._rng.random()
            if not sensor.active and draw < self.activate_probability:
                out.append(SensorToggle(sensor=sensor, active=True, timestamp=ctx.now))
            elif sensor.active and draw < self.deactivate_probability:
                out.append(SensorToggle(sensor=sensor, active=False, timestamp=ctx.now))
        return out
