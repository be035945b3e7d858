from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from homeguard.domain.models import CameraImage
from simulator.core.sim_context import SimContext
from simulator.domain.messages import SimMessage
from simulator.sensors.base import SimModel


@dataclass
class CameraModel(SimModel):
    """
    Simulated camera producing grayscale noise frames.

    Frames carry one byte per pixel. They are only meaningful to the fake
    classifier, which ignores their content.

    Parameters
    ----------
    width, height
        Frame size in pixels.
    seed
        Optional seed for the random generator.
    """

    width: int = 320
    height: int = 240
    seed: Optional[int] = None

    _rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def capture(self, now: Optional[datetime] = None) -> CameraImage:
        """
        Capture one frame immediately, ignoring the tick rate.

        Used by the UI "Refresh camera" action.
        """
        data = self._rng.randbytes(self.width * self.height)
        return CameraImage(
            source=self.name,
            width=self.width,
            height=self.height,
            data=data,
            captured_at=now or datetime.now(),
        )

    def tick(self, ctx: SimContext) -> List[SimMessage]:
        if not self.should_emit(ctx.now):
            return []
        return [self.capture(ctx.now)]
