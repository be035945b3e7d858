from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from simulator.core.sim_context import SimContext
from simulator.domain.messages import SimMessage


@dataclass
class SimModel(ABC):
    """
    Base class for simulated actors (sensor triggers, cameras).

    Subclasses implement :meth:`tick` and call :meth:`should_emit` to run at
    their own rate, independently of how often the engine steps.

    Parameters
    ----------
    name
        Actor name, used as the camera source and in logs.
    hz
        Emission rate. ``hz <= 0`` disables the actor.
    """

    name: str
    hz: float

    _next_due: Optional[datetime] = field(default=None, init=False, repr=False)

    @property
    def period(self) -> Optional[timedelta]:
        if self.hz <= 0:
            return None
        return timedelta(seconds=1.0 / self.hz)

    def should_emit(self, now: datetime) -> bool:
        """
        Return True when the actor is due at ``now`` and schedule the next slot.

        The first call is always due.
        """
        period = self.period
        if period is None:
            return False
        if self._next_due is not None and now < self._next_due:
            return False
        self._next_due = now + period
        return True

    @abstractmethod
    def tick(self, ctx: SimContext) -> List[SimMessage]:
        """Messages produced at ``ctx.now`` (possibly none)."""
        raise NotImplementedError
