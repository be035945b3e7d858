from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Optional

log = logging.getLogger(__name__)


@dataclass
class FakeImageClassifier:
    """
    Stand-in classifier returning random verdicts.

    The image content is ignored; each call draws from a seeded
    `random.Random`, so a simulation run is reproducible for a given seed.

    Parameters
    ----------
    threat_probability
        Probability (0..1) that a call reports a threat.
    seed
        Optional seed for the random generator.
    """

    threat_probability: float = 0.5
    seed: Optional[int] = None

    _rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not 0.0 <= self.threat_probability <= 1.0:
            raise ValueError("threat_probability must be within [0, 1]")
        self._rng = random.Random(self.seed)

    def contains_threat(self, image: Any, confidence_threshold: float) -> bool:
        verdict = self._rng.random() < self.threat_probability
        log.debug("Fake classifier verdict=%s (threshold=%.1f)", verdict, confidence_threshold)
        return verdict
