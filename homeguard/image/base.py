from __future__ import annotations

from typing import Any, Protocol


class ImageClassifier(Protocol):
    """
    Protocol interface for image analysis.

    Any classifier providing ``contains_threat`` can be injected into
    `SecurityService`. Implementations are treated as stateless.

    Methods
    -------
    contains_threat(image, confidence_threshold)
        Return True if ``image`` contains a threat subject (e.g., a cat) with
        a confidence of at least ``confidence_threshold`` percent.
    """

    def contains_threat(self, image: Any, confidence_threshold: float) -> bool:
        ...
