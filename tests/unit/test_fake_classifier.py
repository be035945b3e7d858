"""
Unit tests for homeguard.image.fake_classifier.FakeImageClassifier.
"""

from __future__ import annotations

import pytest

from homeguard.image.fake_classifier import FakeImageClassifier


def test_probability_bounds_are_validated() -> None:
    with pytest.raises(ValueError):
        FakeImageClassifier(threat_probability=1.5)
    with pytest.raises(ValueError):
        FakeImageClassifier(threat_probability=-0.1)


def test_extreme_probabilities_are_deterministic() -> None:
    never = FakeImageClassifier(threat_probability=0.0)
    always = FakeImageClassifier(threat_probability=1.0)

    assert not any(never.contains_threat(object(), 50.0) for _ in range(50))
    assert all(always.contains_threat(object(), 50.0) for _ in range(50))


def test_same_seed_gives_same_verdicts() -> None:
    a = FakeImageClassifier(threat_probability=0.5, seed=42)
    b = FakeImageClassifier(threat_probability=0.5, seed=42)

    assert [a.contains_threat(None, 50.0) for _ in range(20)] == [b.contains_threat(None, 50.0) for _ in range(20)]
