"""
Unit tests for homeguard.services.status_listener.ListenerRegistry.

Validates:
- registration order is dispatch order
- identity-based de-duplication (equal listeners are distinct registrations)
- removal, including removal of an unregistered listener
- listeners (de)registering during dispatch
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from homeguard.services.status_listener import ListenerRegistry


@dataclass
class Probe:
    """Listener double; all instances compare equal."""

    hits: List[str] = field(default_factory=list)

    def alarm_status_changed(self, status) -> None:
        self.hits.append("alarm")

    def sensor_status_changed(self, sensor, active) -> None:
        self.hits.append("sensor")

    def threat_detected(self, detected) -> None:
        self.hits.append("threat")

    def arming_status_changed(self, status) -> None:
        self.hits.append("arming")


def _registered(reg: ListenerRegistry) -> List[Probe]:
    seen: List[Probe] = []
    reg.dispatch(seen.append)
    return seen


def test_dispatch_in_registration_order() -> None:
    reg = ListenerRegistry()
    order: List[int] = []
    probes = [Probe(), Probe(), Probe()]
    for p in probes:
        reg.add(p)

    reg.dispatch(lambda listener: order.append(id(listener)))

    assert order == [id(p) for p in probes]


def test_add_is_identity_based() -> None:
    reg = ListenerRegistry()
    a, b = Probe(), Probe()
    assert a == b

    reg.add(a)
    reg.add(b)
    reg.add(a)

    assert [x is a for x in _registered(reg)] == [True, False]


def test_remove_by_identity() -> None:
    reg = ListenerRegistry()
    a, b = Probe(), Probe()
    reg.add(a)
    reg.add(b)

    reg.remove(a)

    listeners = _registered(reg)
    assert len(listeners) == 1
    assert listeners[0] is b


def test_remove_unregistered_is_noop() -> None:
    reg = ListenerRegistry()
    reg.add(Probe())

    reg.remove(Probe())

    assert len(_registered(reg)) == 1


def test_registration_changes_during_dispatch_apply_next_time() -> None:
    reg = ListenerRegistry()
    late = Probe()

    class Adder(Probe):
        def threat_detected(self, detected) -> None:
            super().threat_detected(detected)
            reg.add(late)

    adder = Adder()
    reg.add(adder)

    reg.dispatch(lambda listener: listener.threat_detected(True))
    assert late.hits == []

    reg.dispatch(lambda listener: listener.threat_detected(True))
    assert late.hits == ["threat"]
    assert adder.hits == ["threat", "threat"]
