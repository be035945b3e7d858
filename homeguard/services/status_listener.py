"""
Status listener contract and registry.

Listeners are presentation-side observers (UI panels, history recorders,
webhook bridges) notified by `SecurityService` after each committed change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Protocol

from homeguard.domain.models import AlarmStatus, ArmingStatus, Sensor


class StatusListener(Protocol):
    """
    Protocol interface for status notifications.

    Any object implementing these four callbacks can be registered with the
    security service; no inheritance is required.

    Methods
    -------
    alarm_status_changed(status)
        The headline alarm status changed.
    sensor_status_changed(sensor, active)
        A sensor's activation flag was written.
    threat_detected(detected)
        The image classifier returned a verdict.
    arming_status_changed(status)
        The arming status was set.
    """

    def alarm_status_changed(self, status: AlarmStatus) -> None:
        ...

    def sensor_status_changed(self, sensor: Sensor, active: bool) -> None:
        ...

    def threat_detected(self, detected: bool) -> None:
        ...

    def arming_status_changed(self, status: ArmingStatus) -> None:
        ...


@dataclass
class ListenerRegistry:
    """
    Ordered, identity-based collection of status listeners.

    Notes
    -----
    - Listeners are compared by identity (``is``), not equality, so two equal
      dataclass listeners are still two registrations.
    - Dispatch iterates over a copy, so a listener may (de)register listeners
      while being notified; the change applies from the next dispatch.
    - Exceptions raised by a listener propagate to the caller and stop the
      dispatch.
    """

    _listeners: List[StatusListener] = field(default_factory=list)

    def add(self, listener: StatusListener) -> None:
        if any(existing is listener for existing in self._listeners):
            return
        self._listeners.append(listener)

    def remove(self, listener: StatusListener) -> None:
        self._listeners = [existing for existing in self._listeners if existing is not listener]

    def dispatch(self, callback: Callable[[StatusListener], None]) -> None:
        """
        Invoke ``callback`` for every listener in registration order.

        Parameters
        ----------
        callback
            Function receiving one listener, typically calling one of its
            notification methods.
        """
        for listener in list(self._listeners):
            callback(listener)
