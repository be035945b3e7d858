"""
Repository contract for the security controller.

The security service treats the repository as the single source of truth for
the alarm status, the arming status and the sensor set. Any class
implementing this protocol can be injected into `SecurityService`; the storage
medium (memory, file, database) is opaque to the service.
"""

from __future__ import annotations

from typing import Protocol, Set

from homeguard.domain.models import AlarmStatus, ArmingStatus, Sensor


class SecurityRepository(Protocol):
    """
    Protocol interface for security state persistence.

    Methods
    -------
    get_alarm_status(), set_alarm_status(status)
        Read/write the headline alarm status.
    get_arming_status(), set_arming_status(status)
        Read/write the arming status.
    get_sensors()
        Return the sensor set. Implementations return copies, so mutating the
        returned sensors never changes stored state.
    add_sensor(sensor), remove_sensor(sensor)
        Grow/shrink the sensor set (identity is name + type).
    update_sensor(sensor)
        Persist the ``active`` flag of an already stored sensor.

    A write that raises may already have changed the stored state (e.g. a
    file store keeps the in-memory change when saving fails).
    """

    def get_alarm_status(self) -> AlarmStatus:
        ...

    def set_alarm_status(self, status: AlarmStatus) -> None:
        ...

    def get_arming_status(self) -> ArmingStatus:
        ...

    def set_arming_status(self, status: ArmingStatus) -> None:
        ...

    def get_sensors(self) -> Set[Sensor]:
        ...

    def add_sensor(self, sensor: Sensor) -> None:
        ...

    def remove_sensor(self, sensor: Sensor) -> None:
        ...

    def update_sensor(self, sensor: Sensor) -> None:
        ...
