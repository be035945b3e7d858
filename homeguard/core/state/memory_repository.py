from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from typing import Dict, Set, Tuple

from homeguard.core.errors import InvalidOperationError
from homeguard.domain.models import AlarmStatus, ArmingStatus, Sensor, SensorType

SensorKey = Tuple[str, SensorType]


@dataclass
class InMemorySecurityRepository:
    """
    Thread-safe in-memory security repository.

    The repository keeps:
    - the current alarm status (default NO_ALARM)
    - the current arming status (default DISARMED)
    - the sensor set, keyed by (name, type)

    Concurrency Model
    -----------------
    All reads/writes are guarded by a single re-entrant lock
    (`threading.RLock`).

    Design Notes
    ------------
    - Stored sensors are private copies. ``get_sensors`` returns fresh copies
      so callers can iterate or mutate them without touching stored state.
    - Duplicate adds, missing removes and updates of unknown sensors raise
      `InvalidOperationError`.

    Attributes
    ----------
    alarm_status
        Current alarm status.
    arming_status
        Current arming status.
    """

    alarm_status: AlarmStatus = AlarmStatus.NO_ALARM
    arming_status: ArmingStatus = ArmingStatus.DISARMED

    _sensors: Dict[SensorKey, Sensor] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    # --- Status API ---
    def get_alarm_status(self) -> AlarmStatus:
        with self._lock:
            return self.alarm_status

    def set_alarm_status(self, status: AlarmStatus) -> None:
        with self._lock:
            self.alarm_status = status
            self._changed()

    def get_arming_status(self) -> ArmingStatus:
        with self._lock:
            return self.arming_status

    def set_arming_status(self, status: ArmingStatus) -> None:
        with self._lock:
            self.arming_status = status
            self._changed()

    # --- Sensor API ---
    def get_sensors(self) -> Set[Sensor]:
        """
        Return copies of all stored sensors.

        Returns
        -------
        set of Sensor
            Snapshot of the sensor set.
        """
        with self._lock:
            return {replace(s) for s in self._sensors.values()}

    def add_sensor(self, sensor: Sensor) -> None:
        """
        Add a sensor to the set.

        Raises
        ------
        InvalidOperationError
            If a sensor with the same name and type is already stored.
        """
        with self._lock:
            if sensor.key in self._sensors:
                raise InvalidOperationError(f"sensor already exists: {sensor.name} ({sensor.sensor_type.value})")
            self._sensors[sensor.key] = replace(sensor)
            self._changed()

    def remove_sensor(self, sensor: Sensor) -> None:
        """
        Remove a sensor from the set.

        Raises
        ------
        InvalidOperationError
            If no sensor with the same name and type is stored.
        """
        with self._lock:
            if sensor.key not in self._sensors:
                raise InvalidOperationError(f"sensor not found: {sensor.name} ({sensor.sensor_type.value})")
            del self._sensors[sensor.key]
            self._changed()

    def update_sensor(self, sensor: Sensor) -> None:
        """
        Overwrite the stored copy of an existing sensor.

        Raises
        ------
        InvalidOperationError
            If the sensor is not stored.
        """
        with self._lock:
            if sensor.key not in self._sensors:
                raise InvalidOperationError(f"sensor not found: {sensor.name} ({sensor.sensor_type.value})")
            self._sensors[sensor.key] = replace(sensor)
            self._changed()

    def _changed(self) -> None:
        """Hook called (under the lock) after every successful write."""
        return None
