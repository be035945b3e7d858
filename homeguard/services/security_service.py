from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Optional, Sequence, Set, Tuple

from homeguard.core.errors import InvalidOperationError
from homeguard.core.state.repository import SecurityRepository
from homeguard.core.transitions import TransitionFacts, Trigger, resolve_next_status
from homeguard.domain.models import AlarmStatus, ArmingStatus, Sensor
from homeguard.image.base import ImageClassifier
from homeguard.services.status_listener import ListenerRegistry, StatusListener

log = logging.getLogger(__name__)

# (apply, undo) pair for one repository write.
Write = Tuple[Callable[[], None], Callable[[], None]]

DEFAULT_CONFIDENCE_THRESHOLD = 50.0

_ARMING_TRIGGERS = {
    ArmingStatus.DISARMED: Trigger.DISARM,
    ArmingStatus.ARMED_HOME: Trigger.ARM_HOME,
    ArmingStatus.ARMED_AWAY: Trigger.ARM_AWAY,
}


@dataclass
class SecurityService:
    """
    Alarm state machine of the home security controller.

    Responsibilities
    ----------------
    - Accept sensor toggles, camera frames and arm/disarm commands.
    - Decide the next alarm status with the transition table
      (`homeguard.core.transitions`).
    - Persist every change through the injected repository.
    - Notify registered status listeners after the writes have committed.

    Each public operation runs read -> decide -> write -> notify to completion
    while holding one re-entrant lock, so the UI thread and a simulator thread
    can share a service. Listeners may call the read methods while being
    notified.

    Failure Model
    -------------
    Repository and classifier exceptions propagate unchanged. Writes already
    applied by the failing call are undone in reverse order and no listener is
    notified, so the statuses are left as they were before the call.

    Parameters
    ----------
    repository
        Source of truth for statuses and sensors.
    classifier
        Image classifier used by `process_image`.
    confidence_threshold
        Fixed confidence threshold passed to the classifier.
    """

    repository: SecurityRepository
    classifier: ImageClassifier
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD

    _listeners: ListenerRegistry = field(default_factory=ListenerRegistry, init=False, repr=False)
    _last_threat: Optional[bool] = field(default=None, init=False, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    # --- Listener API ---
    def add_listener(self, listener: StatusListener) -> None:
        with self._lock:
            self._listeners.add(listener)

    def remove_listener(self, listener: StatusListener) -> None:
        with self._lock:
            self._listeners.remove(listener)

    # --- Read API ---
    def get_alarm_status(self) -> AlarmStatus:
        with self._lock:
            return self.repository.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        with self._lock:
            return self.repository.get_arming_status()

    def get_sensors(self) -> Set[Sensor]:
        with self._lock:
            return self.repository.get_sensors()

    def get_last_threat_verdict(self) -> Optional[bool]:
        """
        Return the last camera verdict, or None if no image was scanned yet.
        """
        with self._lock:
            return self._last_threat

    # --- Sensor set management ---
    def add_sensor(self, sensor: Sensor) -> None:
        """
        Register a new sensor.

        Raises
        ------
        InvalidOperationError
            If a sensor with the same name and type already exists.
        """
        with self._lock:
            if sensor in self.repository.get_sensors():
                raise InvalidOperationError(f"sensor already exists: {sensor.name} ({sensor.sensor_type.value})")
            self.repository.add_sensor(sensor)
            log.info("Added sensor %s (%s)", sensor.name, sensor.sensor_type.value)

    def remove_sensor(self, sensor: Sensor) -> None:
        """
        Remove a registered sensor.

        Raises
        ------
        InvalidOperationError
            If no sensor with the same name and type exists.
        """
        with self._lock:
            if sensor not in self.repository.get_sensors():
                raise InvalidOperationError(f"sensor not found: {sensor.name} ({sensor.sensor_type.value})")
            self.repository.remove_sensor(sensor)
            log.info("Removed sensor %s (%s)", sensor.name, sensor.sensor_type.value)

    # --- State machine operations ---
    def change_sensor_activation_status(self, sensor: Sensor, active: bool = True) -> None:
        """
        Set a sensor's activation flag and update the alarm status.

        Calling without ``active`` activates the sensor (used by simulated
        triggers).

        Parameters
        ----------
        sensor
            Stored sensor, or any sensor with the same name and type.
        active
            New activation value.

        Raises
        ------
        InvalidOperationError
            If the sensor is not registered.

        Side Effects
        ------------
        - Persists the sensor flag (always) and the alarm status (only if it
          changes).
        - Notifies ``sensor_status_changed`` and, on a change,
          ``alarm_status_changed``.
        - Updates ``sensor.active`` on the caller's object.
        """
        with self._lock:
            alarm = self.repository.get_alarm_status()
            arming = self.repository.get_arming_status()
            sensors = self.repository.get_sensors()
            stored = self._find_sensor(sensors, sensor)

            others_active = any(s.active for s in sensors if s != stored)
            facts = TransitionFacts(
                sensor_was_active=stored.active,
                any_sensor_active=active or others_active,
                threat_detected=self._last_threat,
            )
            trigger = Trigger.SENSOR_ACTIVATED if active else Trigger.SENSOR_DEACTIVATED
            next_status = self._decide(trigger, alarm, arming, facts)

            updated = replace(stored, active=active)
            writes: List[Write] = [self._sensor_write(updated, stored)]
            if next_status is not alarm:
                writes.append(self._alarm_write(next_status, alarm))
            self._commit(writes)

            sensor.active = active
            self._notify_sensor(updated)
            if next_status is not alarm:
                self._notify_alarm(next_status)

    def process_image(self, image: Any) -> bool:
        """
        Classify a camera frame and update the alarm status.

        - Threat while ARMED_HOME -> ALARM.
        - No threat and no active sensor -> NO_ALARM.

        Listeners always receive the raw verdict via ``threat_detected``.

        Parameters
        ----------
        image
            Frame passed unchanged to the classifier.

        Returns
        -------
        bool
            The classifier verdict.
        """
        with self._lock:
            detected = bool(self.classifier.contains_threat(image, self.confidence_threshold))

            alarm = self.repository.get_alarm_status()
            arming = self.repository.get_arming_status()
            facts = TransitionFacts(
                any_sensor_active=any(s.active for s in self.repository.get_sensors()),
                threat_detected=detected,
            )
            trigger = Trigger.THREAT_DETECTED if detected else Trigger.NO_THREAT
            next_status = self._decide(trigger, alarm, arming, facts)

            if next_status is not alarm:
                self._commit([self._alarm_write(next_status, alarm)])
            self._last_threat = detected

            if next_status is not alarm:
                self._notify_alarm(next_status)
            self._listeners.dispatch(lambda listener: listener.threat_detected(detected))
            return detected

    def set_arming_status(self, status: ArmingStatus) -> None:
        """
        Arm or disarm the system.

        - DISARMED: alarm status becomes NO_ALARM, then the arming status is
          written.
        - ARMED_HOME / ARMED_AWAY: every active sensor is reset to inactive,
          then the arming status is written. An existing PENDING_ALARM/ALARM is
          kept; arming home while the last camera verdict was a threat raises
          ALARM.

        Listeners are always notified of the new arming status.

        Parameters
        ----------
        status
            New arming status.
        """
        with self._lock:
            alarm = self.repository.get_alarm_status()
            previous_arming = self.repository.get_arming_status()
            sensors = self.repository.get_sensors()

            writes: List[Write] = []
            reset: List[Sensor] = []
            if status.is_armed:
                for stored in sorted(sensors, key=lambda s: (s.name, s.sensor_type.value)):
                    if stored.active:
                        cleared = replace(stored, active=False)
                        writes.append(self._sensor_write(cleared, stored))
                        reset.append(cleared)

            facts = TransitionFacts(
                any_sensor_active=any(s.active for s in sensors) and not status.is_armed,
                threat_detected=self._last_threat,
            )
            next_status = self._decide(_ARMING_TRIGGERS[status], alarm, previous_arming, facts)
            alarm_changed = next_status is not alarm

            if status is ArmingStatus.DISARMED:
                if alarm_changed:
                    writes.append(self._alarm_write(next_status, alarm))
                writes.append(self._arming_write(status, previous_arming))
            else:
                writes.append(self._arming_write(status, previous_arming))
                if alarm_changed:
                    writes.append(self._alarm_write(next_status, alarm))
            self._commit(writes)
            log.info("Arming status %s -> %s", previous_arming.value, status.value)

            for cleared in reset:
                self._notify_sensor(cleared)
            if alarm_changed:
                self._notify_alarm(next_status)
            self._listeners.dispatch(lambda listener: listener.arming_status_changed(status))

    # --- Internals ---
    @staticmethod
    def _find_sensor(sensors: Set[Sensor], sensor: Sensor) -> Sensor:
        for stored in sensors:
            if stored == sensor:
                return stored
        raise InvalidOperationError(f"sensor not found: {sensor.name} ({sensor.sensor_type.value})")

    def _decide(
        self,
        trigger: Trigger,
        alarm: AlarmStatus,
        arming: ArmingStatus,
        facts: TransitionFacts,
    ) -> AlarmStatus:
        next_status = resolve_next_status(trigger, alarm, arming, facts)
        if next_status is alarm:
            log.debug("%s in %s/%s: no alarm change", trigger.value, alarm.value, arming.value)
        else:
            log.info("Alarm status %s -> %s (%s)", alarm.value, next_status.value, trigger.value)
        return next_status

    def _sensor_write(self, new: Sensor, old: Sensor) -> Write:
        return (lambda: self.repository.update_sensor(new), lambda: self.repository.update_sensor(old))

    def _alarm_write(self, new: AlarmStatus, old: AlarmStatus) -> Write:
        return (lambda: self.repository.set_alarm_status(new), lambda: self.repository.set_alarm_status(old))

    def _arming_write(self, new: ArmingStatus, old: ArmingStatus) -> Write:
        return (lambda: self.repository.set_arming_status(new), lambda: self.repository.set_arming_status(old))

    @staticmethod
    def _commit(writes: Sequence[Write]) -> None:
        """
        Apply writes in order; on failure undo them newest first and re-raise.

        The write that raised is undone too, since a repository may have
        changed its state before failing. Undo is best effort: an undo that
        raises is logged and the remaining ones still run. The caller always
        sees the original exception.
        """
        started: List[Callable[[], None]] = []
        try:
            for apply, undo in writes:
                started.append(undo)
                apply()
        except Exception:
            log.warning("Repository write failed; undoing %d write(s)", len(started))
            for undo in reversed(started):
                try:
                    undo()
                except Exception:
                    log.error("Undo of a repository write failed", exc_info=True)
            raise

    def _notify_sensor(self, sensor: Sensor) -> None:
        self._listeners.dispatch(lambda listener: listener.sensor_status_changed(replace(sensor), sensor.active))

    def _notify_alarm(self, status: AlarmStatus) -> None:
        self._listeners.dispatch(lambda listener: listener.alarm_status_changed(status))
