"""
Alarm status transition table.

This module holds the pure decision logic of the security controller. Each
external event (sensor toggle, camera verdict, arm/disarm command) is mapped
to a `Trigger`, and an ordered list of `TransitionRule` rows decides the next
`AlarmStatus` from:

- the current alarm status,
- the current arming status,
- the trigger, and
- a few facts about the sensor set (`TransitionFacts`).

Rules are evaluated top to bottom and the first matching row wins, so the
order of ``TRANSITION_TABLE`` *is* the precedence order. A row whose
``next_status`` is None leaves the alarm status unchanged.

Nothing here touches the repository or listeners; `SecurityService` reads the
state, asks this table for a decision, then persists and broadcasts it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, FrozenSet, Optional, Sequence

from homeguard.domain.models import AlarmStatus, ArmingStatus


class Trigger(str, Enum):
    """
    Event fed into the transition table.

    Members
    -------
    SENSOR_ACTIVATED : str
        A sensor was set active (including re-activation of an active sensor).
    SENSOR_DEACTIVATED : str
        A sensor was set inactive.
    THREAT_DETECTED : str
        The image classifier reported a threat.
    NO_THREAT : str
        The image classifier reported no threat.
    DISARM : str
        The operator disarmed the system.
    ARM_HOME : str
        The operator armed the system in home mode.
    ARM_AWAY : str
        The operator armed the system in away mode.
    """

    SENSOR_ACTIVATED = "SENSOR_ACTIVATED"
    SENSOR_DEACTIVATED = "SENSOR_DEACTIVATED"
    THREAT_DETECTED = "THREAT_DETECTED"
    NO_THREAT = "NO_THREAT"
    DISARM = "DISARM"
    ARM_HOME = "ARM_HOME"
    ARM_AWAY = "ARM_AWAY"


@dataclass(frozen=True)
class TransitionFacts:
    """
    Sensor-set facts needed by rule guards.

    Parameters
    ----------
    sensor_was_active
        Recorded ``active`` flag of the sensor being changed, before the change.
        Only meaningful for sensor triggers.
    any_sensor_active
        Whether at least one sensor is active once the change of this call has
        been applied.
    threat_detected
        Last camera verdict known to the service (None if no image has been
        scanned yet).
    """

    sensor_was_active: bool = False
    any_sensor_active: bool = False
    threat_detected: Optional[bool] = None


Guard = Callable[[TransitionFacts], bool]

_ALL_ALARM: FrozenSet[AlarmStatus] = frozenset(AlarmStatus)
_ALL_ARMING: FrozenSet[ArmingStatus] = frozenset(ArmingStatus)


def _always(facts: TransitionFacts) -> bool:
    return True


@dataclass(frozen=True)
class TransitionRule:
    """
    One row of the decision table.

    Parameters
    ----------
    name
        Short rule name, used in logs and tests.
    trigger
        Trigger the row applies to.
    alarm
        Current alarm statuses the row applies to.
    arming
        Current arming statuses the row applies to.
    next_status
        Resulting alarm status, or None to leave it unchanged.
    guard
        Extra condition over `TransitionFacts`.
    """

    name: str
    trigger: Trigger
    next_status: Optional[AlarmStatus]
    alarm: FrozenSet[AlarmStatus] = _ALL_ALARM
    arming: FrozenSet[ArmingStatus] = _ALL_ARMING
    guard: Guard = _always

    def matches(
        self,
        trigger: Trigger,
        alarm: AlarmStatus,
        arming: ArmingStatus,
        facts: TransitionFacts,
    ) -> bool:
        return (
            trigger is self.trigger
            and alarm in self.alarm
            and arming in self.arming
            and self.guard(facts)
        )


TRANSITION_TABLE: Sequence[TransitionRule] = (
    # --- sensor activated ---
    TransitionRule(
        name="activation_while_alarm",
        trigger=Trigger.SENSOR_ACTIVATED,
        alarm=frozenset({AlarmStatus.ALARM}),
        next_status=None,
    ),
    TransitionRule(
        name="activation_while_disarmed",
        trigger=Trigger.SENSOR_ACTIVATED,
        arming=frozenset({ArmingStatus.DISARMED}),
        next_status=None,
    ),
    TransitionRule(
        name="activation_starts_pending",
        trigger=Trigger.SENSOR_ACTIVATED,
        alarm=frozenset({AlarmStatus.NO_ALARM}),
        next_status=AlarmStatus.PENDING_ALARM,
    ),
    TransitionRule(
        name="activation_while_pending",
        trigger=Trigger.SENSOR_ACTIVATED,
        alarm=frozenset({AlarmStatus.PENDING_ALARM}),
        next_status=AlarmStatus.ALARM,
    ),
    # --- sensor deactivated ---
    TransitionRule(
        name="deactivation_of_inactive_sensor",
        trigger=Trigger.SENSOR_DEACTIVATED,
        guard=lambda f: not f.sensor_was_active,
        next_status=None,
    ),
    TransitionRule(
        name="last_sensor_cleared_while_pending",
        trigger=Trigger.SENSOR_DEACTIVATED,
        alarm=frozenset({AlarmStatus.PENDING_ALARM}),
        guard=lambda f: not f.any_sensor_active,
        next_status=AlarmStatus.NO_ALARM,
    ),
    TransitionRule(
        name="deactivation_keeps_status",
        trigger=Trigger.SENSOR_DEACTIVATED,
        next_status=None,
    ),
    # --- camera verdicts ---
    TransitionRule(
        name="threat_while_armed_home",
        trigger=Trigger.THREAT_DETECTED,
        arming=frozenset({ArmingStatus.ARMED_HOME}),
        next_status=AlarmStatus.ALARM,
    ),
    TransitionRule(
        name="threat_ignored",
        trigger=Trigger.THREAT_DETECTED,
        next_status=None,
    ),
    TransitionRule(
        name="no_threat_and_no_active_sensor",
        trigger=Trigger.NO_THREAT,
        guard=lambda f: not f.any_sensor_active,
        next_status=AlarmStatus.NO_ALARM,
    ),
    TransitionRule(
        name="no_threat_with_active_sensor",
        trigger=Trigger.NO_THREAT,
        next_status=None,
    ),
    # --- arming commands ---
    TransitionRule(
        name="disarm_clears_alarm",
        trigger=Trigger.DISARM,
        next_status=AlarmStatus.NO_ALARM,
    ),
    TransitionRule(
        name="arm_home_with_threat_in_view",
        trigger=Trigger.ARM_HOME,
        guard=lambda f: f.threat_detected is True,
        next_status=AlarmStatus.ALARM,
    ),
    TransitionRule(
        name="arm_home_keeps_status",
        trigger=Trigger.ARM_HOME,
        next_status=None,
    ),
    TransitionRule(
        name="arm_away_keeps_status",
        trigger=Trigger.ARM_AWAY,
        next_status=None,
    ),
)


def find_rule(
    trigger: Trigger,
    alarm: AlarmStatus,
    arming: ArmingStatus,
    facts: TransitionFacts,
    table: Sequence[TransitionRule] = TRANSITION_TABLE,
) -> TransitionRule:
    """
    Return the first rule matching the inputs.

    Raises
    ------
    LookupError
        If no row matches. Every trigger ends with a catch-all row, so this
        only happens with a custom table.
    """
    for rule in table:
        if rule.matches(trigger, alarm, arming, facts):
            return rule
    raise LookupError(f"no transition rule for {trigger.value} in {alarm.value}/{arming.value}")


def resolve_next_status(
    trigger: Trigger,
    alarm: AlarmStatus,
    arming: ArmingStatus,
    facts: TransitionFacts,
) -> AlarmStatus:
    """
    Compute the alarm status after ``trigger``.

    Returns the current ``alarm`` when the matching rule leaves it unchanged,
    so callers can compare the result with the current value to decide whether
    a write is needed.
    """
    rule = find_rule(trigger, alarm, arming, facts)
    return alarm if rule.next_status is None else rule.next_status
