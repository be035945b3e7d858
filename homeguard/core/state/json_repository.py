from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from homeguard.core.state.memory_repository import InMemorySecurityRepository
from homeguard.domain.models import AlarmStatus, ArmingStatus, Sensor, SensorType

log = logging.getLogger(__name__)


def _sensor_to_dict(sensor: Sensor) -> Dict[str, Any]:
    return {"name": sensor.name, "type": sensor.sensor_type.value, "active": sensor.active}


def _sensor_from_dict(raw: Dict[str, Any]) -> Sensor:
    return Sensor(
        name=str(raw["name"]),
        sensor_type=SensorType(str(raw["type"])),
        active=bool(raw.get("active", False)),
    )


@dataclass
class JsonFileSecurityRepository(InMemorySecurityRepository):
    """
    Security repository persisted to a JSON document.

    Behaves exactly like `InMemorySecurityRepository` and additionally writes
    the full state to ``path`` after every successful change. The document is
    reloaded at construction, so statuses and sensors survive restarts.

    Document layout::

        {
          "alarm_status": "NO_ALARM",
          "arming_status": "DISARMED",
          "sensors": [{"name": "Front Door", "type": "DOOR", "active": false}]
        }

    Notes
    -----
    - Files are written to a temporary sibling and moved into place with
      `os.replace`, so a crash never leaves a half-written document.
    - If saving fails, the error is re-raised but the in-memory change is
      kept; the next successful save writes the whole state, so memory and
      disk converge again. Callers that need all-or-nothing undo the write
      themselves (see `SecurityService`).

    Parameters
    ----------
    path
        Location of the JSON document.
    """

    path: Path = Path("homeguard_state.json")

    def __post_init__(self) -> None:
        self.path = Path(self.path).expanduser()
        if self.path.exists():
            self._apply_document(self._read_document())
            log.info("Loaded security state from %s", self.path)

    def _read_document(self) -> Dict[str, Any]:
        with self.path.open("r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"{self.path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must contain a JSON object at the root")
        return data

    def _apply_document(self, doc: Dict[str, Any]) -> None:
        self.alarm_status = AlarmStatus(doc.get("alarm_status", AlarmStatus.NO_ALARM.value))
        self.arming_status = ArmingStatus(doc.get("arming_status", ArmingStatus.DISARMED.value))
        sensors: List[Sensor] = []
        for raw in doc.get("sensors", []):
            try:
                sensors.append(_sensor_from_dict(raw))
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"{self.path}: invalid sensor entry {raw!r}: {e}") from e
        self._sensors = {s.key: s for s in sensors}

    def _to_document(self) -> Dict[str, Any]:
        sensors = sorted(self._sensors.values(), key=lambda s: (s.name, s.sensor_type.value))
        return {
            "alarm_status": self.alarm_status.value,
            "arming_status": self.arming_status.value,
            "sensors": [_sensor_to_dict(s) for s in sensors],
        }

    def _changed(self) -> None:
        doc = self._to_document()
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(doc, f, indent=2)
            os.replace(tmp, self.path)
        except OSError:
            log.warning("Failed to save security state to %s; in-memory state is ahead of disk", self.path)
            raise
