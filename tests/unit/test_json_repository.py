"""
Unit tests for homeguard.core.state.json_repository.JsonFileSecurityRepository.

These tests verify:
- every write is saved to the JSON document
- state survives re-opening the file
- corrupt documents are rejected
- failed saves propagate the error and the next save catches disk up
- malformed sensor entries are rejected
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from homeguard.core.state.json_repository import JsonFileSecurityRepository
from homeguard.domain.models import AlarmStatus, ArmingStatus, Sensor, SensorType


def test_missing_file_starts_with_defaults(tmp_path: Path) -> None:
    repo = JsonFileSecurityRepository(path=tmp_path / "state.json")

    assert repo.get_alarm_status() is AlarmStatus.NO_ALARM
    assert repo.get_arming_status() is ArmingStatus.DISARMED
    assert repo.get_sensors() == set()
    assert not (tmp_path / "state.json").exists()


def test_writes_are_saved_and_reloaded(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    repo = JsonFileSecurityRepository(path=path)
    repo.add_sensor(Sensor(name="Front Door", sensor_type=SensorType.DOOR))
    repo.add_sensor(Sensor(name="Attic", sensor_type=SensorType.MOTION))
    repo.update_sensor(Sensor(name="Front Door", sensor_type=SensorType.DOOR, active=True))
    repo.set_arming_status(ArmingStatus.ARMED_HOME)
    repo.set_alarm_status(AlarmStatus.PENDING_ALARM)

    doc = json.loads(path.read_text(encoding="utf-8"))
    assert doc == {
        "alarm_status": "PENDING_ALARM",
        "arming_status": "ARMED_HOME",
        "sensors": [
            {"name": "Attic", "type": "MOTION", "active": False},
            {"name": "Front Door", "type": "DOOR", "active": True},
        ],
    }

    reopened = JsonFileSecurityRepository(path=path)
    assert reopened.get_alarm_status() is AlarmStatus.PENDING_ALARM
    assert reopened.get_arming_status() is ArmingStatus.ARMED_HOME
    assert {(s.name, s.active) for s in reopened.get_sensors()} == {("Attic", False), ("Front Door", True)}


def test_no_temp_file_left_behind(tmp_path: Path) -> None:
    repo = JsonFileSecurityRepository(path=tmp_path / "state.json")
    repo.set_alarm_status(AlarmStatus.ALARM)

    assert sorted(p.name for p in tmp_path.iterdir()) == ["state.json"]


def test_corrupt_file_raises_value_error(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError):
        JsonFileSecurityRepository(path=path)


def test_non_object_root_raises_value_error(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(ValueError):
        JsonFileSecurityRepository(path=path)


def test_failed_save_propagates_and_next_save_catches_up(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "state.json"
    repo = JsonFileSecurityRepository(path=path)
    repo.add_sensor(Sensor(name="Garage", sensor_type=SensorType.DOOR))

    def broken_replace(src, dst):
        raise OSError("disk full")

    with monkeypatch.context() as m:
        m.setattr("homeguard.core.state.json_repository.os.replace", broken_replace)
        with pytest.raises(OSError):
            repo.set_alarm_status(AlarmStatus.ALARM)

    # memory keeps the change; disk is behind until the next save
    assert repo.get_alarm_status() is AlarmStatus.ALARM
    assert json.loads(path.read_text(encoding="utf-8"))["alarm_status"] == "NO_ALARM"

    repo.set_arming_status(ArmingStatus.ARMED_AWAY)

    doc = json.loads(path.read_text(encoding="utf-8"))
    assert doc["alarm_status"] == "ALARM"
    assert doc["arming_status"] == "ARMED_AWAY"


@pytest.mark.parametrize(
    "entry",
    [
        {"type": "DOOR"},
        {"name": "Attic"},
        {"name": "Attic", "type": "SMOKE"},
        ["Attic", "DOOR"],
    ],
)
def test_invalid_sensor_entry_raises_value_error(tmp_path: Path, entry) -> None:
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"sensors": [entry]}), encoding="utf-8")

    with pytest.raises(ValueError, match="invalid sensor entry"):
        JsonFileSecurityRepository(path=path)
