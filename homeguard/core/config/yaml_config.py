from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from homeguard.domain.models import SensorType


@dataclass(frozen=True)
class RepositoryConfig:
    """Where security state is kept ("memory" or "json")."""
    backend: str = "memory"
    path: str = "homeguard_state.json"


@dataclass(frozen=True)
class ClassifierConfig:
    """Image classifier settings."""
    confidence_threshold: float = 50.0
    threat_probability: float = 0.5
    seed: Optional[int] = None


@dataclass(frozen=True)
class CameraConfig:
    """Simulated camera settings."""
    name: str = "Camera 1"
    width: int = 320
    height: int = 240
    hz: float = 0.2


@dataclass(frozen=True)
class SensorSeed:
    """Sensor registered at startup when the repository has none."""
    name: str
    type: SensorType


@dataclass(frozen=True)
class SimulatorConfig:
    """Simulation loop parameters."""
    tick_ms: int = 200
    trigger_hz: float = 1.0
    activate_probability: float = 0.05
    deactivate_probability: float = 0.3
    seed: Optional[int] = None


@dataclass(frozen=True)
class WebhookConfigData:
    """Webhook notifier configuration (URL + auth)."""
    url: str
    auth_header: Optional[str] = None
    timeout_s: float = 3.0
    verify_tls: bool = True


@dataclass(frozen=True)
class AppConfig:
    """
    Root application configuration loaded from YAML.

    Every section is optional; missing sections fall back to defaults and a
    missing ``webhook`` section disables webhook notifications.
    """
    repository: RepositoryConfig = field(default_factory=RepositoryConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    sensors: List[SensorSeed] = field(default_factory=list)
    simulator: SimulatorConfig = field(default_factory=SimulatorConfig)
    webhook: Optional[WebhookConfigData] = None


def _read_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError("config.yaml must contain a YAML mapping at the root")
    return data


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def _resolve_default_config_path() -> Path:
    """
    Resolve config.yaml location.

    Priority:
    1) HOMEGUARD_CONFIG env var if provided
    2) config.yaml next to the executable
    3) ./config.yaml in current working directory
    """
    env = os.getenv("HOMEGUARD_CONFIG")
    if env:
        return Path(env).expanduser().resolve()

    # PyInstaller-friendly: executable directory
    exe_dir = Path(sys.executable).resolve().parent
    candidate = exe_dir / "config.yaml"
    if candidate.exists():
        return candidate

    return Path("config.yaml").resolve()


def _parse_sensor_type(raw: Any) -> SensorType:
    try:
        return SensorType(str(raw).upper())
    except ValueError:
        names = ", ".join(t.value for t in SensorType)
        raise ValueError(f"unknown sensor type {raw!r} (expected one of: {names})") from None


def load_app_config(path: Optional[str] = None) -> AppConfig:
    """
    Load application configuration from YAML and convert into typed config objects.

    Parameters
    ----------
    path
        Explicit path to config.yaml. If None, uses default resolution.

    Returns
    -------
    AppConfig
        Parsed and validated configuration.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If the document is not a mapping, or fields are invalid.
    """
    cfg_path = Path(path).expanduser().resolve() if path else _resolve_default_config_path()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config not found: {cfg_path}")

    raw = _read_yaml(cfg_path)

    # ---- repository ----
    r = raw.get("repository") or {}
    backend = str(r.get("backend", "memory")).lower()
    if backend not in ("memory", "json"):
        raise ValueError(f"repository.backend must be 'memory' or 'json', got {backend!r}")
    repo_path = Path(str(r.get("path", "homeguard_state.json"))).expanduser()
    if not repo_path.is_absolute():
        repo_path = cfg_path.parent / repo_path
    repository = RepositoryConfig(backend=backend, path=str(repo_path))

    # ---- classifier ----
    c = raw.get("classifier") or {}
    classifier = ClassifierConfig(
        confidence_threshold=float(c.get("confidence_threshold", 50.0)),
        threat_probability=float(c.get("threat_probability", 0.5)),
        seed=_optional_int(c.get("seed")),
    )

    # ---- camera ----
    cam = raw.get("camera") or {}
    camera = CameraConfig(
        name=str(cam.get("name", "Camera 1")),
        width=int(cam.get("width", 320)),
        height=int(cam.get("height", 240)),
        hz=float(cam.get("hz", 0.2)),
    )

    # ---- sensors ----
    sensors: List[SensorSeed] = []
    for item in raw.get("sensors") or []:
        sensors.append(SensorSeed(name=str(item["name"]), type=_parse_sensor_type(item["type"])))

    # ---- simulator ----
    s = raw.get("simulator") or {}
    simulator = SimulatorConfig(
        tick_ms=int(s.get("tick_ms", 200)),
        trigger_hz=float(s.get("trigger_hz", 1.0)),
        activate_probability=float(s.get("activate_probability", 0.05)),
        deactivate_probability=float(s.get("deactivate_probability", 0.3)),
        seed=_optional_int(s.get("seed")),
    )

    # ---- webhook ----
    webhook: Optional[WebhookConfigData] = None
    w = raw.get("webhook")
    if w and w.get("url"):
        webhook = WebhookConfigData(
            url=str(w["url"]),
            auth_header=w.get("auth_header"),
            timeout_s=float(w.get("timeout_s", 3.0)),
            verify_tls=bool(w.get("verify_tls", True)),
        )

    return AppConfig(
        repository=repository,
        classifier=classifier,
        camera=camera,
        sensors=sensors,
        simulator=simulator,
        webhook=webhook,
    )
