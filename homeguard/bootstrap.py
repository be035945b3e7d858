from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from homeguard.core.config.yaml_config import AppConfig, load_app_config
from homeguard.core.state.json_repository import JsonFileSecurityRepository
from homeguard.core.state.memory_repository import InMemorySecurityRepository
from homeguard.core.state.repository import SecurityRepository
from homeguard.core.state.status_history import StatusHistory
from homeguard.domain.models import Sensor
from homeguard.image.fake_classifier import FakeImageClassifier
from homeguard.notification.notification_thread import NotificationWorkerThread
from homeguard.notification.webhook_listener import WebhookStatusListener
from homeguard.notification.webhook_notifier import WebhookConfig, WebhookNotifier
from homeguard.services.security_service import SecurityService
from simulator.core.simulator_engine import SimulatorEngine
from simulator.sensors.camera import CameraModel
from simulator.sensors.trigger import RandomSensorTrigger

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppWiring:
    """Everything the UI layer and the headless simulator need to run the system."""
    config: AppConfig
    repository: SecurityRepository
    service: SecurityService
    history: StatusHistory
    camera: CameraModel
    simulator: SimulatorEngine
    notifier: Optional[NotificationWorkerThread] = None

    def shutdown(self) -> None:
        if self.notifier is not None:
            self.notifier.stop()


def build_repository(cfg: AppConfig) -> SecurityRepository:
    if cfg.repository.backend == "json":
        return JsonFileSecurityRepository(path=cfg.repository.path)
    return InMemorySecurityRepository()


def seed_sensors(repository: SecurityRepository, cfg: AppConfig) -> None:
    """Register configured sensors when the repository holds none."""
    if repository.get_sensors():
        return
    for seed in cfg.sensors:
        repository.add_sensor(Sensor(name=seed.name, sensor_type=seed.type))
    if cfg.sensors:
        log.info("Seeded %d sensor(s) from config", len(cfg.sensors))


def build_notifier(cfg: AppConfig) -> Optional[NotificationWorkerThread]:
    if cfg.webhook is None:
        return None

    auth_header = cfg.webhook.auth_header
    if auth_header and not auth_header.startswith("Bearer "):
        auth_header = f"Bearer {auth_header}"

    return NotificationWorkerThread(
        notifiers=[
            WebhookNotifier(
                WebhookConfig(
                    url=cfg.webhook.url,
                    auth_header=auth_header,
                    timeout_s=cfg.webhook.timeout_s,
                    verify_tls=cfg.webhook.verify_tls,
                )
            )
        ]
    )


def build_simulator(cfg: AppConfig, service: SecurityService, camera: CameraModel) -> SimulatorEngine:
    trigger = RandomSensorTrigger(
        name="sensor-trigger",
        hz=cfg.simulator.trigger_hz,
        activate_probability=cfg.simulator.activate_probability,
        deactivate_probability=cfg.simulator.deactivate_probability,
        seed=cfg.simulator.seed,
    )
    return SimulatorEngine(service=service, models=[trigger, camera])


def build_app_system(config_path: Optional[str] = None, cfg: Optional[AppConfig] = None) -> AppWiring:
    cfg = cfg or load_app_config(config_path)

    # --- STATE ---
    repository = build_repository(cfg)
    seed_sensors(repository, cfg)

    # --- CORE ---
    classifier = FakeImageClassifier(
        threat_probability=cfg.classifier.threat_probability,
        seed=cfg.classifier.seed,
    )
    service = SecurityService(
        repository=repository,
        classifier=classifier,
        confidence_threshold=cfg.classifier.confidence_threshold,
    )

    # --- LISTENERS ---
    history = StatusHistory()
    service.add_listener(history)

    notifier = build_notifier(cfg)
    if notifier is not None:
        notifier.start()
        service.add_listener(WebhookStatusListener(reader=service, worker=notifier, history=history))

    # --- SIMULATION ---
    camera = CameraModel(
        name=cfg.camera.name,
        hz=cfg.camera.hz,
        width=cfg.camera.width,
        height=cfg.camera.height,
        seed=cfg.simulator.seed,
    )
    simulator = build_simulator(cfg, service, camera)

    return AppWiring(
        config=cfg,
        repository=repository,
        service=service,
        history=history,
        camera=camera,
        simulator=simulator,
        notifier=notifier,
    )
