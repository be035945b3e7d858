from __future__ import annotations

import logging
import sys
import time
from typing import List, Optional

from homeguard.bootstrap import build_app_system
from homeguard.domain.models import ArmingStatus

log = logging.getLogger(__name__)


def _arg(argv: List[str], flag: str) -> Optional[str]:
    if flag in argv:
        i = argv.index(flag)
        if i + 1 < len(argv):
            return argv[i + 1]
    return None


def main(argv: Optional[List[str]] = None) -> None:
    """
    Run the security controller headless with simulated sensors and camera.

    Notes
    -----
    Optional CLI usage:
        python -m simulator.run_simulator --config config.yaml --arm ARMED_AWAY --seconds 60
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")

    wiring = build_app_system(config_path=_arg(argv, "--config"))
    service = wiring.service

    arm = _arg(argv, "--arm")
    if arm:
        service.set_arming_status(ArmingStatus(arm.upper()))

    seconds = _arg(argv, "--seconds")
    deadline = time.monotonic() + float(seconds) if seconds else None
    tick_s = wiring.config.simulator.tick_ms / 1000.0

    log.info(
        "Simulating %d sensor(s); arming=%s alarm=%s",
        len(service.get_sensors()),
        service.get_arming_status().value,
        service.get_alarm_status().value,
    )
    try:
        while deadline is None or time.monotonic() < deadline:
            wiring.simulator.step()
            time.sleep(tick_s)
    except KeyboardInterrupt:
        log.info("Interrupted")
    finally:
        wiring.shutdown()
        log.info("Final state: arming=%s alarm=%s", service.get_arming_status().value, service.get_alarm_status().value)


if __name__ == "__main__":
    main()
