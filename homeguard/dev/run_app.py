from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication

from homeguard.bootstrap import build_app_system
from homeguard.ui.main_window import MainWindow
from homeguard.ui.theme import APP_QSS


def main() -> None:
    """
    Start the desktop UI.

    Notes
    -----
    - Loads configuration from `config.yaml` by default.
    - Optional CLI usage:
        python -m homeguard.dev.run_app --config path/to/config.yaml
    """
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")

    app = QApplication(sys.argv)
    app.setStyleSheet(APP_QSS)

    config_path = None
    if "--config" in sys.argv:
        i = sys.argv.index("--config")
        if i + 1 < len(sys.argv):
            config_path = sys.argv[i + 1]

    wiring = build_app_system(config_path=config_path)

    win = MainWindow(wiring)
    win.show()

    app.aboutToQuit.connect(wiring.shutdown)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
