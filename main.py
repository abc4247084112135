import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from qwerty_learner.ui.main_window import create_main_window

LOG_LEVEL_ENV_VAR = "QWERTY_LOG_LEVEL"


def _configure_logging() -> None:
    level_name = str(os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING")).strip().upper()
    level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    _configure_logging()
    app = QApplication(sys.argv)
    window = create_main_window()
    window.resize(640, 280)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
