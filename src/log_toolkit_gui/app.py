import faulthandler
import sys

from PySide6.QtWidgets import QApplication

from log_toolkit_gui.gui.main_window import MainWindow
from log_toolkit_gui.logging_config import setup_logging
from log_toolkit_gui.services.config_service import ConfigService


def run() -> None:
    faulthandler.enable()
    config = ConfigService()
    setup_logging(config.load().log_level)

    app = QApplication(sys.argv)
    app.setApplicationName("Log Toolkit GUI")

    w = MainWindow(config_service=config)
    w.show()

    raise SystemExit(app.exec())
