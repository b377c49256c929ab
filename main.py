# main.py
from __future__ import annotations
import os
import sys
import logging

from PySide6.QtWidgets import QApplication, QMessageBox

from app.config import load_settings
from services.history import HistoryStore
from services.typing_engine import TrialController
from ui.main_window import MainWindow
from utils.storage import open_store


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler("app.log", encoding="utf-8"),
        ],
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.critical("Unhandled exception", exc_info=(exctype, value, tb))
        if QApplication.instance() is not None:
            QMessageBox.critical(
                None, "Application Error", f"{exctype.__name__}: {value}"
            )
        sys.exit(1)

    sys.excepthook = excepthook


def main() -> int:
    setup_logging(logging.DEBUG if os.environ.get("WORDTEST_DEBUG") else logging.INFO)

    settings = load_settings(os.environ.get("WORDTEST_SETTINGS"))
    logging.info("Using %s history storage at %s", settings.storage, settings.storage_path)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Word Test")

    history = HistoryStore(
        open_store(settings), key=settings.history_key, limit=settings.history_limit
    )
    controller = TrialController(history, settings)

    win = MainWindow(controller)
    win.show()

    return app.exec()


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
