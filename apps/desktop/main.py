import logging
import signal
import sys
from PySide6.QtWidgets import QApplication

from packages.shared.paths import ensure_app_dirs
from packages.core.logging_ import setup_logging
from .ui.window import MainWindow


def main() -> None:
    ensure_app_dirs()
    setup_logging(logging.DEBUG if "--debug" in sys.argv else None)

    app = QApplication(sys.argv)
    win = MainWindow()
    win.show()

    # Ctrl+C closes the window, which releases pinning and the capture block
    def release_and_quit(sig, frame):
        logging.getLogger(__name__).info("Interrupted, releasing protections")
        win.close()

    if hasattr(signal, "SIGINT"):
        signal.signal(signal.SIGINT, release_and_quit)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
