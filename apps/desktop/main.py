import signal
import sys
from PySide6.QtWidgets import QApplication, QSystemTrayIcon

from packages.shared.paths import APP_NAME, ensure_app_dirs
from packages.shared.store import ConfigStore
from packages.core.logging_ import setup_logging
from .ui.tray import TrayApp


def main() -> None:
    ensure_app_dirs()
    setup_logging()

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    # The tray icon is the whole UI; dialogs closing must not end the app.
    app.setQuitOnLastWindowClosed(False)

    if not QSystemTrayIcon.isSystemTrayAvailable():
        print("No system tray available, exiting.", file=sys.stderr)
        sys.exit(1)

    tray = TrayApp(ConfigStore())
    tray.start()

    # Handle Ctrl+C gracefully (works on Unix/Linux/Mac)
    def signal_handler(sig, frame):
        print("\nReceived interrupt signal (Ctrl+C), shutting down...")
        tray.adapter.on_exit_selected()

    if hasattr(signal, 'SIGINT'):
        signal.signal(signal.SIGINT, signal_handler)

    code = app.exec()
    sys.exit(code or tray.exit_code)


if __name__ == "__main__":
    main()
