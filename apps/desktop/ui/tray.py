"""
System tray front end: icon, tooltip, context menu and error dialogs.
"""

from __future__ import annotations

import logging
from typing import List

from PySide6.QtCore import QFileSystemWatcher, QObject, QTimer, QUrl
from PySide6.QtGui import QAction, QDesktopServices, QGuiApplication
from PySide6.QtWidgets import QApplication, QMenu, QMessageBox, QSystemTrayIcon

from packages.shared.config import AppConfig
from packages.shared.paths import APP_NAME
from packages.shared.store import ConfigStore
from packages.core.awake.duration import AUTO, describe, menu_order
from packages.core.awake.presentation import IconKind, PresentationAdapter
from packages.core.awake.state_machine import AwakeStateMachine
from packages.core.power.request import create_power_request
from packages.core.notify.notifier import Notifier, create_notifier

from .icons import make_icons
from .qt_timer import qt_timer_factory

log = logging.getLogger(__name__)


def taskbar_on_top() -> bool:
    screen = QGuiApplication.primaryScreen()
    if screen is None:
        return False
    return screen.availableGeometry().top() > screen.geometry().top()


class TrayApp(QObject):
    """Owns the tray icon and wires it to the awake state machine."""

    def __init__(self, store: ConfigStore) -> None:
        super().__init__()
        self.store = store
        self.cfg: AppConfig = self.store.load()
        self.notifier: Notifier = create_notifier()
        self._exit_code = 0

        self._icons = make_icons()
        self.tray = QSystemTrayIcon(self._icons["sleeping_white"], self)
        self.tray.setToolTip(APP_NAME)

        self.machine = AwakeStateMachine(
            config=self.cfg.to_awake_config(),
            power=create_power_request(),
            timer_factory=qt_timer_factory(self),
        )
        self.adapter = PresentationAdapter(self.machine, self)

        self._menu = self._build_menu()
        self.tray.setContextMenu(self._menu)
        self.tray.activated.connect(self._on_activated)

        self._watcher = QFileSystemWatcher([self.store.path()], self)
        self._watcher.fileChanged.connect(self._on_config_changed)

    def start(self) -> None:
        self.tray.show()
        self.machine.start(self.cfg.activate_at_launch)
        if self.cfg.show_settings_at_launch:
            self._open_settings()

    @property
    def exit_code(self) -> int:
        return self._exit_code

    # ------------------------------------------------------------------ menu

    def _build_menu(self) -> QMenu:
        menu = QMenu()

        codes: List[int] = list(self.cfg.durations)
        if AUTO not in codes:
            codes.append(AUTO)

        activate_menu = menu.addMenu("&Stay awake for")
        for code in menu_order(codes, taskbar_on_top()):
            action = QAction(describe(code), activate_menu)
            action.triggered.connect(lambda _checked=False, c=code: self.adapter.on_duration_selected(c))
            activate_menu.addAction(action)

        menu.addSeparator()

        settings_action = menu.addAction("&Settings...")
        settings_action.triggered.connect(self._open_settings)

        about_action = menu.addAction("&About...")
        about_action.triggered.connect(self._show_about)

        exit_action = menu.addAction("E&xit")
        exit_action.triggered.connect(self.adapter.on_exit_selected)
        return menu

    def _on_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self.adapter.on_primary_click()

    def _open_settings(self) -> None:
        log.info("Opening settings file %s", self.store.path())
        if not QDesktopServices.openUrl(QUrl.fromLocalFile(self.store.path())):
            self.notifier.notify(APP_NAME, f"Edit settings in {self.store.path()}")

    def _show_about(self) -> None:
        QMessageBox.about(
            None,
            f"About {APP_NAME}",
            f"{APP_NAME}\n\nKeeps your computer awake for a while, "
            "indefinitely, or while selected apps are running.",
        )

    def _on_config_changed(self, path: str, retries: int = 5) -> None:
        # Editors often replace the file, which drops it from the watcher.
        if path not in self._watcher.files() and not self._watcher.addPath(path):
            if retries > 0:
                QTimer.singleShot(500, lambda: self._on_config_changed(path, retries - 1))
            else:
                log.warning("Stopped watching %s; restart to pick up changes", path)
            return
        cfg = self.store.reload()
        if cfg is None:
            log.warning("Keeping current settings; %s is not a valid config yet", path)
            return
        self.cfg = cfg
        self.machine.update_config(self.cfg.to_awake_config())
        self._rebuild_menu()
        log.info("Config reloaded from %s", path)

    def _rebuild_menu(self) -> None:
        old = self._menu
        self._menu = self._build_menu()
        self.tray.setContextMenu(self._menu)
        old.deleteLater()

    # ------------------------------------------------------------------ TrayView

    def set_icon(self, icon: IconKind) -> None:
        self.tray.setIcon(self._icons[icon])

    def set_tooltip(self, text: str) -> None:
        self.tray.setToolTip(text)

    def show_error(self, message: str, fatal: bool) -> None:
        if fatal:
            self._exit_code = 1
            QMessageBox.critical(None, APP_NAME, message)
        else:
            self.notifier.notify(APP_NAME, message)
            QMessageBox.warning(None, APP_NAME, message)

    def quit(self) -> None:
        self.tray.hide()
        code = self._exit_code
        # Deferred so an exit requested before the event loop runs still lands.
        QTimer.singleShot(0, lambda: QApplication.exit(code))
