from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer

from packages.core.awake.timers import Timer


class QtTimer(Timer):
    """QTimer adapter; timeouts are delivered on the GUI thread's event loop."""

    def __init__(self, single_shot: bool, on_timeout: Callable[[], None], parent: Optional[QObject] = None) -> None:
        self._timer = QTimer(parent)
        self._timer.setSingleShot(single_shot)
        self._timer.timeout.connect(on_timeout)

    def start(self, interval_ms: int) -> None:
        self._timer.start(interval_ms)

    def stop(self) -> None:
        self._timer.stop()

    def is_active(self) -> bool:
        return self._timer.isActive()


def qt_timer_factory(parent: Optional[QObject] = None) -> Callable[[bool, Callable[[], None]], Timer]:
    def make(single_shot: bool, on_timeout: Callable[[], None]) -> Timer:
        return QtTimer(single_shot, on_timeout, parent)
    return make
