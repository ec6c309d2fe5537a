from __future__ import annotations

from typing import Dict, Literal, Protocol, Tuple

from packages.shared.paths import APP_NAME

from .state_machine import AwakeStateMachine
from .types import Mode

IconKind = Literal["sleeping_white", "awake_white", "awake_blue", "sleeping_blue"]

PRESENTATION: Dict[Mode, Tuple[IconKind, str]] = {
    "INACTIVE": ("sleeping_white", f"{APP_NAME}: sleep allowed"),
    "ACTIVE_TIMED": ("awake_white", f"{APP_NAME}: sleep not allowed!"),
    "ACTIVE_INDEFINITE": ("awake_white", f"{APP_NAME}: sleep not allowed!"),
    "AUTO_ACTIVE": ("awake_blue", f"{APP_NAME}: (auto) sleep not allowed!"),
    "AUTO_IDLE": ("sleeping_blue", f"{APP_NAME}: (auto) sleep allowed"),
}


class TrayView(Protocol):
    def set_icon(self, icon: IconKind) -> None:
        ...

    def set_tooltip(self, text: str) -> None:
        ...

    def show_error(self, message: str, fatal: bool) -> None:
        ...

    def quit(self) -> None:
        ...


class PresentationAdapter:
    """Mirrors the machine's mode onto a tray view and forwards user actions to it.

    Holds no state of its own; "is it active" questions go to the machine.
    """

    def __init__(self, machine: AwakeStateMachine, view: TrayView) -> None:
        self._machine = machine
        self._view = view
        machine.on_transition(self.on_transition)
        machine.on_error(self.on_error)
        machine.on_exit(self._view.quit)

    def on_transition(self, mode: Mode) -> None:
        icon, tooltip = PRESENTATION[mode]
        self._view.set_icon(icon)
        self._view.set_tooltip(tooltip)

    def on_error(self, message: str, fatal: bool) -> None:
        self._view.show_error(message, fatal)

    # user-facing triggers

    def on_duration_selected(self, code: int) -> None:
        self._machine.activate_for(code)

    def on_primary_click(self) -> None:
        self._machine.toggle()

    def on_exit_selected(self) -> None:
        self._machine.request_exit()
