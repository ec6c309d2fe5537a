"""
Keep-awake state machine.

Modes: INACTIVE, ACTIVE_TIMED, ACTIVE_INDEFINITE, AUTO_ACTIVE, AUTO_IDLE

The machine owns the current mode, the single-shot countdown timer and the
recurring 10s poll timer, and is the only caller of the PowerRequest.
Every operation is posted to an EventQueue and handled one at a time.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

from packages.core.monitor.process_detector import is_any_running
from packages.core.power.request import PowerError, PowerRequest

from .duration import countdown_ms, describe, is_auto
from .events import (
    ActivateFor,
    AwakeEvent,
    CountdownExpired,
    Deactivate,
    EventQueue,
    ExitRequested,
    PollTick,
    ToggleFromUserClick,
)
from .timers import TimerFactory
from .types import AUTO_MODES, POLL_INTERVAL_MS, AwakeConfig, AwakeState, Mode

log = logging.getLogger(__name__)

ProcessChecker = Callable[[Iterable[str]], bool]


class AwakeStateMachine:
    def __init__(
        self,
        config: dict,
        power: PowerRequest,
        timer_factory: TimerFactory,
        process_checker: Optional[ProcessChecker] = None,
    ) -> None:
        self._cfg = self._parse_config(config)
        self._power = power
        self._is_running: ProcessChecker = process_checker or is_any_running
        self._state = AwakeState()

        self._countdown = timer_factory(True, self._on_countdown_timeout)
        self._poll = timer_factory(False, self._on_poll_timeout)
        # Bumped on every start/stop so an expiry queued before a stop is ignored.
        self._countdown_gen = 0
        self._poll_gen = 0

        self._queue = EventQueue(self._dispatch)

        self._transition_cbs: List[Callable[[Mode], None]] = []
        self._error_cbs: List[Callable[[str, bool], None]] = []
        self._exit_cbs: List[Callable[[], None]] = []

    @staticmethod
    def _parse_config(config: dict) -> AwakeConfig:
        return AwakeConfig(
            default_duration=config.get("default_duration", 0),
            keep_display_on=config.get("keep_display_on", False),
            watchlist=frozenset(config.get("watchlist", ())),
        )

    # ------------------------------------------------------------------ callbacks

    def on_transition(self, cb: Callable[[Mode], None]) -> None:
        self._transition_cbs.append(cb)

    def on_error(self, cb: Callable[[str, bool], None]) -> None:
        """cb(message, fatal)"""
        self._error_cbs.append(cb)

    def on_exit(self, cb: Callable[[], None]) -> None:
        self._exit_cbs.append(cb)

    # ------------------------------------------------------------------ queries

    def update_config(self, config: dict) -> None:
        self._cfg = self._parse_config(config)

    def get_state(self) -> AwakeState:
        return AwakeState(mode=self._state.mode, duration=self._state.duration)

    def current_mode(self) -> Mode:
        return self._state.mode

    def is_active(self) -> bool:
        return self._state.mode != "INACTIVE"

    def is_terminated(self) -> bool:
        return self._queue.closed

    # ------------------------------------------------------------------ operations

    def start(self, activate_at_launch: bool) -> None:
        """Enter the initial mode."""
        if activate_at_launch:
            self.activate_for(self._cfg.default_duration)
        else:
            self.deactivate(stop_auto=True)

    def activate_for(self, code: int) -> None:
        self._queue.post(ActivateFor(code))

    def toggle(self) -> None:
        self._queue.post(ToggleFromUserClick())

    def deactivate(self, stop_auto: bool = True) -> None:
        self._queue.post(Deactivate(stop_auto))

    def request_exit(self) -> None:
        self._queue.post(ExitRequested())

    # ------------------------------------------------------------------ timers

    def _on_countdown_timeout(self) -> None:
        self._queue.post(CountdownExpired(self._countdown_gen))

    def _on_poll_timeout(self) -> None:
        self._queue.post(PollTick(self._poll_gen))

    def _start_countdown(self, code: int) -> None:
        self._countdown_gen += 1
        self._countdown.start(countdown_ms(code))

    def _stop_countdown(self) -> None:
        if self._countdown.is_active():
            self._countdown.stop()
        self._countdown_gen += 1

    def _stop_poll(self) -> None:
        if self._poll.is_active():
            self._poll.stop()
            log.info("Auto mode poll stopped")
        self._poll_gen += 1

    # ------------------------------------------------------------------ dispatch

    def _dispatch(self, event: AwakeEvent) -> None:
        if isinstance(event, ActivateFor):
            self._handle_activate(event.code)
        elif isinstance(event, ToggleFromUserClick):
            if self.is_active():
                self._handle_deactivate(stop_auto=True)
            else:
                self._handle_activate(self._cfg.default_duration)
        elif isinstance(event, Deactivate):
            self._handle_deactivate(event.stop_auto)
        elif isinstance(event, ExitRequested):
            self._handle_exit()
        elif isinstance(event, CountdownExpired):
            self._handle_countdown_expired(event)
        elif isinstance(event, PollTick):
            self._handle_poll_tick(event)
        else:
            log.warning("Unknown event %r", event)

    def _handle_activate(self, code: int) -> None:
        if is_auto(code):
            self._enter_auto()
        elif code >= 0:
            self._enter_manual(code)
        else:
            log.warning("Ignoring unsupported duration code %d", code)

    def _enter_manual(self, code: int) -> None:
        target: Mode = "ACTIVE_TIMED" if code > 0 else "ACTIVE_INDEFINITE"
        if target == "ACTIVE_INDEFINITE" and self._state.mode == "ACTIVE_INDEFINITE":
            log.debug("Already awake indefinitely")
            return
        if not self._assert_keep_awake():
            return
        self._stop_poll()
        self._stop_countdown()
        if code > 0:
            self._start_countdown(code)
        self._set_mode(target, code)

    def _enter_auto(self) -> None:
        self._stop_countdown()
        if not self._poll.is_active():
            self._poll_gen += 1
            self._poll.start(POLL_INTERVAL_MS)
            log.info("Auto mode poll started (%d ms)", POLL_INTERVAL_MS)
        self._evaluate_watchlist()

    def _evaluate_watchlist(self) -> None:
        try:
            running = self._is_running(self._cfg.watchlist)
        except Exception:
            log.exception("Watchlist check failed, treating as no match")
            running = False

        if running:
            if not self._assert_keep_awake():
                return
            self._set_mode("AUTO_ACTIVE", -1)
        else:
            self._release()
            self._set_mode("AUTO_IDLE", -1)

    def _handle_poll_tick(self, event: PollTick) -> None:
        if event.generation != self._poll_gen or self._state.mode not in AUTO_MODES:
            log.debug("Ignoring stale poll tick (gen %d)", event.generation)
            return
        self._evaluate_watchlist()

    def _handle_countdown_expired(self, event: CountdownExpired) -> None:
        if event.generation != self._countdown_gen or self._state.mode != "ACTIVE_TIMED":
            log.debug("Ignoring stale countdown expiry (gen %d)", event.generation)
            return
        self._countdown_gen += 1
        self._release()
        self._set_mode("INACTIVE", None)

    def _handle_deactivate(self, stop_auto: bool) -> None:
        self._stop_countdown()
        self._release()
        if stop_auto or not self._poll.is_active():
            self._stop_poll()
            self._set_mode("INACTIVE", None)
        else:
            self._set_mode("AUTO_IDLE", -1)

    def _handle_exit(self) -> None:
        self._handle_deactivate(stop_auto=True)
        log.info("Exit requested")
        self._queue.close()
        self._emit_exit()

    # ------------------------------------------------------------------ power

    def _assert_keep_awake(self) -> bool:
        try:
            self._power.request_keep_awake(self._cfg.keep_display_on)
        except PowerError as e:
            log.error("Keep-awake request failed, shutting down: %s", e)
            self._fail(str(e))
            return False
        return True

    def _release(self) -> None:
        try:
            self._power.release()
        except PowerError as e:
            log.warning("Keep-awake release failed: %s", e)
            self._emit_error(str(e), fatal=False)

    def _fail(self, msg: str) -> None:
        # Mode is left as it was; nothing may fire after this point.
        self._countdown.stop()
        self._poll.stop()
        self._queue.close()
        self._emit_error(msg, fatal=True)
        self._emit_exit()

    # ------------------------------------------------------------------ notify

    def _set_mode(self, mode: Mode, duration: Optional[int]) -> None:
        previous = self._state.mode
        self._state.mode = mode
        self._state.duration = duration
        if previous != mode:
            if duration is not None:
                log.info("Mode %s -> %s (%s)", previous, mode, describe(duration))
            else:
                log.info("Mode %s -> %s", previous, mode)
        for cb in self._transition_cbs:
            cb(mode)

    def _emit_error(self, msg: str, fatal: bool) -> None:
        for cb in self._error_cbs:
            cb(msg, fatal)

    def _emit_exit(self) -> None:
        for cb in self._exit_cbs:
            cb()
