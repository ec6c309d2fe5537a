from __future__ import annotations

from typing import Callable, List

import pytest

from packages.core.awake.state_machine import AwakeStateMachine
from packages.core.awake.timers import Timer
from packages.core.power.request import PowerError, PowerRequest


class FakeTimer(Timer):
    def __init__(self, single_shot: bool, on_timeout: Callable[[], None]) -> None:
        self.single_shot = single_shot
        self._on_timeout = on_timeout
        self.active = False
        self.interval_ms = None
        self.starts = 0

    def start(self, interval_ms: int) -> None:
        self.active = True
        self.interval_ms = interval_ms
        self.starts += 1

    def stop(self) -> None:
        self.active = False

    def is_active(self) -> bool:
        return self.active

    def fire(self) -> None:
        assert self.active, "timer fired while stopped"
        if self.single_shot:
            self.active = False
        self._on_timeout()


class FakePower(PowerRequest):
    def __init__(self) -> None:
        self.calls: List[str] = []
        self.fail_request = False
        self.fail_release = False

    def request_keep_awake(self, keep_display_on: bool) -> None:
        if self.fail_request:
            raise PowerError(0x80000041)
        self.calls.append("display" if keep_display_on else "request")

    def release(self) -> None:
        if self.fail_release:
            raise PowerError(0x80000000)
        self.calls.append("release")

    @property
    def requests(self) -> int:
        return sum(1 for c in self.calls if c in ("request", "display"))

    @property
    def releases(self) -> int:
        return self.calls.count("release")


class FakeProcesses:
    def __init__(self) -> None:
        self.running: set[str] = set()
        self.checks = 0

    def __call__(self, names) -> bool:
        self.checks += 1
        return not self.running.isdisjoint(set(names))


class Harness:
    def __init__(self, config: dict) -> None:
        self.power = FakePower()
        self.processes = FakeProcesses()
        self.timers: List[FakeTimer] = []
        self.transitions: List[str] = []
        self.errors: List[tuple] = []
        self.exits = 0

        def factory(single_shot: bool, on_timeout: Callable[[], None]) -> Timer:
            t = FakeTimer(single_shot, on_timeout)
            self.timers.append(t)
            return t

        self.machine = AwakeStateMachine(
            config=config,
            power=self.power,
            timer_factory=factory,
            process_checker=self.processes,
        )
        self.machine.on_transition(self.transitions.append)
        self.machine.on_error(lambda msg, fatal: self.errors.append((msg, fatal)))
        self.machine.on_exit(self._count_exit)

    def _count_exit(self) -> None:
        self.exits += 1

    @property
    def countdown(self) -> FakeTimer:
        return self.timers[0]

    @property
    def poll(self) -> FakeTimer:
        return self.timers[1]


@pytest.fixture
def make_harness():
    def make(**config) -> Harness:
        config.setdefault("default_duration", 15)
        config.setdefault("watchlist", frozenset({"notepad"}))
        return Harness(config)
    return make
