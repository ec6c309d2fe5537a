"""
Events consumed by the awake state machine, and the queue that serializes them.

Menu clicks and timer expiries all go through one EventQueue so the state
machine never runs re-entrantly: an event posted while another is being
handled waits until that handler returns.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Union

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivateFor:
    code: int


@dataclass(frozen=True)
class ToggleFromUserClick:
    pass


@dataclass(frozen=True)
class Deactivate:
    stop_auto: bool = True


@dataclass(frozen=True)
class ExitRequested:
    pass


@dataclass(frozen=True)
class CountdownExpired:
    generation: int


@dataclass(frozen=True)
class PollTick:
    generation: int


AwakeEvent = Union[ActivateFor, ToggleFromUserClick, Deactivate, ExitRequested, CountdownExpired, PollTick]


class EventQueue:
    def __init__(self, handler: Callable[[AwakeEvent], None]) -> None:
        self._handler = handler
        self._pending: Deque[AwakeEvent] = deque()
        self._draining = False
        self._closed = False

    def post(self, event: AwakeEvent) -> None:
        if self._closed:
            log.debug("Dropping %r, queue closed", event)
            return
        self._pending.append(event)
        if self._draining:
            return
        self._draining = True
        try:
            while self._pending and not self._closed:
                self._handler(self._pending.popleft())
        finally:
            self._draining = False

    def close(self) -> None:
        self._closed = True
        self._pending.clear()

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._pending)
