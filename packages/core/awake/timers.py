from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable


class Timer(ABC):
    """Timer driven by the host event loop. Timeouts run on the loop's thread."""

    @abstractmethod
    def start(self, interval_ms: int) -> None:
        """(Re)start the timer. Restarting resets the interval."""
        ...

    @abstractmethod
    def stop(self) -> None:
        ...

    @abstractmethod
    def is_active(self) -> bool:
        ...


# (single_shot, on_timeout) -> Timer
TimerFactory = Callable[[bool, Callable[[], None]], Timer]
