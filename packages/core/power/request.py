"""
Sleep inhibition through the OS power-request primitive.

On Windows this is SetThreadExecutionState: one call takes the full flag set
and keeps it asserted (ES_CONTINUOUS) until the next call replaces it. A
return value of 0 means the call failed.

Other platforms get a no-op backend so the tray app and state machine keep
working without actually inhibiting sleep.
"""

from __future__ import annotations

import ctypes
import logging
import platform
from abc import ABC, abstractmethod
from typing import Any, Optional

log = logging.getLogger(__name__)

ES_CONTINUOUS = 0x80000000
ES_SYSTEM_REQUIRED = 0x00000001
ES_DISPLAY_REQUIRED = 0x00000002
ES_AWAYMODE_REQUIRED = 0x00000040


class PowerError(Exception):
    """The power-request primitive reported failure."""

    def __init__(self, flags: int, message: Optional[str] = None) -> None:
        self.flags = flags
        super().__init__(message or f"SetThreadExecutionState(0x{flags:08X}) failed")


class PowerRequest(ABC):
    """Interface for asserting and clearing keep-awake. Both calls are idempotent."""

    @abstractmethod
    def request_keep_awake(self, keep_display_on: bool) -> None:
        """Assert system-required (and display-required if asked). Raises PowerError."""
        ...

    @abstractmethod
    def release(self) -> None:
        """Clear all inhibition flags. Raises PowerError."""
        ...


def keep_awake_flags(keep_display_on: bool) -> int:
    flags = ES_CONTINUOUS | ES_SYSTEM_REQUIRED | ES_AWAYMODE_REQUIRED
    if keep_display_on:
        flags |= ES_DISPLAY_REQUIRED
    return flags


class ExecutionStatePowerRequest(PowerRequest):
    def __init__(self, kernel32: Any = None) -> None:
        if kernel32 is None:
            kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
            kernel32.SetThreadExecutionState.argtypes = [ctypes.c_uint32]
            kernel32.SetThreadExecutionState.restype = ctypes.c_uint32
        self._kernel32 = kernel32

    def _apply(self, flags: int) -> None:
        previous = self._kernel32.SetThreadExecutionState(flags)
        if not previous:
            raise PowerError(flags)
        log.debug("Execution state 0x%08X -> 0x%08X", previous, flags)

    def request_keep_awake(self, keep_display_on: bool) -> None:
        self._apply(keep_awake_flags(keep_display_on))

    def release(self) -> None:
        self._apply(ES_CONTINUOUS)


class NoopPowerRequest(PowerRequest):
    def request_keep_awake(self, keep_display_on: bool) -> None:
        pass

    def release(self) -> None:
        pass


def create_power_request() -> PowerRequest:
    if platform.system() == "Windows":
        return ExecutionStatePowerRequest()
    log.warning("Sleep inhibition is not supported on %s; running without it", platform.system())
    return NoopPowerRequest()
