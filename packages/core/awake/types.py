from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

Mode = Literal["INACTIVE", "ACTIVE_TIMED", "ACTIVE_INDEFINITE", "AUTO_ACTIVE", "AUTO_IDLE"]

MANUAL_MODES: tuple[Mode, ...] = ("ACTIVE_TIMED", "ACTIVE_INDEFINITE")
AUTO_MODES: tuple[Mode, ...] = ("AUTO_ACTIVE", "AUTO_IDLE")

# Fixed; scanning the process list more often costs more than it gains.
POLL_INTERVAL_MS = 10 * 1000


@dataclass(frozen=True)
class AwakeConfig:
    default_duration: int = 0
    keep_display_on: bool = False
    watchlist: frozenset[str] = field(default_factory=frozenset)


@dataclass
class AwakeState:
    mode: Mode = "INACTIVE"
    duration: Optional[int] = None  # code that produced the current mode, None when INACTIVE
