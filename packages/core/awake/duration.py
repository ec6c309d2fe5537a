from __future__ import annotations

from typing import Iterable, List

AUTO = -1
INDEFINITE = 0


def is_auto(code: int) -> bool:
    return code == AUTO


def is_indefinite(code: int) -> bool:
    return code == INDEFINITE


def describe(code: int) -> str:
    if code == AUTO:
        return "Auto (App list)"
    if code == INDEFINITE:
        return "Indefinitely"
    # Truncating division, so negative codes keep their sign.
    sign = -1 if code < 0 else 1
    hours, mins = divmod(abs(code), 60)
    hours, mins = sign * hours, sign * mins
    if mins != 0:
        return f"{mins} minutes"
    if hours == 1:
        return "1 hour"
    return f"{hours} hours"


def countdown_ms(code: int) -> int:
    """Countdown length for a positive code; 0 for auto/indefinite."""
    return code * 60 * 1000 if code > 0 else 0


def menu_order(codes: Iterable[int], taskbar_on_top: bool) -> List[int]:
    """Shorter durations sit closest to the tray icon."""
    return sorted(codes, reverse=not taskbar_on_top)

