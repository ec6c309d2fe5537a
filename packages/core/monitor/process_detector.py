from __future__ import annotations

import logging
import os
from typing import Iterable

import psutil

log = logging.getLogger(__name__)


def running_process_names() -> set[str]:
    """Names of all running processes.

    Windows names are also reported without the ``.exe`` suffix so that a
    watchlist entry like ``notepad`` matches ``notepad.exe``. Case is kept.
    """
    names: set[str] = set()
    for p in psutil.process_iter(attrs=["name"]):
        try:
            n = p.info.get("name")
            if n:
                n = str(n)
                names.add(n)
                stem, ext = os.path.splitext(n)
                if stem and ext.lower() == ".exe":
                    names.add(stem)
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
    return names


def is_any_running(names: Iterable[str]) -> bool:
    wanted = set(names)
    if not wanted:
        return False
    try:
        running = running_process_names()
    except (psutil.Error, OSError):
        log.warning("Process enumeration failed, treating watchlist as not running", exc_info=True)
        return False
    return not running.isdisjoint(wanted)
