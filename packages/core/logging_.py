from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from packages.shared.paths import log_path, ensure_app_dirs


def setup_logging(level: int = logging.INFO) -> None:
    ensure_app_dirs()
    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        return

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")

    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    fh = RotatingFileHandler(str(log_path()), maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Process scans run on every poll tick; keep them quiet even at DEBUG.
    logging.getLogger("packages.core.monitor.process_detector").setLevel(logging.INFO)
