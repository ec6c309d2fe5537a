from __future__ import annotations

import os
import platform
from pathlib import Path

APP_NAME = "Caffeinated"


def app_data_dir() -> Path:
    """%APPDATA%\\Caffeinated on Windows, $XDG_CONFIG_HOME/caffeinated elsewhere."""
    if platform.system() == "Windows":
        base = os.environ.get("APPDATA") or str(Path.home())
        return Path(base) / APP_NAME
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_NAME.lower()


def config_path() -> Path:
    return app_data_dir() / "config.json"


def log_path() -> Path:
    return app_data_dir() / "logs" / "app.log"


def ensure_app_dirs() -> None:
    log_path().parent.mkdir(parents=True, exist_ok=True)
