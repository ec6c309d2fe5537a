from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from packages.shared.config import AppConfig
from packages.shared.paths import config_path, ensure_app_dirs

log = logging.getLogger(__name__)


class ConfigStore:
    def __init__(self, path: Optional[Path] = None) -> None:
        if path is None:
            ensure_app_dirs()
            path = config_path()
        self._path = Path(path)

    def load(self) -> AppConfig:
        """Startup load: a missing or broken file is replaced with defaults."""
        cfg = self._read()
        if cfg is None:
            cfg = AppConfig()
            self.save(cfg)
        return cfg

    def reload(self) -> Optional[AppConfig]:
        """Live reload: returns None on a missing or broken file and leaves it alone."""
        return self._read()

    def _read(self) -> Optional[AppConfig]:
        if not self._path.exists():
            return None
        try:
            raw = self._path.read_text(encoding="utf-8")
            data: Any = json.loads(raw)
            return AppConfig.model_validate(data)
        except (OSError, ValueError, ValidationError):
            log.warning("Invalid config at %s", self._path, exc_info=True)
            return None

    def save(self, cfg: AppConfig) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(cfg.model_dump_json(indent=2), encoding="utf-8")

    def path(self) -> str:
        return str(self._path)
