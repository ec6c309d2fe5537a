from __future__ import annotations

from typing import List
from pydantic import BaseModel, Field, field_validator


class AppConfig(BaseModel):
    durations: List[int] = Field(default_factory=lambda: [-1, 0, 15, 30, 60, 120, 240])
    default_duration: int = 0
    activate_at_launch: bool = False
    show_settings_at_launch: bool = False
    keep_monitor_on: bool = False
    auto_app_list: str = ""

    @field_validator("durations")
    @classmethod
    def _check_durations(cls, v: List[int]) -> List[int]:
        seen: List[int] = []
        for code in v:
            if code < -1:
                raise ValueError(f"invalid duration code: {code}")
            if code not in seen:
                seen.append(code)
        return seen

    @field_validator("default_duration")
    @classmethod
    def _check_default(cls, v: int) -> int:
        if v < -1:
            raise ValueError(f"invalid duration code: {v}")
        return v

    def watchlist(self) -> frozenset[str]:
        # Names are matched exactly as the OS reports them, so no strip/lower here.
        return frozenset(line for line in self.auto_app_list.splitlines() if line)

    def to_awake_config(self) -> dict:
        return {
            "default_duration": self.default_duration,
            "keep_display_on": self.keep_monitor_on,
            "watchlist": self.watchlist(),
        }
