from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class AutosaveConfig:
    enabled: bool = True
    interval_sec: int = 30

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> "AutosaveConfig":
        return cls(
            enabled=bool(settings.get("autosave_enabled", True)),
            interval_sec=int(settings.get("autosave_interval_sec", 30)),
        )


class AutosaveScheduler:
    """Turns a fast tick into one autosave request per interval."""

    def __init__(self, config: AutosaveConfig | None = None) -> None:
        self._config = config or AutosaveConfig()
        self._last_fire: float | None = None

    def update(self, now: float | None = None) -> bool:
        if now is None:
            now = time.time()
        if not self._config.enabled or self._config.interval_sec <= 0:
            return False
        if self._last_fire is None:
            self._last_fire = now
            return False
        if now - self._last_fire >= self._config.interval_sec:
            self._last_fire = now
            return True
        return False
