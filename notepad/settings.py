from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict


FONT_FAMILIES = ["Segoe UI", "Georgia", "Times New Roman", "Courier New", "Arial"]


def default_data_dir() -> str:
    override = os.environ.get("NOTEPAD_DATA_DIR", "").strip()
    if override:
        return os.path.abspath(override)
    base_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    return os.path.join(base_dir, "data")


def _clamp_int(value: Any, low: int, high: int, fallback: int) -> int:
    try:
        return max(low, min(high, int(value)))
    except (TypeError, ValueError):
        return fallback


class AppSettings:
    def __init__(self, path: str | None = None) -> None:
        self._path = path or os.path.join(default_data_dir(), "settings.json")
        self._data: Dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        try:
            if os.path.exists(self._path):
                with open(self._path, "r", encoding="utf-8") as f:
                    self._data = json.load(f)
            if not isinstance(self._data, dict):
                self._data = {}
            logging.info("settings loaded: %s", self._path)
        except Exception as exc:
            logging.exception("settings read failed: %s", exc)
            self._data = {}

    def _save(self) -> None:
        try:
            os.makedirs(os.path.dirname(self._path), exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False, indent=2)
        except Exception as exc:
            logging.exception("settings write failed: %s", exc)

    def get_settings(self) -> Dict[str, Any]:
        default = {
            "autosave_enabled": True,
            "autosave_interval_sec": 30,
            "font_size": 16,
            "font_family": FONT_FAMILIES[0],
            "sidebar_visible": True,
            "window_width": 960,
            "window_height": 640,
        }
        stored = self._data.get("settings", {})
        if not isinstance(stored, dict):
            return default
        merged = default.copy()
        for key, value in stored.items():
            if key in merged:
                merged[key] = value
        return self._normalize(merged)

    def _normalize(self, current: Dict[str, Any]) -> Dict[str, Any]:
        current["autosave_enabled"] = bool(current["autosave_enabled"])
        current["autosave_interval_sec"] = _clamp_int(current["autosave_interval_sec"], 5, 3600, 30)
        current["font_size"] = _clamp_int(current["font_size"], 8, 48, 16)
        current["window_width"] = _clamp_int(current["window_width"], 480, 7680, 960)
        current["window_height"] = _clamp_int(current["window_height"], 320, 4320, 640)
        current["sidebar_visible"] = bool(current["sidebar_visible"])
        if current["font_family"] not in FONT_FAMILIES:
            current["font_family"] = FONT_FAMILIES[0]
        return current

    def set_settings(self, values: Dict[str, Any]) -> None:
        if not isinstance(values, dict):
            return
        current = self.get_settings()
        for key in current.keys():
            if key in values:
                current[key] = values[key]
        current = self._normalize(current)
        self._data["settings"] = current
        self._save()
        logging.info("settings saved: autosave=%s interval=%s", current["autosave_enabled"], current["autosave_interval_sec"])
