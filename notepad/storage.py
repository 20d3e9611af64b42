from __future__ import annotations

import logging
import os

from notepad.errors import StorageUnavailable


class FileBlobStore:
    """Key-value blob store backed by one JSON file per key in a directory."""

    def __init__(self, data_dir: str) -> None:
        self._data_dir = data_dir

    def path_for(self, key: str) -> str:
        return os.path.join(self._data_dir, f"{key}.json")

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            if not os.path.exists(path):
                return None
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as exc:
            logging.exception("blob read failed: %s", exc)
            raise StorageUnavailable(f"cannot read {path}") from exc

    def write(self, key: str, blob: str) -> None:
        path = self.path_for(key)
        tmp_path = path + ".tmp"
        try:
            os.makedirs(self._data_dir, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(blob)
            os.replace(tmp_path, path)
        except OSError as exc:
            logging.exception("blob write failed: %s", exc)
            raise StorageUnavailable(f"cannot write {path}") from exc
