"""File-backed key-value store standing in for browser local storage."""

import json
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

# Keys the client keeps locally
BACKUP_KEY = "cricket_app_backup"
SELECTED_TAB_KEY = "cricket_app_selected_tab"
PENDING_SYNC_KEY = "cricket_app_pending_sync"


class LocalStore:
    """String keys to string values, persisted as one JSON file.

    Mirrors the localStorage contract: values are strings and callers
    serialize structured data themselves.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Local store {self.path} is corrupt, starting empty: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp_path, self.path)

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def clear(self) -> None:
        self._write({})

    def keys(self) -> list[str]:
        return list(self._read())

    def usage_bytes(self) -> int:
        """Approximate size of stored data, counted like the settings dialog does."""
        return sum(len(k) + len(v) for k, v in self._read().items())
