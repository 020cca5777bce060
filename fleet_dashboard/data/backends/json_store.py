from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from fleet_dashboard.config import get_config
from fleet_dashboard.logging import get_logger

from .memory_store import InMemoryStateStore


class JsonFileStateStore(InMemoryStateStore):
    """
    State persisted to a JSON file so it survives across sessions.
    - Loads the file once at construction; a missing or unreadable file starts empty.
    - Rewrites the whole file on every set().
    """

    def __init__(self, path: str | Path = None) -> None:
        if path is None:
            path = get_config().state_file
        self.path = Path(path)
        self.logger = get_logger(__name__)
        super().__init__(self._load())

    def _load(self) -> dict:
        if not self.path.exists():
            self.logger.info(f"No saved state at {self.path}, starting empty")
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self.logger.warning(f"Ignoring unreadable state file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            self.logger.warning(f"Ignoring state file {self.path}: expected a JSON object")
            return {}
        return data

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.loads(json.dumps(value))
        self._save()
        self._notify(key)

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
        tmp.replace(self.path)
        self.logger.debug(f"Saved state to {self.path}")
