"""Key-value storage for the clean history."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from reclaim.utils import xdg_data_home

log = logging.getLogger(__name__)

_DATA_DIR = xdg_data_home() / "reclaim"

HISTORY_FILE = _DATA_DIR / "history.json"


class HistoryStore(ABC):
    """Reads and writes the raw list of history records."""

    @abstractmethod
    def read(self) -> list[Any]:
        """Return stored records, or an empty list if nothing usable is stored."""

    @abstractmethod
    def write(self, records: list[dict[str, Any]]) -> None:
        """Replace the stored records."""


class JsonHistoryStore(HistoryStore):
    """History persisted as ``{"history": [...]}`` in a JSON file."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path or HISTORY_FILE

    def read(self) -> list[Any]:
        path = self.path
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            log.warning("Could not load history from %s: %s", path, e)
            return []
        # Older clients stored the bare list.
        if isinstance(data, list):
            return data
        if isinstance(data, dict) and isinstance(data.get("history"), list):
            return data["history"]
        log.warning("Ignoring history file with unexpected shape: %s", path)
        return []

    def write(self, records: list[dict[str, Any]]) -> None:
        path = self.path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps({"history": records}, indent=2) + "\n", encoding="utf-8")
        except OSError:
            log.exception("Failed to save history file: %s", path)
