"""JSON-backed settings and runtime configuration."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from reclaim.utils import xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "reclaim"
_SETTINGS_FILE = "settings.json"

ROOT_ENV = "RECLAIM_ROOT"
ALLOW_DELETE_ENV = "RECLAIM_ALLOW_DELETE"

_TRUTHY = {"1", "true", "yes", "on"}


class Settings:
    """Persistent settings backed by a JSON file.

    Uses dot-notation keys for nested access:
        settings.get("scan.root")  # reads data["scan"]["root"]
        settings.set("clean.allow_delete", True)  # writes + saves
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or (xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE)
        self._data: dict[str, Any] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any) -> None:
        """Set a value by dot-notation key and persist to disk."""
        parts = key.split(".")
        node = self._data
        for part in parts[:-1]:
            if part not in node or not isinstance(node[part], dict):
                node[part] = {}
            node = node[part]
        node[parts[-1]] = value
        self._save()

    def _load(self) -> None:
        """Load settings from disk, gracefully handling errors."""
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self._path, e)
            return
        if isinstance(data, dict):
            self._data = data
        else:
            log.warning("Ignoring settings file that is not an object: %s", self._path)

    def _save(self) -> None:
        """Persist settings to disk."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(self._data, indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
        except OSError as e:
            log.warning("Could not save settings to %s: %s", self._path, e)


@dataclass(frozen=True)
class ReclaimConfig:
    """Resolved runtime configuration."""

    root: Path
    allow_delete: bool = False
    history_path: Path | None = None


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def load_config(
    root: Path | str | None = None,
    allow_delete: bool | None = None,
    settings: Settings | None = None,
) -> ReclaimConfig:
    """Resolve configuration.

    Explicit arguments win over the environment (``RECLAIM_ROOT``,
    ``RECLAIM_ALLOW_DELETE``), which wins over the settings file
    (``scan.root``, ``clean.allow_delete``, ``history.path``). Deletion is
    disabled unless something turns it on.
    """
    settings = settings or Settings()

    if root is None:
        root = os.environ.get(ROOT_ENV) or settings.get("scan.root") or Path.cwd()

    if allow_delete is None:
        env = os.environ.get(ALLOW_DELETE_ENV)
        if env is not None:
            allow_delete = _as_bool(env)
        else:
            allow_delete = _as_bool(settings.get("clean.allow_delete", False))

    history_path = settings.get("history.path")

    return ReclaimConfig(
        root=Path(root).expanduser(),
        allow_delete=allow_delete,
        history_path=Path(history_path).expanduser() if history_path else None,
    )
