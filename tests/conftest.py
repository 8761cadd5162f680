"""Shared test fixtures."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

import reclaim.storage as storage
from reclaim.utils import MB


@pytest.fixture
def isolate_storage(tmp_path, monkeypatch):
    """Redirect history storage to a temp directory."""
    data_dir = tmp_path / "reclaim_data"
    data_dir.mkdir()
    history_file = data_dir / "history.json"
    monkeypatch.setattr(storage, "HISTORY_FILE", history_file)
    monkeypatch.setattr(storage, "_DATA_DIR", data_dir)
    return history_file


@pytest.fixture
def make_file():
    """Create a sparse file of the given size, with parent directories."""

    def _make(path: Path, size: int = 0) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.truncate(size)
        return path

    return _make


@pytest.fixture
def storage_root(tmp_path, make_file):
    """Root with a 10 MB log, a 50 MB video and a second copy of the video."""
    root = tmp_path / "storage"
    make_file(root / "logs" / "a.log", 10 * MB)
    make_file(root / "b.mp4", 50 * MB)
    make_file(root / "d" / "b.mp4", 50 * MB)
    make_file(root / "notes.txt", 1024)
    return root


@pytest.fixture
def undecodable_root(tmp_path):
    """Root holding ``bad\\xffname.log`` (not valid UTF-8) next to ``ok.log``."""
    root = tmp_path / "odd"
    root.mkdir()
    try:
        with open(os.path.join(os.fsencode(root), b"bad\xffname.log"), "wb") as f:
            f.truncate(2048)
    except OSError:
        pytest.skip("filesystem rejects non-UTF-8 names")
    with open(root / "ok.log", "wb") as f:
        f.truncate(1024)
    return root
