"""Tests for simulated and real cleaning."""

from __future__ import annotations

import os

import pytest

from reclaim.core.cleaner import clean, select_files
from reclaim.core.dedup import deduplicate
from reclaim.core.sources import LocalFileSource
from reclaim.core.summary import summarize
from reclaim.core.walker import walk
from reclaim.models.category import CategoryId
from reclaim.models.scan_result import FileRecord
from reclaim.utils import MB


def _snapshot(source, extra: list[FileRecord] | None = None):
    files = deduplicate(walk(source).files) + (extra or [])
    return summarize(files, root=source.display_root())


@pytest.fixture
def source(storage_root):
    return LocalFileSource(storage_root)


class TestSelectFiles:
    def test_concatenates_selected_categories(self, source):
        snapshot = _snapshot(source)
        names = [f.name for f in select_files(snapshot, ["logs", "media"])]
        assert names == ["b.mp4", "a.log"]

    def test_unknown_ids_contribute_nothing(self, source):
        snapshot = _snapshot(source)
        assert select_files(snapshot, ["bogus", "LOGS "]) == list(snapshot.files_for(CategoryId.LOGS))

    def test_empty_selection(self, source):
        assert select_files(_snapshot(source), []) == []


class TestSimulate:
    def test_logs_only(self, source, storage_root):
        result = clean(_snapshot(source), {CategoryId.LOGS}, source, allow_delete=False)
        assert result.cleaned_mb == 10
        assert result.cleaned_files == 1
        assert result.simulated is True
        assert (storage_root / "logs" / "a.log").exists()

    def test_empty_selection_is_noop(self, source):
        result = clean(_snapshot(source), set(), source, allow_delete=False)
        assert (result.cleaned_bytes, result.cleaned_files) == (0, 0)

    def test_repeatable(self, source, storage_root):
        before = sorted(p for p in storage_root.rglob("*"))
        runs = [
            clean(_snapshot(source), ["logs", "media", "duplicates"], source, allow_delete=False)
            for _ in range(3)
        ]
        assert {(r.cleaned_bytes, r.cleaned_files) for r in runs} == {(110 * MB, 3)}
        assert sorted(p for p in storage_root.rglob("*")) == before

    def test_never_calls_delete(self, source, monkeypatch):
        def boom(handle):
            raise AssertionError("simulate must not delete")

        monkeypatch.setattr(source, "delete", boom)
        monkeypatch.setattr(source, "contains", boom)
        clean(_snapshot(source), ["logs"], source, allow_delete=False)


class TestApply:
    def test_deletes_selected(self, source, storage_root):
        result = clean(_snapshot(source), ["duplicates", "logs"], source, allow_delete=True)
        assert result.simulated is False
        assert result.cleaned_files == 2
        assert result.cleaned_bytes == 60 * MB
        assert not (storage_root / "logs" / "a.log").exists()
        assert not (storage_root / "d" / "b.mp4").exists()
        assert (storage_root / "b.mp4").exists()
        assert (storage_root / "notes.txt").exists()

    def test_outside_root_is_never_deleted(self, source, storage_root, make_file):
        sibling = make_file(storage_root.parent / (storage_root.name + "2") / "evil.log", MB)
        crafted = FileRecord(path=str(sibling), name="evil.log", size=MB, category=CategoryId.LOGS)
        snapshot = _snapshot(source, extra=[crafted])

        result = clean(snapshot, ["logs"], source, allow_delete=True)

        assert sibling.exists()
        assert result.cleaned_files == 1
        assert result.skipped_files == 1

    def test_traversal_path_is_never_deleted(self, source, storage_root, make_file):
        outside = make_file(storage_root.parent / "outside.log", MB)
        crafted = FileRecord(
            path=os.path.join(str(storage_root), "..", "outside.log"),
            name="outside.log",
            size=MB,
            category=CategoryId.LOGS,
        )
        result = clean(_snapshot(source, extra=[crafted]), ["logs"], source, allow_delete=True)
        assert outside.exists()
        assert result.skipped_files == 1

    def test_delete_failure_skips_and_continues(self, source, storage_root, monkeypatch):
        real_delete = source.delete

        def flaky(handle):
            if handle.endswith("a.log"):
                raise PermissionError(handle)
            real_delete(handle)

        monkeypatch.setattr(source, "delete", flaky)
        result = clean(_snapshot(source), ["logs", "media"], source, allow_delete=True)

        assert result.cleaned_files == 1
        assert result.cleaned_mb == 50
        assert result.skipped_files == 1
        assert (storage_root / "logs" / "a.log").exists()
        assert not (storage_root / "b.mp4").exists()

    def test_already_gone_file_is_skipped(self, source, storage_root):
        snapshot = _snapshot(source)
        (storage_root / "logs" / "a.log").unlink()
        result = clean(snapshot, ["logs"], source, allow_delete=True)
        assert result.cleaned_files == 0
        assert result.skipped_files == 1
