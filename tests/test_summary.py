"""Tests for snapshot aggregation."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from reclaim.core.summary import summarize
from reclaim.models.category import CategoryId
from reclaim.models.scan_result import FileRecord
from reclaim.utils import MB, to_mb


def _rec(name: str, size: int, category: CategoryId | None) -> FileRecord:
    return FileRecord(path=name, name=name, size=size, category=category)


class TestToMb:
    @pytest.mark.parametrize(
        ("size", "expected"),
        [(0, 0), (MB // 2 - 1, 0), (MB // 2, 1), (MB, 1), (int(2.5 * MB), 3), (10 * MB, 10), (-5, 0)],
    )
    def test_rounding(self, size, expected):
        assert to_mb(size) == expected


class TestSummarize:
    def test_fixed_category_order(self):
        snapshot = summarize([])
        assert [c.id for c in snapshot.categories] == [
            CategoryId.CACHE,
            CategoryId.DOWNLOADS,
            CategoryId.DUPLICATES,
            CategoryId.MEDIA,
            CategoryId.LOGS,
        ]
        assert snapshot.total_used_mb == 0
        assert snapshot.total_reclaimable_mb == 0
        assert all(snapshot.files_for(c.id) == () for c in snapshot.categories)

    def test_per_category_sizes(self):
        files = [
            _rec("a.log", 10 * MB, CategoryId.LOGS),
            _rec("b.mp4", 50 * MB, CategoryId.MEDIA),
            _rec("c.mp4", 50 * MB, CategoryId.DUPLICATES),
            _rec("notes.txt", 3 * MB, None),
        ]
        snapshot = summarize(files, root="/data")
        sizes = {c.id: c.size_mb for c in snapshot.categories}
        assert sizes == {
            CategoryId.CACHE: 0,
            CategoryId.DOWNLOADS: 0,
            CategoryId.DUPLICATES: 50,
            CategoryId.MEDIA: 50,
            CategoryId.LOGS: 10,
        }
        assert snapshot.total_used_mb == 113
        assert snapshot.total_reclaimable_mb == 110
        assert snapshot.file_count == 4
        assert snapshot.root == "/data"

    def test_reclaimable_is_sum_of_rounded_sizes(self):
        # Each category rounds 0.6 MB up to 1 MB; the byte total would round to 3.
        files = [_rec(f"f{i}", int(0.6 * MB), cid) for i, cid in enumerate(
            [CategoryId.CACHE, CategoryId.DOWNLOADS, CategoryId.MEDIA, CategoryId.LOGS, CategoryId.DUPLICATES]
        )]
        snapshot = summarize(files)
        assert snapshot.total_reclaimable_mb == sum(c.size_mb for c in snapshot.categories) == 5
        assert snapshot.total_used_mb == 3

    def test_uncategorized_files_count_toward_used_only(self):
        snapshot = summarize([_rec("x", 4 * MB, None)])
        assert snapshot.total_used_mb == 4
        assert snapshot.total_reclaimable_mb == 0

    def test_to_dict_shape(self):
        snapshot = summarize([_rec("a.log", MB, CategoryId.LOGS)], timestamp="2024-01-01T00:00:00+00:00")
        data = snapshot.to_dict()
        assert data["timestamp"] == "2024-01-01T00:00:00+00:00"
        assert data["totalUsedMB"] == 1
        assert data["totalReclaimableMB"] == 1
        assert data["categories"][4] == {"id": "logs", "name": "Old Logs", "description": "System logs", "sizeMB": 1}
        assert data["categoryFiles"]["logs"] == [{"path": "a.log", "name": "a.log", "size": MB, "category": "logs"}]
        assert set(data["categoryFiles"]) == {"cache", "downloads", "duplicates", "media", "logs"}
        assert "categoryFiles" not in snapshot.to_dict(include_files=False)

    def test_snapshot_is_read_only(self):
        snapshot = summarize([])
        with pytest.raises(FrozenInstanceError):
            snapshot.total_used_mb = 5
        with pytest.raises(TypeError):
            snapshot.category_files[CategoryId.LOGS] = ()
