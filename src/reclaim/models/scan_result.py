"""Scan result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from reclaim.models.category import CATEGORIES, CategoryId


@dataclass(slots=True)
class FileRecord:
    """Single walked file.

    ``path`` is an opaque identifier owned by the file source that produced
    it (a filesystem path or a URI). Only ``category`` is reassigned after
    the walk, by the deduplicator.
    """

    path: str
    name: str
    size: int
    category: CategoryId | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "size": self.size,
            "category": self.category.value if self.category else None,
        }


@dataclass(slots=True)
class WalkResult:
    """Files emitted by one walk, in traversal order."""

    files: list[FileRecord] = field(default_factory=list)
    truncated: bool = False

    @property
    def total_bytes(self) -> int:
        return sum(f.size for f in self.files)


@dataclass(frozen=True, slots=True)
class CategorySummary:
    """Size of one category in a snapshot."""

    id: CategoryId
    name: str
    description: str
    size_mb: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.value,
            "name": self.name,
            "description": self.description,
            "sizeMB": self.size_mb,
        }


@dataclass(frozen=True)
class ScanSnapshot:
    """Complete result of one scan pass. Never modified after creation."""

    timestamp: str
    total_used_mb: int
    total_reclaimable_mb: int
    categories: tuple[CategorySummary, ...]
    category_files: Mapping[CategoryId, tuple[FileRecord, ...]]
    root: str = ""
    file_count: int = 0
    truncated: bool = False

    def files_for(self, category_id: CategoryId) -> tuple[FileRecord, ...]:
        return self.category_files.get(category_id, ())

    def to_dict(self, include_files: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {
            "timestamp": self.timestamp,
            "root": self.root,
            "totalUsedMB": self.total_used_mb,
            "totalReclaimableMB": self.total_reclaimable_mb,
            "fileCount": self.file_count,
            "truncated": self.truncated,
            "categories": [c.to_dict() for c in self.categories],
        }
        if include_files:
            data["categoryFiles"] = {
                c.id.value: [f.to_dict() for f in self.files_for(c.id)] for c in CATEGORIES
            }
        return data
