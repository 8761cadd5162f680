"""Aggregate classified files into a scan snapshot."""

from __future__ import annotations

from types import MappingProxyType

from reclaim.models.category import CATEGORIES, CategoryId
from reclaim.models.scan_result import CategorySummary, FileRecord, ScanSnapshot
from reclaim.utils import to_mb, utc_now_iso


def summarize(
    files: list[FileRecord],
    *,
    root: str = "",
    truncated: bool = False,
    timestamp: str | None = None,
) -> ScanSnapshot:
    """Build a snapshot from deduplicated file records.

    ``total_reclaimable_mb`` is the sum of the rounded per-category sizes,
    so it can drift a few MB from the rounded byte total.
    """
    by_category: dict[CategoryId, list[FileRecord]] = {c.id: [] for c in CATEGORIES}
    for record in files:
        if record.category is not None:
            by_category[record.category].append(record)

    summaries = tuple(
        CategorySummary(
            id=c.id,
            name=c.name,
            description=c.description,
            size_mb=to_mb(sum(f.size for f in by_category[c.id])),
        )
        for c in CATEGORIES
    )

    return ScanSnapshot(
        timestamp=timestamp or utc_now_iso(),
        total_used_mb=to_mb(sum(f.size for f in files)),
        total_reclaimable_mb=sum(s.size_mb for s in summaries),
        categories=summaries,
        category_files=MappingProxyType({cid: tuple(records) for cid, records in by_category.items()}),
        root=root,
        file_count=len(files),
        truncated=truncated,
    )
