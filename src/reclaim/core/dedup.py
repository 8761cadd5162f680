"""Name+size duplicate detection."""

from __future__ import annotations

from dataclasses import replace

from reclaim.models.category import CategoryId
from reclaim.models.scan_result import FileRecord


def deduplicate(files: list[FileRecord]) -> list[FileRecord]:
    """Reclassify every copy after the first of each group as a duplicate.

    The first file of a group keeps whatever category it had. Every later
    one becomes ``duplicates``, overriding its own category. Returns a new
    list in the original order; input records are never modified.
    """
    seen: set[tuple[str, int]] = set()
    result: list[FileRecord] = []
    for record in files:
        key = (record.name, record.size)
        if key in seen:
            result.append(replace(record, category=CategoryId.DUPLICATES))
        else:
            seen.add(key)
            result.append(record)
    return result
