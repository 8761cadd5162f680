"""Simulated or real removal of categorized files."""

from __future__ import annotations

import logging
from typing import Iterable

from reclaim.core.sources import FileSource
from reclaim.models.category import CategoryId, parse_category_ids
from reclaim.models.clean_result import CleanResult
from reclaim.models.scan_result import FileRecord, ScanSnapshot

log = logging.getLogger(__name__)


def select_files(snapshot: ScanSnapshot, categories: Iterable[CategoryId | str]) -> list[FileRecord]:
    """Concatenate the snapshot's files for each selected category.

    Unknown ids and categories absent from the snapshot add nothing.
    """
    selected: list[FileRecord] = []
    for category_id in parse_category_ids(categories):
        selected.extend(snapshot.files_for(category_id))
    return selected


def clean(
    snapshot: ScanSnapshot,
    categories: Iterable[CategoryId | str],
    source: FileSource,
    *,
    allow_delete: bool,
) -> CleanResult:
    """Remove, or pretend to remove, the files of the selected categories.

    With ``allow_delete`` off nothing on disk is touched and every candidate
    is counted. With it on, candidates outside the source root and files
    that fail to delete are skipped and left out of the totals; the batch
    always runs to the end.
    """
    candidates = select_files(snapshot, categories)

    if not allow_delete:
        return CleanResult(
            cleaned_bytes=sum(f.size for f in candidates),
            cleaned_files=len(candidates),
            simulated=True,
        )

    result = CleanResult(simulated=False)
    for record in candidates:
        if not source.contains(record.path):
            log.warning("Refusing to delete %s: outside %s", record.path, source.display_root())
            result.skipped_files += 1
            continue
        try:
            source.delete(record.path)
        except OSError as e:
            log.debug("Cannot delete %s: %s", record.path, e)
            result.skipped_files += 1
            continue
        result.cleaned_bytes += record.size
        result.cleaned_files += 1

    return result
