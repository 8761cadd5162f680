"""Directory walk producing categorized file records."""

from __future__ import annotations

import logging

from reclaim.core.categorizer import categorize
from reclaim.core.sources import FileSource
from reclaim.models.scan_result import FileRecord, WalkResult

log = logging.getLogger(__name__)

IGNORED_DIRS = frozenset({"node_modules", ".git", ".expo"})


def walk(source: FileSource, *, max_files: int | None = None) -> WalkResult:
    """Walk *source* depth-first with an explicit stack.

    Files of a directory are emitted in listing order before any of its
    subdirectories; subdirectories are then visited last-listed first.
    Unlistable directories and unstat-able files are skipped. Only
    metadata is read.

    Args:
        source: Tree to walk.
        max_files: Stop after this many files and flag the result as
            truncated. Defaults to ``source.max_files``.
    """
    limit = max_files if max_files is not None else source.max_files
    files: list[FileRecord] = []
    stack: list[str] = [source.root]

    while stack:
        current = stack.pop()
        try:
            children = source.list_children(current)
        except OSError as e:
            log.debug("Cannot list %s: %s", current, e)
            continue

        for child in children:
            if child.is_dir:
                if child.name in IGNORED_DIRS:
                    continue
                stack.append(child.handle)
                continue
            if not child.is_file:
                continue
            if limit is not None and len(files) >= limit:
                log.info("Stopped walking %s after %d files", source.display_root(), limit)
                return WalkResult(files=files, truncated=True)
            try:
                size = source.size(child.handle)
            except OSError as e:
                log.debug("Cannot stat %s: %s", child.handle, e)
                continue
            files.append(
                FileRecord(
                    path=child.handle,
                    name=child.name,
                    size=size,
                    category=categorize(source.relative(child.handle)),
                )
            )

    return WalkResult(files=files, truncated=False)
