"""Path-based file categorization rules."""

from __future__ import annotations

import re

from reclaim.models.category import CategoryId

CACHE_DIRS = frozenset({"cache", "tmp"})
DOWNLOAD_DIRS = frozenset({"downloads"})
MEDIA_EXTS = frozenset({"mp4", "mov", "mkv", "avi", "zip", "rar", "7z", "tar", "gz", "iso"})
LOG_EXTS = frozenset({"log"})

_SEPARATORS = re.compile(r"[/\\]")


def categorize(identifier: str) -> CategoryId | None:
    """Classify a file by its path, or return None if it is not reclaimable.

    Rules are checked in order and the first match wins:

    1. a parent directory named ``cache`` or ``tmp``
    2. a parent directory named ``downloads``
    3. a media or log file extension

    Matching is case-insensitive. Only directory segments count for the
    first two rules, so a file literally named ``cache`` is not a cache
    file.
    """
    segments = [s for s in _SEPARATORS.split(identifier.lower()) if s]
    if not segments:
        return None
    *dirs, name = segments

    if any(d in CACHE_DIRS for d in dirs):
        return CategoryId.CACHE
    if any(d in DOWNLOAD_DIRS for d in dirs):
        return CategoryId.DOWNLOADS

    ext = extension(name)
    if ext in MEDIA_EXTS:
        return CategoryId.MEDIA
    if ext in LOG_EXTS:
        return CategoryId.LOGS
    return None


def extension(name: str) -> str:
    """Lower-cased text after the last dot, or '' for dotless and dot-files."""
    dot = name.rfind(".")
    if dot <= 0:
        return ""
    return name[dot + 1:].lower()
