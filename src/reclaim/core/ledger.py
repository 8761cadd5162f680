"""Bounded, newest-first history of clean operations."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

from reclaim.models.category import CategoryId, parse_category_ids
from reclaim.models.clean_result import CleanResult
from reclaim.models.history import HistoryEntry
from reclaim.storage import HistoryStore, JsonHistoryStore

log = logging.getLogger(__name__)

HISTORY_LIMIT = 10


class HistoryLedger:
    """Persists one HistoryEntry per clean, keeping the latest ten."""

    def __init__(self, store: HistoryStore | None = None, limit: int = HISTORY_LIMIT) -> None:
        self._store = store or JsonHistoryStore()
        self._limit = limit

    @property
    def entries(self) -> list[HistoryEntry]:
        """Stored entries, newest first. Malformed records are dropped."""
        entries: list[HistoryEntry] = []
        for raw in self._store.read():
            try:
                entries.append(HistoryEntry.from_dict(raw))
            except ValueError as e:
                log.warning("Dropping history record: %s", e)
        return entries[: self._limit]

    def record(self, result: CleanResult, categories: Iterable[CategoryId | str]) -> HistoryEntry:
        """Prepend an entry for *result* and persist the truncated ledger."""
        entries = self.entries
        now = datetime.now(timezone.utc)
        entry = HistoryEntry(
            id=_new_id(now, {e.id for e in entries}),
            time=now.isoformat(),
            cleaned_mb=result.cleaned_mb,
            cleaned_files=result.cleaned_files,
            categories=tuple(parse_category_ids(categories)),
            simulated=result.simulated,
        )
        entries.insert(0, entry)
        del entries[self._limit:]
        self._store.write([e.to_dict() for e in entries])

        log.info(
            "Recorded clean %s: %d MB from %d files%s",
            entry.id,
            entry.cleaned_mb,
            entry.cleaned_files,
            " (simulated)" if entry.simulated else "",
        )
        return entry

    def to_dict(self) -> dict[str, list[dict]]:
        return {"history": [e.to_dict() for e in self.entries]}


def _new_id(now: datetime, taken: set[str]) -> str:
    """Millisecond-based id, bumped until it does not collide."""
    millis = int(now.timestamp() * 1000)
    while f"clean_{millis}" in taken:
        millis += 1
    return f"clean_{millis}"
