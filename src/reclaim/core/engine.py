"""Scanning and cleaning orchestration engine."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Iterable

from reclaim.core import cleaner
from reclaim.core.dedup import deduplicate
from reclaim.core.ledger import HistoryLedger
from reclaim.core.sources import FileSource
from reclaim.core.summary import summarize
from reclaim.core.walker import walk
from reclaim.models.category import CategoryId, parse_category_ids
from reclaim.models.clean_result import CleanReport
from reclaim.models.scan_result import ScanSnapshot

log = logging.getLogger(__name__)


class CleanPhase(str, Enum):
    """Steps of a single clean invocation."""

    IDLE = "idle"
    SCANNING_BASELINE = "scanning_baseline"
    SIMULATING = "simulating"
    DELETING = "deleting"
    RESCANNING = "rescanning"
    RECORDING_HISTORY = "recording_history"


ProgressCallback = Callable[[CleanPhase], None]


class ReclaimEngine:
    """Scans one root and cleans categories from it.

    Clean invocations on the same engine are serialized; scans are
    read-only and may run at any time.
    """

    def __init__(
        self,
        source: FileSource,
        ledger: HistoryLedger | None = None,
        *,
        allow_delete: bool = False,
    ) -> None:
        self.source = source
        self.ledger = ledger or HistoryLedger()
        self.allow_delete = allow_delete
        self._clean_lock = threading.Lock()

    def get_snapshot(self) -> ScanSnapshot:
        """Walk the root and return a fresh snapshot.

        Raises:
            RootUnavailableError: If the root itself cannot be listed.
        """
        self.source.check_root()
        walked = walk(self.source)
        files = deduplicate(walked.files)
        snapshot = summarize(files, root=self.source.display_root(), truncated=walked.truncated)
        log.info(
            "Scanned %s: %d files, %d MB used, %d MB reclaimable%s",
            snapshot.root,
            snapshot.file_count,
            snapshot.total_used_mb,
            snapshot.total_reclaimable_mb,
            " (truncated)" if snapshot.truncated else "",
        )
        return snapshot

    def clean(
        self,
        categories: Iterable[CategoryId | str],
        on_progress: ProgressCallback | None = None,
    ) -> CleanReport:
        """Clean the selected categories and return the post-clean state.

        Deletes only when the engine was built with ``allow_delete``;
        otherwise the result is a simulation. The returned snapshot comes
        from a fresh walk, not from arithmetic on the old one.

        Args:
            categories: Category ids to clean. Unknown ids are ignored.
            on_progress: Optional callback fired on every phase change.
        """
        selected = parse_category_ids(categories)

        def phase(p: CleanPhase) -> None:
            log.debug("Clean phase: %s", p.value)
            if on_progress:
                on_progress(p)

        with self._clean_lock:
            allow_delete = self.allow_delete
            try:
                phase(CleanPhase.SCANNING_BASELINE)
                baseline = self.get_snapshot()

                phase(CleanPhase.DELETING if allow_delete else CleanPhase.SIMULATING)
                result = cleaner.clean(baseline, selected, self.source, allow_delete=allow_delete)

                phase(CleanPhase.RESCANNING)
                snapshot = self.get_snapshot()

                phase(CleanPhase.RECORDING_HISTORY)
                self.ledger.record(result, selected)
            finally:
                phase(CleanPhase.IDLE)

        log.info(
            "Cleaned %d MB from %d files in %s%s",
            result.cleaned_mb,
            result.cleaned_files,
            self.source.display_root(),
            " (simulated)" if result.simulated else "",
        )
        return CleanReport(snapshot=snapshot, result=result, history=self.ledger.entries)

    def get_history(self) -> dict[str, list[dict]]:
        """Return the stored history as ``{"history": [...]}``."""
        return self.ledger.to_dict()
