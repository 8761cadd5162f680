"""Cleaning result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from reclaim.models.history import HistoryEntry
from reclaim.models.scan_result import ScanSnapshot
from reclaim.utils import to_mb


@dataclass(slots=True)
class CleanResult:
    """Result of a cleaning operation."""

    cleaned_bytes: int = 0
    cleaned_files: int = 0
    simulated: bool = True
    skipped_files: int = 0

    @property
    def cleaned_mb(self) -> int:
        return to_mb(self.cleaned_bytes)


@dataclass(slots=True)
class CleanReport:
    """Everything a caller gets back from a clean: the fresh snapshot,
    what was cleaned and the updated history."""

    snapshot: ScanSnapshot
    result: CleanResult
    history: list[HistoryEntry] = field(default_factory=list)

    @property
    def cleaned_mb(self) -> int:
        return self.result.cleaned_mb

    @property
    def cleaned_files(self) -> int:
        return self.result.cleaned_files

    @property
    def simulated(self) -> bool:
        return self.result.simulated

    def to_dict(self, include_files: bool = True) -> dict[str, Any]:
        data = self.snapshot.to_dict(include_files=include_files)
        data.update(
            cleanedMB=self.cleaned_mb,
            cleanedFiles=self.cleaned_files,
            simulated=self.simulated,
            history=[e.to_dict() for e in self.history],
        )
        return data
