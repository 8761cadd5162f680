"""Reclaim data models."""

from reclaim.models.category import CATEGORIES, Category, CategoryId
from reclaim.models.scan_result import CategorySummary, FileRecord, ScanSnapshot, WalkResult
from reclaim.models.history import HistoryEntry
from reclaim.models.clean_result import CleanReport, CleanResult

__all__ = [
    "CATEGORIES",
    "Category",
    "CategoryId",
    "CategorySummary",
    "CleanReport",
    "CleanResult",
    "FileRecord",
    "HistoryEntry",
    "ScanSnapshot",
    "WalkResult",
]
