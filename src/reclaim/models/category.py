"""Reclaimable file categories."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CategoryId(str, Enum):
    """Closed set of cleanup buckets, in display order."""

    CACHE = "cache"
    DOWNLOADS = "downloads"
    DUPLICATES = "duplicates"
    MEDIA = "media"
    LOGS = "logs"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Category:
    """Display metadata for a category."""

    id: CategoryId
    name: str
    description: str = ""


CATEGORIES: tuple[Category, ...] = (
    Category(CategoryId.CACHE, "App Cache", "Temporary app data"),
    Category(CategoryId.DOWNLOADS, "Downloads", "Unsorted files"),
    Category(CategoryId.DUPLICATES, "Duplicates", "Exact file copies"),
    Category(CategoryId.MEDIA, "Large Media", "Videos and archives"),
    Category(CategoryId.LOGS, "Old Logs", "System logs"),
)


def parse_category_ids(values) -> list[CategoryId]:
    """Convert raw ids to CategoryIds in display order, dropping unknown ones."""
    wanted = {str(v).strip().lower() for v in values or ()}
    return [c.id for c in CATEGORIES if c.id.value in wanted]
