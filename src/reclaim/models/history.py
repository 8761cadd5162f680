"""History entry dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from reclaim.models.category import CategoryId, parse_category_ids
from reclaim.utils import parse_iso_time


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One recorded clean operation."""

    id: str
    time: str
    cleaned_mb: int
    cleaned_files: int
    categories: tuple[CategoryId, ...] = ()
    simulated: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "time": self.time,
            "cleanedMB": self.cleaned_mb,
            "cleanedFiles": self.cleaned_files,
            "categories": [c.value for c in self.categories],
            "simulated": self.simulated,
        }

    @classmethod
    def from_dict(cls, data: Any) -> HistoryEntry:
        """Parse a persisted record.

        Raises:
            ValueError: If the record is not a mapping, misses a field or
                holds a value that cannot be used (non-finite counts, a
                time that is not ISO-8601).
        """
        if not isinstance(data, dict):
            raise ValueError(f"history record must be an object, got {type(data).__name__}")
        try:
            entry_id = data["id"]
            time = data["time"]
            cleaned_mb = int(data.get("cleanedMB", 0))
            cleaned_files = int(data.get("cleanedFiles", 0))
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            raise ValueError(f"malformed history record: {exc}") from exc
        if not isinstance(entry_id, str) or not isinstance(time, str):
            raise ValueError("history record id and time must be strings")
        try:
            parse_iso_time(time)
        except ValueError as exc:
            raise ValueError(f"history record time is not ISO-8601: {time!r}") from exc
        categories = data.get("categories") or []
        if not isinstance(categories, list):
            raise ValueError("history record categories must be a list")
        return cls(
            id=entry_id,
            time=time,
            cleaned_mb=max(0, cleaned_mb),
            cleaned_files=max(0, cleaned_files),
            categories=tuple(parse_category_ids(categories)),
            simulated=bool(data.get("simulated", False)),
        )
