"""Domain model for a club event."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional, Tuple

from artclub_admin.utils.formatters import parse_date


@dataclass(frozen=True, slots=True)
class Event:
    id: int
    title: str
    description: str = ""
    location: str = ""
    date: Optional[datetime] = None
    event_cover: Optional[str] = None
    is_completed: bool = False
    attendees: Tuple[Any, ...] = field(default_factory=tuple)

    @property
    def attendee_count(self) -> int:
        return len(self.attendees)

    @property
    def status_label(self) -> str:
        return "Completed" if self.is_completed else "Upcoming"

    @classmethod
    def from_api(cls, row: Mapping[str, Any]) -> "Event":
        return cls(
            id=row["id"],
            title=row.get("title", ""),
            description=row.get("description") or "",
            location=row.get("location") or "",
            date=parse_date(row.get("date")),
            event_cover=row.get("event_cover"),
            is_completed=bool(row.get("is_completed", False)),
            attendees=tuple(row.get("attendees") or ()),
        )
