"""Domain model for a collaborative project."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional, Tuple

from artclub_admin.utils.formatters import parse_date


@dataclass(frozen=True, slots=True)
class Project:
    id: int
    title: str
    description: str = ""
    progress: Optional[int] = None
    status: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    members: Tuple[int, ...] = field(default_factory=tuple)
    is_completed: bool = False
    image: Optional[str] = None

    @property
    def effective_status(self) -> str:
        if self.status:
            return self.status
        return "completed" if self.is_completed else "in_progress"

    @property
    def member_count(self) -> int:
        return len(self.members)

    @classmethod
    def from_api(cls, row: Mapping[str, Any]) -> "Project":
        progress = row.get("progress")
        return cls(
            id=row["id"],
            title=row.get("title", ""),
            description=row.get("description") or "",
            progress=int(progress) if progress is not None else None,
            status=row.get("status"),
            start_date=parse_date(row.get("start_date")),
            end_date=parse_date(row.get("end_date")),
            members=tuple(row.get("members") or ()),
            is_completed=bool(row.get("is_completed", False)),
            image=row.get("image"),
        )
