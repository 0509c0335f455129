"""
Form-side copies of events and projects.

Drafts hold what the user typed (strings straight from the inputs) and are
validated when turned into a request payload, so a bad form never reaches
the API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from artclub_admin.errors import ValidationError
from artclub_admin.models.project import Project
from artclub_admin.utils.formatters import parse_date


def _required(*fields: Tuple[str, str]) -> None:
    for label, value in fields:
        if not (value or "").strip():
            raise ValidationError(f"{label} is required")


def _date(label: str, value: str) -> Optional[datetime]:
    value = (value or "").strip()
    if not value:
        return None
    parsed = parse_date(value)
    if parsed is None:
        raise ValidationError(f"Invalid {label} '{value}', expected YYYY-MM-DD")
    return parsed


@dataclass(frozen=True, slots=True)
class EventDraft:
    title: str = ""
    location: str = ""
    date: str = ""
    description: str = ""

    def to_payload(self) -> Dict[str, Any]:
        _required(("Title", self.title), ("Location", self.location), ("Date", self.date))
        when = _date("date", self.date)
        return {
            "title": self.title.strip(),
            "location": self.location.strip(),
            "date": when.isoformat(),
            "description": self.description.strip(),
        }


@dataclass(frozen=True, slots=True)
class ProjectDraft:
    title: str = ""
    description: str = ""
    progress: str = "0"
    start_date: str = ""
    end_date: str = ""
    is_completed: bool = False
    members: Tuple[int, ...] = field(default_factory=tuple)

    def progress_value(self) -> int:
        try:
            progress = int(str(self.progress).strip() or "0")
        except ValueError:
            raise ValidationError(f"Progress must be a whole number, got '{self.progress}'")
        if not 0 <= progress <= 100:
            raise ValidationError("Progress must be between 0 and 100")
        return progress

    def to_payload(self) -> Dict[str, Any]:
        _required(
            ("Title", self.title), ("Description", self.description), ("Start date", self.start_date)
        )
        progress = self.progress_value()
        start = _date("start date", self.start_date)
        end = _date("end date", self.end_date)
        if end is not None and end.date() < start.date():
            raise ValidationError("End date cannot be before the start date")
        return {
            "title": self.title.strip(),
            "description": self.description.strip(),
            "progress": progress,
            "is_completed": self.is_completed,
            "start_date": start.date().isoformat(),
            "end_date": end.date().isoformat() if end else None,
            "members": list(self.members),
        }

    @classmethod
    def from_project(cls, project: Project) -> "ProjectDraft":
        return cls(
            title=project.title,
            description=project.description,
            progress=str(project.progress or 0),
            start_date=project.start_date.date().isoformat() if project.start_date else "",
            end_date=project.end_date.date().isoformat() if project.end_date else "",
            is_completed=project.is_completed,
            members=project.members,
        )


@dataclass(frozen=True, slots=True)
class MemberAssignment:
    """Replaces the member list of one project."""

    members: Tuple[int, ...] = ()

    def to_payload(self) -> Dict[str, Any]:
        return {"members": list(self.members)}
