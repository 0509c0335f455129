"""Domain model for an admin-sent notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from artclub_admin.utils.formatters import parse_date

PRIORITIES = ("low", "medium", "high")


@dataclass(frozen=True, slots=True)
class Notification:
    id: int
    message: str
    notification_type: str = ""
    target_role: str = ""
    is_read: bool = False
    created_at: Optional[datetime] = None
    priority: str = "medium"
    sender_name: Optional[str] = None

    @property
    def status_label(self) -> str:
        return "Read" if self.is_read else "Unread"

    @property
    def sender_label(self) -> str:
        return self.sender_name or "System"

    @classmethod
    def from_api(cls, row: Mapping[str, Any]) -> "Notification":
        sender = row.get("sender") or {}
        return cls(
            id=row["id"],
            message=row.get("message", ""),
            notification_type=row.get("notification_type") or "",
            target_role=row.get("target_role") or "",
            is_read=bool(row.get("is_read", False)),
            created_at=parse_date(row.get("created_at")),
            priority=row.get("priority") or "medium",
            sender_name=sender.get("name") if isinstance(sender, Mapping) else None,
        )
