"""Domain model for an artwork submission."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from artclub_admin.utils.formatters import parse_date

APPROVAL_STATUSES = ("pending", "approved", "rejected")


@dataclass(frozen=True, slots=True)
class Artwork:
    id: int
    title: str
    artist_name: str = ""
    artist_email: str = ""
    category: str = ""
    description: str = ""
    image: Optional[str] = None
    submission_date: Optional[datetime] = None
    rejection_count: int = 0
    approval_status: str = "pending"

    @property
    def is_approved(self) -> bool:
        return self.approval_status == "approved"

    @classmethod
    def from_api(cls, row: Mapping[str, Any]) -> "Artwork":
        return cls(
            id=row["id"],
            title=row.get("title", ""),
            artist_name=row.get("artist_name") or "",
            artist_email=row.get("artist_email") or "",
            category=row.get("category") or "",
            description=row.get("description") or "",
            image=row.get("image"),
            submission_date=parse_date(row.get("submission_date")),
            rejection_count=int(row.get("rejection_count") or 0),
            approval_status=row.get("approval_status") or "pending",
        )
