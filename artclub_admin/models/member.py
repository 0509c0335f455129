"""Domain model for a club member (user account)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from artclub_admin.utils.formatters import parse_date


@dataclass(frozen=True, slots=True)
class Member:
    pk: int
    email: str
    role: str = "member"
    is_active: bool = True
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    last_login: Optional[datetime] = None
    date_joined: Optional[datetime] = None
    profile_picture: Optional[str] = None

    @property
    def full_name(self) -> str:
        name = " ".join(p for p in (self.first_name, self.last_name) if p)
        return name or self.email

    @classmethod
    def from_api(cls, row: Mapping[str, Any]) -> "Member":
        return cls(
            pk=row["pk"],
            email=row.get("email", ""),
            role=row.get("role") or "member",
            is_active=bool(row.get("is_active", True)),
            first_name=row.get("first_name"),
            last_name=row.get("last_name"),
            last_login=parse_date(row.get("last_login")),
            date_joined=parse_date(row.get("date_joined")),
            profile_picture=row.get("profile_picture"),
        )
