"""Query-side value objects: sort spec and list query."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

ALL = "all"  # filter sentinel meaning "no constraint"

ASC = "asc"
DESC = "desc"


@dataclass(frozen=True, slots=True)
class SortSpec:
    key: str
    direction: str = ASC

    def __post_init__(self) -> None:
        if self.direction not in (ASC, DESC):
            raise ValueError(f"Invalid sort direction: {self.direction!r}")

    @property
    def descending(self) -> bool:
        return self.direction == DESC

    def toggled(self, key: str) -> "SortSpec":
        """Header-click rule: same column flips direction, another column starts ascending."""
        if key == self.key:
            return SortSpec(key, DESC if self.direction == ASC else ASC)
        return SortSpec(key, ASC)


@dataclass(frozen=True, slots=True)
class ListQuery:
    """
    Canonical description of what a list screen wants from the server.

    `filters` is stored as an ordered tuple of (name, value) pairs so the
    query is hashable and its order is stable.
    """

    page: int = 1
    search: str = ""
    filters: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)
    sort: Optional[SortSpec] = None

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page numbers are 1-based")

    # ---------- accessors ----------
    @property
    def filter_map(self) -> dict:
        return dict(self.filters)

    def filter_value(self, name: str) -> str:
        return self.filter_map.get(name, ALL)

    # ---------- transitions ----------
    def with_search(self, search: str) -> "ListQuery":
        search = search or ""
        if search == self.search:
            return self
        return replace(self, search=search, page=1)

    def with_filter(self, name: str, value: str) -> "ListQuery":
        value = value or ALL
        current = self.filter_map
        if current.get(name, ALL) == value:
            return self
        current[name] = value
        return replace(self, filters=tuple(current.items()), page=1)

    def with_page(self, page: int) -> "ListQuery":
        return replace(self, page=page)

    def with_sort(self, sort: Optional[SortSpec]) -> "ListQuery":
        return replace(self, sort=sort)
