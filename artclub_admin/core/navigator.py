# artclub_admin/core/navigator.py
"""Next/previous page navigation driven by the server's flags."""

from __future__ import annotations

from typing import Optional

from ..models.pagination import Page


class PaginationNavigator:
    """
    Tracks the current 1-based page number and the `has_next` / `has_prev`
    flags of the last fetched page, and decides whether a move is allowed.
    """

    def __init__(self) -> None:
        self.page = 1
        self.has_next = False
        self.has_prev = False

    def update(self, page_number: int, page: Optional[Page]) -> None:
        self.page = page_number
        if page is not None:
            self.has_next = page.has_next
            self.has_prev = page.has_prev

    def reset(self) -> None:
        self.page = 1
        self.has_next = False
        self.has_prev = False

    def can_go_to(self, target: int, *, loading: bool = False) -> bool:
        """
        A move is allowed only when not loading, to a real page (>= 1) other
        than the current one, in a direction the server says exists.
        """
        if loading or target < 1 or target == self.page:
            return False
        if target > self.page:
            return self.has_next
        return self.has_prev

    def can_next(self, *, loading: bool = False) -> bool:
        return self.can_go_to(self.page + 1, loading=loading)

    def can_prev(self, *, loading: bool = False) -> bool:
        return self.can_go_to(self.page - 1, loading=loading)

    def label(self) -> str:
        return f"Page {self.page}"
