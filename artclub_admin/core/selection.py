# artclub_admin/core/selection.py
"""Row selection scoped to the loaded page."""

from __future__ import annotations

import logging
from typing import FrozenSet, Generic, Hashable, Iterable, TypeVar

logger = logging.getLogger(__name__)

ID = TypeVar("ID", bound=Hashable)


class SelectionTracker(Generic[ID]):
    """
    Set of selected ids that is always a subset of the current page.

    "Select all" means all rows of the loaded page, not every row matching
    the filters across pages.
    """

    def __init__(self) -> None:
        self._page_ids: FrozenSet[ID] = frozenset()
        self._selected: set = set()

    # ---------- queries ----------
    @property
    def ids(self) -> FrozenSet[ID]:
        return frozenset(self._selected)

    @property
    def count(self) -> int:
        return len(self._selected)

    @property
    def all_selected(self) -> bool:
        return bool(self._page_ids) and self._selected == set(self._page_ids)

    def is_selected(self, row_id: ID) -> bool:
        return row_id in self._selected

    def __len__(self) -> int:
        return len(self._selected)

    def __bool__(self) -> bool:
        return bool(self._selected)

    # ---------- commands ----------
    def toggle(self, row_id: ID) -> bool:
        """Flip one row; returns the new state. Ids off the page are ignored."""
        if row_id not in self._page_ids:
            logger.debug(f"Ignoring toggle for id {row_id!r} not on the current page")
            return False
        if row_id in self._selected:
            self._selected.discard(row_id)
            return False
        self._selected.add(row_id)
        return True

    def select_all(self, checked: bool = True) -> None:
        if checked:
            self._selected = set(self._page_ids)
        else:
            self._selected.clear()

    def clear(self) -> None:
        self._selected.clear()

    def keep_only(self, ids: Iterable[ID]) -> None:
        """Narrow the selection to `ids` (still limited to the page)."""
        self._selected &= set(ids) & set(self._page_ids)

    def replace_page(self, ids: Iterable[ID]) -> FrozenSet[ID]:
        """A new page was loaded: prune selected ids that are no longer shown."""
        self._page_ids = frozenset(ids)
        dropped = frozenset(self._selected - self._page_ids)
        self._selected -= dropped
        if dropped:
            logger.debug(f"Pruned {len(dropped)} selected id(s) absent from the new page")
        return dropped
