# artclub_admin/core/controller.py
"""
Generic remote resource list controller.

One instance backs one mounted list screen. It owns the query, the loaded
page, the display order and the selection, and exposes a small command
interface. Commands never raise into the caller: failures are reported
through the `notify` callback and reflected in `last_error`.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Protocol, Sequence

from ..errors import AdminError, ApiError, ConfigError, ValidationError
from ..models.bulk import BulkOutcome
from ..models.pagination import Page
from ..models.query import ALL, ListQuery, SortSpec
from ..resources import ResourceConfig, RowAction
from .bulk import BulkActionExecutor
from .exporter import write_csv
from .fetcher import FetchOrchestrator, FetchResult
from .navigator import PaginationNavigator
from .query_composer import ComposedQuery, QueryComposer
from .selection import SelectionTracker
from .sorting import sort_items

logger = logging.getLogger(__name__)

# severities understood by Textual's App.notify
INFO = "information"
WARNING = "warning"
ERROR = "error"

Notifier = Callable[[str, str], None]


class ResourceServiceProtocol(Protocol):
    async def page(self, query: ComposedQuery) -> Page[Any]: ...

    async def stats(self) -> Dict[str, Any]: ...

    async def perform(
        self, action: RowAction, row_id: Any, row: Any = None, feedback: Optional[str] = None
    ) -> Any: ...

    async def create(self, payload: Dict[str, Any]) -> Any: ...

    async def update(self, row_id: Any, payload: Dict[str, Any]) -> Any: ...


class Draft(Protocol):
    def to_payload(self) -> Dict[str, Any]: ...


class ListState(Enum):
    LOADING = "loading"
    EMPTY = "empty"
    ERROR = "error"
    POPULATED = "populated"


def describe_error(error: Exception) -> str:
    if isinstance(error, ApiError) and error.detail:
        return str(error.detail)
    return str(error)


class ResourceListController:
    """Explicit state container plus command interface for one list screen."""

    def __init__(
        self,
        config: ResourceConfig,
        service: ResourceServiceProtocol,
        *,
        notify: Optional[Notifier] = None,
        on_change: Optional[Callable[[], None]] = None,
        export_dir: str | Path = "exports",
    ) -> None:
        self.config = config
        self.service = service
        self.export_dir = export_dir
        self._notify = notify
        self._on_change = on_change

        self.query = ListQuery(sort=config.default_sort)
        self.applied_query: Optional[ListQuery] = None
        self.page: Optional[Page[Any]] = None
        self.items: List[Any] = []
        self.last_error: Optional[AdminError] = None
        self.stats: Dict[str, Any] = {}

        self.composer = QueryComposer(config.filters)
        self.fetcher: FetchOrchestrator[Any] = FetchOrchestrator(service.page)
        self.selection: SelectionTracker[Hashable] = SelectionTracker()
        self.bulk = BulkActionExecutor()
        self.navigator = PaginationNavigator()

    # ------------------------------------------------------------------ #
    # derived state
    # ------------------------------------------------------------------ #

    @property
    def loading(self) -> bool:
        return self.fetcher.loading

    @property
    def state(self) -> ListState:
        if self.page is None:
            if self.loading:
                return ListState.LOADING
            if self.last_error is not None:
                return ListState.ERROR
            return ListState.EMPTY
        return ListState.EMPTY if self.page.is_empty else ListState.POPULATED

    @property
    def total_count(self) -> int:
        return self.page.total_count if self.page is not None else 0

    @property
    def has_next(self) -> bool:
        return self.navigator.can_next(loading=self.loading)

    @property
    def has_prev(self) -> bool:
        return self.navigator.can_prev(loading=self.loading)

    @property
    def selected_ids(self) -> List[Hashable]:
        """Selected ids in page order."""
        return [rid for rid in self._page_ids() if self.selection.is_selected(rid)]

    def row(self, row_id: Hashable) -> Any:
        for item in self.items:
            if self.config.row_id(item) == row_id:
                return item
        return None

    def filter_options(self, name: str) -> Sequence[tuple]:
        return self.config.filter(name).options(self.items)

    # ------------------------------------------------------------------ #
    # fetching
    # ------------------------------------------------------------------ #

    async def refresh(self) -> Optional[FetchResult[Any]]:
        """Fetch the page described by the current query."""
        try:
            composed = self.composer.compose(self.query)
        except ConfigError as e:
            self._report(f"Invalid query: {e}", ERROR)
            return None

        self.query = composed.query
        token = self.fetcher.begin()
        self._changed()

        result = await self.fetcher.complete(token, composed)
        if result.stale:
            return result

        if result.error is not None:
            self.last_error = result.error
            self._after_failure(composed.query)
            self._report(
                f"Failed to fetch {self.config.title.lower()}: {describe_error(result.error)}",
                ERROR,
            )
        else:
            self._apply(composed.query, result.page)
        self._changed()
        return result

    def _apply(self, query: ListQuery, page: Page[Any]) -> None:
        self.page = page
        self.applied_query = query
        self.last_error = None
        self.items = sort_items(page.items, self.query.sort)
        self.selection.replace_page(self._page_ids())
        self.navigator.update(query.page, page)
        self.composer.commit(query)

    def _after_failure(self, failed: ListQuery) -> None:
        applied = self.applied_query
        if applied is None:
            return
        if self.composer.changed(failed):
            # the page on screen belongs to the old criteria; only page 1 of the new ones is reachable
            self.navigator.reset()
        else:
            # a failed page move leaves the previous page on screen; keep the number with it
            self.query = self.query.with_page(applied.page)

    async def load_stats(self) -> Dict[str, Any]:
        if not self.config.stats_path:
            return {}
        try:
            self.stats = await self.service.stats()
        except AdminError as e:
            self._report(
                f"Failed to fetch {self.config.noun} statistics: {describe_error(e)}", ERROR
            )
        self._changed()
        return self.stats

    # ------------------------------------------------------------------ #
    # query commands
    # ------------------------------------------------------------------ #

    async def set_search(self, text: str) -> Optional[FetchResult[Any]]:
        updated = self.query.with_search(text or "")
        if updated is self.query:
            return None
        self.query = updated
        return await self.refresh()

    async def set_filter(self, name: str, value: str) -> Optional[FetchResult[Any]]:
        try:
            self.config.filter(name)
        except ConfigError as e:
            self._report(str(e), ERROR)
            return None
        updated = self.query.with_filter(name, value)
        if updated is self.query:
            return None
        self.query = updated
        return await self.refresh()

    async def clear_filters(self) -> Optional[FetchResult[Any]]:
        """Reset search and every filter back to "all"."""
        untouched = all(v == ALL for _, v in self.query.filters)
        if untouched and not self.query.search and self.query.page == 1:
            return None
        self.query = ListQuery(sort=self.query.sort)
        return await self.refresh()

    def sort_by(self, key: str) -> bool:
        """Column-header click. Disabled while a fetch is outstanding."""
        if self.loading:
            return False
        current = self.query.sort
        spec = SortSpec(key) if current is None else current.toggled(key)
        self.query = self.query.with_sort(spec)
        if self.page is not None:
            self.items = sort_items(self.page.items, spec)
        self._changed()
        return True

    def sort_by_header(self, header: str) -> bool:
        key = self.config.sort_key_for(header)
        if key is None:
            return False
        return self.sort_by(key)

    # ------------------------------------------------------------------ #
    # pagination commands
    # ------------------------------------------------------------------ #

    async def go_to(self, page: int) -> Optional[FetchResult[Any]]:
        if not self.navigator.can_go_to(page, loading=self.loading):
            return None
        self.query = self.query.with_page(page)
        return await self.refresh()

    async def next_page(self) -> Optional[FetchResult[Any]]:
        return await self.go_to(self.navigator.page + 1)

    async def prev_page(self) -> Optional[FetchResult[Any]]:
        return await self.go_to(self.navigator.page - 1)

    # ------------------------------------------------------------------ #
    # selection commands
    # ------------------------------------------------------------------ #

    def toggle(self, row_id: Hashable) -> bool:
        state = self.selection.toggle(row_id)
        self._changed()
        return state

    def select_all(self, checked: bool = True) -> None:
        self.selection.select_all(checked)
        self._changed()

    def clear_selection(self) -> None:
        self.selection.clear()
        self._changed()

    # ------------------------------------------------------------------ #
    # mutations
    # ------------------------------------------------------------------ #

    async def run_action(
        self,
        name: str,
        ids: Optional[Iterable[Hashable]] = None,
        *,
        feedback: Optional[str] = None,
    ) -> Optional[BulkOutcome]:
        """
        Apply a row action to `ids` (defaults to the selection), one request
        per id, then refetch so the server's state is what gets shown.
        """
        try:
            action = self.config.action(name)
        except ConfigError as e:
            self._report(str(e), ERROR)
            return None

        targets = list(ids) if ids is not None else self.selected_ids
        if not targets:
            self._report(f"No {self.config.noun}s selected", WARNING)
            return BulkOutcome()
        if not action.bulk and len(targets) > 1:
            self._report(f"{action.label} works on one {self.config.noun} at a time", ERROR)
            return None

        # rows already in the target state are left alone
        skipped = [rid for rid in targets if not self._eligible(action, rid)]
        if skipped:
            targets = [rid for rid in targets if rid not in skipped]
            if not targets:
                self._report(
                    f"Nothing to {action.label.lower()}: "
                    f"{self.config.plural(len(skipped))} already done",
                    WARNING,
                )
                return BulkOutcome()

        try:
            action.validate(feedback)
        except ValidationError as e:
            self._report(str(e), ERROR)
            return None

        async def call(row_id: Hashable) -> Any:
            return await self.service.perform(action, row_id, self.row(row_id), feedback)

        outcome = await self.bulk.run(call, targets)
        self._report_outcome(action, outcome)

        # failed rows stay selected so the user can retry them
        self.selection.keep_only(outcome.failed_ids)
        await self.refresh()
        if self.config.stats_path:
            await self.load_stats()
        return outcome

    def _eligible(self, action: RowAction, row_id: Hashable) -> bool:
        row = self.row(row_id)
        return row is None or action.available_for(row)

    async def run_row_action(
        self, name: str, row_id: Hashable, *, feedback: Optional[str] = None
    ) -> Optional[BulkOutcome]:
        return await self.run_action(name, [row_id], feedback=feedback)

    def _report_outcome(self, action: RowAction, outcome: BulkOutcome) -> None:
        noun = self.config.noun
        verb = action.past_tense or action.name
        if outcome.attempted == 1:
            if outcome.all_succeeded:
                self._report(f"{noun.capitalize()} {verb} successfully", INFO)
            else:
                error = next(iter(outcome.errors.values()), None)
                detail = f": {describe_error(error)}" if error else ""
                self._report(f"Failed to {action.label.lower()} {noun}{detail}", ERROR)
            return

        if outcome.all_succeeded:
            self._report(f"{self.config.plural(outcome.succeeded)} {verb}", INFO)
        elif outcome.is_partial:
            self._report(
                f"{outcome.succeeded} of {self.config.plural(outcome.attempted)} {verb}; "
                f"{outcome.failed} failed",
                WARNING,
            )
        else:
            self._report(
                f"Failed to {action.label.lower()} {self.config.plural(outcome.attempted)}",
                ERROR,
            )

    async def save(
        self,
        draft: Draft,
        row_id: Optional[Hashable] = None,
        *,
        success: Optional[str] = None,
    ) -> bool:
        """Create a row (no `row_id`) or patch an existing one, then refetch."""
        creating = row_id is None
        verb = "create" if creating else "update"
        try:
            payload = draft.to_payload()
            if creating:
                await self.service.create(payload)
            else:
                await self.service.update(row_id, payload)
        except AdminError as e:
            self._report(f"Failed to {verb} {self.config.noun}: {describe_error(e)}", ERROR)
            return False

        self._report(
            success or f"{self.config.noun.capitalize()} {verb}d successfully", INFO
        )
        await self.refresh()
        if self.config.stats_path:
            await self.load_stats()
        return True

    # ------------------------------------------------------------------ #
    # export
    # ------------------------------------------------------------------ #

    def export(self) -> Optional[Path]:
        """Write the loaded page, in display order, to a dated CSV file."""
        if not self.items:
            self._report(f"No {self.config.noun}s to export", WARNING)
            return None
        try:
            path = write_csv(self.export_dir, self.config.name, self.items, self.config.csv_columns)
        except OSError as e:
            self._report(f"Export failed: {e}", ERROR)
            return None
        self._report(f"Exported {self.config.plural(len(self.items))} to {path}", INFO)
        return path

    # ------------------------------------------------------------------ #
    # plumbing
    # ------------------------------------------------------------------ #

    def _page_ids(self) -> List[Hashable]:
        if self.page is None:
            return []
        return [self.config.row_id(item) for item in self.page.items]

    def _report(self, message: str, severity: str) -> None:
        log = logger.error if severity == ERROR else logger.warning if severity == WARNING else logger.info
        log(f"[{self.config.name}] {message}")
        if self._notify is not None:
            self._notify(message, severity)

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
