# artclub_admin/core/query_composer.py
"""Turn a ListQuery into a canonical request for one resource collection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
from urllib.parse import urlencode

from ..errors import ConfigError
from ..models.query import ALL, ListQuery
from ..resources import FilterSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ComposedQuery:
    """The request shape: resolved page plus ordered wire parameters."""

    query: ListQuery
    params: Tuple[Tuple[str, str], ...]

    @property
    def page(self) -> int:
        return self.query.page

    @property
    def query_string(self) -> str:
        return urlencode(self.params)

    def url(self, path: str) -> str:
        return f"{path}?{self.query_string}"


class QueryComposer:
    """
    Deterministic query builder.

    Parameter order is fixed: `page`, `search` (only when non-empty), then
    every declared filter in declaration order, skipping the `"all"`
    sentinel. When search or any filter differs from the last committed
    composition the page is forced back to 1. Criteria are committed only
    once a response for them has been applied, so a failed filter change
    keeps forcing page 1 until it succeeds.
    """

    def __init__(self, filters: Sequence[FilterSpec]) -> None:
        self._filters = tuple(filters)
        self._known = {f.name for f in self._filters}
        self._last_criteria: Optional[tuple] = None

    def compose(self, query: ListQuery) -> ComposedQuery:
        unknown = set(query.filter_map) - self._known
        if unknown:
            raise ConfigError(f"Unknown filter(s): {', '.join(sorted(unknown))}")

        criteria = self._criteria(query)
        if self._last_criteria is not None and criteria != self._last_criteria and query.page != 1:
            logger.debug(f"Search/filters changed, resetting page {query.page} -> 1")
            query = query.with_page(1)

        return ComposedQuery(query=query, params=self._params(query))

    def commit(self, query: ListQuery) -> None:
        """Record the criteria of a query whose page is now on screen."""
        self._last_criteria = self._criteria(query)

    def changed(self, query: ListQuery) -> bool:
        return self._last_criteria is not None and self._criteria(query) != self._last_criteria

    def reset(self) -> None:
        """Forget the previous composition."""
        self._last_criteria = None

    # ------------------------------------------------------------------ #

    def _criteria(self, query: ListQuery) -> tuple:
        # "all" and an absent filter are the same constraint
        active = tuple(
            (f.name, query.filter_value(f.name))
            for f in self._filters
            if query.filter_value(f.name) != ALL
        )
        return (query.search.strip(), active)

    def _params(self, query: ListQuery) -> Tuple[Tuple[str, str], ...]:
        params = [("page", str(query.page))]
        search = query.search.strip()
        if search:
            params.append(("search", search))
        for spec in self._filters:
            value = query.filter_value(spec.name)
            if value == ALL:
                continue
            params.append((spec.param, spec.wire_value(value)))
        return tuple(params)
