# artclub_admin/services/resource_service.py
"""
Business-logic layer for one REST collection.  Works with domain models and
the Page container; knows nothing about screens.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from simple_logger import Slogger

from artclub_admin.api.client import ApiClient
from artclub_admin.core.query_composer import ComposedQuery
from artclub_admin.errors import ConfigError, ParseError
from artclub_admin.models.pagination import Page
from artclub_admin.resources import ResourceConfig, RowAction


class ResourceService:
    """Handles the read and write use-cases of one resource collection."""

    def __init__(self, client: ApiClient, config: ResourceConfig) -> None:
        self._client = client
        self.config = config

    # --------------------------------------------------------------------- #
    # read side
    # --------------------------------------------------------------------- #

    async def page(self, query: ComposedQuery) -> Page[Any]:
        """Return one decoded Page for the composed query."""
        data = await self._client.get(query.url(self.config.path))
        return Page.from_envelope(data, self.config.decode)

    async def stats(self) -> Dict[str, Any]:
        """Summary counters shown above the list, if the resource has any."""
        if not self.config.stats_path:
            return {}
        data = await self._client.get(self.config.stats_path)
        if not isinstance(data, dict):
            raise ParseError(f"Unexpected stats payload for {self.config.name}")
        return data

    async def all_rows(self, max_pages: int = 50) -> List[Any]:
        """Every row across pages, for pickers such as member assignment."""
        rows: List[Any] = []
        for number in range(1, max_pages + 1):
            data = await self._client.get(f"{self.config.path}?page={number}")
            page = Page.from_envelope(data, self.config.decode)
            rows.extend(page.items)
            if not page.has_next:
                break
        return rows

    # --------------------------------------------------------------------- #
    # write side
    # --------------------------------------------------------------------- #

    async def perform(
        self,
        action: RowAction,
        row_id: Any,
        row: Any = None,
        feedback: Optional[str] = None,
    ) -> Any:
        """Run one row-scoped mutation. Validation happens before any request."""
        action.validate(feedback)
        url = action.url(self.config.path, row_id)
        body = action.body(row, feedback)

        Slogger.debug(
            f"{action.method} {url}",
            {"resource": self.config.name, "action": action.name, "id": row_id},
        )

        method = action.method.upper()
        if method == "DELETE":
            return await self._client.delete(url)
        if method == "PATCH":
            return await self._client.patch(url, body)
        if method == "POST":
            return await self._client.post(url, body)
        raise ConfigError(f"Unsupported method '{action.method}' for action '{action.name}'")

    async def create(self, payload: Dict[str, Any]) -> Any:
        Slogger.info(f"Creating {self.config.noun}", {"resource": self.config.name})
        return await self._client.post(self.config.path, payload)

    async def update(self, row_id: Any, payload: Dict[str, Any]) -> Any:
        """Partial update; only the keys in `payload` change."""
        Slogger.info(
            f"Updating {self.config.noun}",
            {"resource": self.config.name, "id": row_id, "fields": sorted(payload)},
        )
        return await self._client.patch(f"{self.config.path.rstrip('/')}/{row_id}/", payload)
