# artclub_admin/ui/controllers/status_bar.py
"""Formats and updates the status bar."""

from __future__ import annotations

from typing import Any, Dict

from textual.widgets import Static

from artclub_admin.core.controller import ResourceListController
from artclub_admin.models.query import ALL


class StatusBarController:
    """Builds the human-readable status text and writes it to the bar."""

    def __init__(self, status_bar: Static) -> None:
        self._bar = status_bar

    # ------------------------------------------------------------------ #
    # public helpers
    # ------------------------------------------------------------------ #

    def update(self, controller: ResourceListController) -> None:
        """Refresh the whole status line from the controller's state."""
        config = controller.config
        parts: list[str] = [
            f"{config.title}: {controller.total_count}",
            controller.navigator.label(),
        ]

        query = controller.query
        if query.search:
            parts.append(f"Search: '{query.search}'")
        for name, value in query.filters:
            if value != ALL:
                parts.append(f"{config.filter(name).label}: {value}")

        text = " | ".join(parts)
        text = self._append_selection(text, len(controller.selected_ids))
        text = self._append_stats(text, controller.stats)

        if controller.loading:
            text += " | Loading..."

        self._bar.update(text)

    # ------------------------------------------------------------------ #
    # internals
    # ------------------------------------------------------------------ #

    @staticmethod
    def _append_selection(text: str, count: int) -> str:
        if not count:
            return text
        return f"{text} | Selected: {count}"

    @staticmethod
    def _append_stats(text: str, stats: Dict[str, Any]) -> str:
        """Scalar counters only; nested breakdowns are left to the API."""
        counters = [
            f"{key.replace('_', ' ')}: {value}"
            for key, value in stats.items()
            if isinstance(value, (int, float)) and not isinstance(value, bool)
        ]
        if not counters:
            return text
        return f"{text} | " + ", ".join(counters)
