"""
Row of drop-downs, one per server-side filter of a resource
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Label, Select

from artclub_admin.models.query import ALL
from artclub_admin.resources import FilterSpec


def _with_all(choices: Sequence[Tuple[str, str]]) -> list:
    return [("All", ALL)] + [(label, value) for label, value in choices]


class FilterBar(Horizontal):
    """Filter selects; each change is posted as `FilterBar.Changed`."""

    DEFAULT_CSS = """
    FilterBar {
        height: 3;
    }

    FilterBar > Label {
        padding: 1 1 0 1;
    }

    FilterBar > Select {
        width: 24;
    }
    """

    class Changed(Message):
        def __init__(self, filter_name: str, value: str) -> None:
            super().__init__()
            self.filter_name = filter_name
            self.value = value

    def __init__(
        self,
        filters: Sequence[FilterSpec],
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self._filters = tuple(filters)

    def compose(self):
        for spec in self._filters:
            yield Label(f"{spec.label}:")
            yield Select(
                _with_all(spec.options()),
                value=ALL,
                allow_blank=False,
                id=f"filter-{spec.name}",
            )

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        select_id = event.select.id or ""
        if not select_id.startswith("filter-"):
            return
        self.post_message(self.Changed(select_id[len("filter-"):], str(event.value)))

    def set_options(self, name: str, choices: Sequence[Tuple[str, str]], current: str) -> None:
        """Replace a dynamic filter's choices without emitting a change."""
        options = _with_all(choices)
        if current != ALL and current not in {v for _, v in options}:
            options.append((current, current))
        select = self.query_one(f"#filter-{name}", Select)
        with select.prevent(Select.Changed):
            select.set_options(options)
            select.value = current

    def reset(self) -> None:
        for spec in self._filters:
            select = self.query_one(f"#filter-{spec.name}", Select)
            with select.prevent(Select.Changed):
                select.value = ALL
