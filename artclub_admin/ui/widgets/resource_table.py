"""
DataTable for a resource list with a selection column and sortable headers
"""

from typing import Any, Hashable, List, Optional, Sequence

from rich.text import Text
from textual.message import Message
from textual.widgets import DataTable

from artclub_admin.models.query import SortSpec
from artclub_admin.resources import Column

SELECT_COLUMN = "__selected__"


class ResourceTable(DataTable):
    """
    Rows are keyed by position; `row_ids` maps positions back to resource ids.
    """

    class RowToggled(Message):
        """Enter pressed (or row clicked) on a row"""
        def __init__(self, row_id: Hashable) -> None:
            super().__init__()
            self.row_id = row_id

    class SortRequested(Message):
        """A column header was clicked"""
        def __init__(self, header: str) -> None:
            super().__init__()
            self.header = header

    class SelectAllRequested(Message):
        """The selection column header was clicked"""

    def __init__(
        self,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.cursor_type = "row"
        self.zebra_stripes = True
        self.row_ids: List[Hashable] = []

    def load(
        self,
        columns: Sequence[Column],
        items: Sequence[Any],
        row_ids: Sequence[Hashable],
        selected: Sequence[Hashable],
        sort: Optional[SortSpec],
        all_selected: bool = False,
    ) -> None:
        """Redraw headers and rows; keeps the cursor on the same row index."""
        cursor = self.cursor_row
        self.clear(columns=True)

        self.add_column(Text("[x]" if all_selected else "[ ]"), key=SELECT_COLUMN, width=4)
        for column in columns:
            label = column.header
            if sort is not None and column.sort_key == sort.key:
                label += " ▼" if sort.descending else " ▲"
            self.add_column(Text(label), key=column.header)

        chosen = set(selected)
        self.row_ids = list(row_ids)
        for idx, (item, row_id) in enumerate(zip(items, self.row_ids)):
            mark = Text("[x]" if row_id in chosen else "[ ]")
            cells = [Text(str(column.accessor(item) or "")) for column in columns]
            self.add_row(mark, *cells, key=str(idx))

        if self.row_ids:
            self.move_cursor(row=min(cursor, len(self.row_ids) - 1), animate=False)

    @property
    def current_row_id(self) -> Optional[Hashable]:
        if not self.row_ids or self.cursor_row < 0 or self.cursor_row >= len(self.row_ids):
            return None
        return self.row_ids[self.cursor_row]

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        index = int(event.row_key.value)
        if 0 <= index < len(self.row_ids):
            self.post_message(self.RowToggled(self.row_ids[index]))

    def on_data_table_header_selected(self, event: DataTable.HeaderSelected) -> None:
        event.stop()
        key = event.column_key.value
        if key == SELECT_COLUMN:
            self.post_message(self.SelectAllRequested())
        elif key:
            self.post_message(self.SortRequested(key))
