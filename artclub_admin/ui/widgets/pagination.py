"""
Pagination widget for stepping through a server-paged list
"""

from typing import Optional

from textual.containers import Container
from textual.message import Message
from textual.widgets import Button, Label


class Pagination(Container):
    """
    Prev / next buttons around a page indicator.

    The server only tells us whether a neighbouring page exists, so there
    is no "last page" button and no "of N" in the label.
    """

    DEFAULT_CSS = """
    Pagination {
        layout: horizontal;
        height: 3;
        content-align: center middle;
        padding: 0 0;
    }

    Pagination > Button {
        min-width: 5;
        margin: 0 1;
    }

    Pagination > #page-indicator {
        min-width: 24;
        height: 3;
        content-align: center middle;
    }
    """

    class PageChanged(Message):
        """Page step requested: -1 for previous, +1 for next"""
        def __init__(self, step: int) -> None:
            super().__init__()
            self.step = step

    def __init__(
        self,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)

    def compose(self):
        """Create child widgets"""
        yield Button("< Prev", id="prev-page", classes="page-button", disabled=True)
        yield Label("Page [b]1[/b]", id="page-indicator", classes="page-indicator")
        yield Button("Next >", id="next-page", classes="page-button", disabled=True)

    def update_pages(self, current: int, total_count: int, can_prev: bool, can_next: bool) -> None:
        """
        Update pagination with new page information

        Args:
            current: Current page number
            total_count: Items across all pages of the filtered result
            can_prev: Whether a previous page may be requested now
            can_next: Whether a next page may be requested now
        """
        self.query_one("#page-indicator", Label).update(
            f"Page [b]{current}[/b] | {total_count} total"
        )
        self.query_one("#prev-page", Button).disabled = not can_prev
        self.query_one("#next-page", Button).disabled = not can_next

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle pagination button presses"""
        if event.button.id == "prev-page":
            self.post_message(self.PageChanged(-1))
        elif event.button.id == "next-page":
            self.post_message(self.PageChanged(1))
