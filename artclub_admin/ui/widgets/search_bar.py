"""
Search bar widget for list filtering
"""

from typing import Optional

from textual.containers import Container
from textual.message import Message
from textual.widgets import Button, Input


class SearchBar(Container):
    """
    Search input plus a clear-filters button.

    Every keystroke is forwarded as `Changed`; the screen debounces it.
    """

    DEFAULT_CSS = """
    SearchBar {
        layout: horizontal;
        height: 3;
    }

    SearchBar > Input {
        width: 1fr;
    }
    """

    class Changed(Message):
        """Search text edited"""
        def __init__(self, query: str) -> None:
            super().__init__()
            self.query = query

    class Cleared(Message):
        """Clear-filters button pressed"""

    def __init__(
        self,
        placeholder: str = "Search...",
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self._placeholder = placeholder

    def compose(self):
        """Create child widgets"""
        yield Input(placeholder=self._placeholder, id="search-input")
        yield Button("Clear Filters", id="clear-btn")

    @property
    def value(self) -> str:
        return self.query_one("#search-input", Input).value

    def focus_input(self) -> None:
        """Focus the search input"""
        self.query_one("#search-input", Input).focus()

    def reset(self) -> None:
        self.query_one("#search-input", Input).value = ""

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            event.stop()
            self.post_message(self.Changed(event.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "clear-btn":
            event.stop()
            self.post_message(self.Cleared())
