"""
Banner shown in place of the table while loading, on error or when empty.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.widgets import LoadingIndicator, Static

from artclub_admin.core.controller import ListState


class StateBanner(Container):
    """Mirrors the controller's ListState; hidden while the list is populated."""

    DEFAULT_CSS = """
    StateBanner {
        height: auto;
        padding: 0 1;
    }

    StateBanner LoadingIndicator {
        height: 1;
    }
    """

    state = reactive(ListState.LOADING)
    message = reactive("Loading...")

    def compose(self) -> ComposeResult:
        with Container(id="state-container"):
            yield LoadingIndicator(id="state-spinner")
            yield Static(self.message, id="state-message", markup=False)

    def show(self, state: ListState, message: str) -> None:
        self.state = state
        self.message = message

    def watch_state(self, state: ListState) -> None:
        self.display = state is not ListState.POPULATED
        if self.is_mounted:
            self.query_one("#state-spinner", LoadingIndicator).display = state is ListState.LOADING
            self.set_class(state is ListState.ERROR, "-error")

    def watch_message(self, message: str) -> None:
        if self.is_mounted:
            self.query_one("#state-message", Static).update(message)
