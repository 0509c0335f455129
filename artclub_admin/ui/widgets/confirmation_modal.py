"""
Yes/no modal shown before destructive actions such as deleting rows.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Label


class ConfirmationModal(ModalScreen[bool]):
    """Dismisses with True when the action is confirmed."""

    DEFAULT_CSS = """
    ConfirmationModal {
        align: center middle;
    }

    #confirm-container {
        width: 60;
        height: auto;
        padding: 1 2;
        border: thick $error;
        background: $surface;
    }

    #confirm-buttons {
        height: 3;
        margin-top: 1;
    }
    """

    BINDINGS = [
        ("escape", "answer(False)", "Cancel"),
    ]

    def __init__(self, title: str, message: str, confirm_label: str = "Delete", **kwargs):
        super().__init__(**kwargs)
        self.title_text = title
        self.message = message
        self.confirm_label = confirm_label

    def compose(self) -> ComposeResult:
        with Container(id="confirm-container"):
            yield Label(self.title_text, id="confirm-title")
            yield Label(self.message, id="confirm-message")
            with Horizontal(id="confirm-buttons"):
                yield Button("Cancel", variant="primary", id="cancel-button")
                yield Button(self.confirm_label, variant="error", id="confirm-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.action_answer(event.button.id == "confirm-button")

    def action_answer(self, confirmed: bool) -> None:
        self.dismiss(confirmed)
