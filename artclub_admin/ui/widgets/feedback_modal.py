"""
Modal asking for the feedback text an action needs (e.g. rejecting artwork).
"""

from __future__ import annotations

from typing import Optional

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label


class FeedbackModal(ModalScreen[Optional[str]]):
    """Dismisses with the entered text, or None when cancelled."""

    DEFAULT_CSS = """
    FeedbackModal {
        align: center middle;
    }

    #feedback-container {
        width: 70;
        height: auto;
        padding: 1 2;
        border: thick $warning;
        background: $surface;
    }

    #feedback-buttons {
        height: 3;
        margin-top: 1;
    }
    """

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
    ]

    def __init__(self, title: str, placeholder: str = "Feedback for the artist...", **kwargs):
        super().__init__(**kwargs)
        self.title_text = title
        self.placeholder = placeholder

    def compose(self) -> ComposeResult:
        with Container(id="feedback-container"):
            yield Label(self.title_text, id="feedback-title")
            yield Input(placeholder=self.placeholder, id="feedback-input")
            with Horizontal(id="feedback-buttons"):
                yield Button("Cancel", id="cancel-button")
                yield Button("Submit", variant="warning", id="submit-button")

    def on_mount(self) -> None:
        self.query_one("#feedback-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit-button":
            self._submit()
        else:
            self.action_cancel()

    def _submit(self) -> None:
        text = self.query_one("#feedback-input", Input).value.strip()
        if not text:
            self.notify("Please provide feedback", severity="warning", timeout=3)
            return
        self.dismiss(text)

    def action_cancel(self) -> None:
        self.dismiss(None)
