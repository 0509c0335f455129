"""
Modal form for adding a club event.
"""

from __future__ import annotations

from typing import Optional

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, TextArea

from artclub_admin.errors import ValidationError
from artclub_admin.models.drafts import EventDraft


class EventFormModal(ModalScreen[Optional[EventDraft]]):
    """Dismisses with a validated EventDraft, or None when cancelled."""

    DEFAULT_CSS = """
    EventFormModal {
        align: center middle;
    }

    #event-form {
        width: 80;
        height: auto;
        padding: 1 2;
        border: thick $primary;
        background: $surface;
    }

    #event-description {
        height: 5;
    }

    #event-buttons {
        height: 3;
        margin-top: 1;
    }
    """

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("ctrl+s", "submit", "Save Event"),
    ]

    def __init__(self, title: str = "Add New Event", **kwargs):
        super().__init__(**kwargs)
        self.title_text = title

    def compose(self) -> ComposeResult:
        with Container(id="event-form"):
            yield Label(self.title_text, id="event-form-title")
            yield Label("Title *")
            yield Input(placeholder="Event Title", id="event-title")
            yield Label("Location *")
            yield Input(placeholder="Location", id="event-location")
            yield Label("Date *")
            yield Input(placeholder="YYYY-MM-DD HH:MM", id="event-date")
            yield Label("Description")
            yield TextArea(id="event-description")
            with Horizontal(id="event-buttons"):
                yield Button("Cancel", id="cancel-button")
                yield Button("Save Event", variant="success", id="save-button")

    def on_mount(self) -> None:
        self.query_one("#event-title", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-button":
            self.action_submit()
        else:
            self.action_cancel()

    def action_submit(self) -> None:
        draft = EventDraft(
            title=self.query_one("#event-title", Input).value,
            location=self.query_one("#event-location", Input).value,
            date=self.query_one("#event-date", Input).value,
            description=self.query_one("#event-description", TextArea).text,
        )
        try:
            draft.to_payload()
        except ValidationError as e:
            self.notify(str(e), severity="warning", timeout=3)
            return
        self.dismiss(draft)

    def action_cancel(self) -> None:
        self.dismiss(None)
