"""
Modal for composing a notification broadcast to every user of one role.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Select, TextArea

from artclub_admin.resources import NOTIFICATION_TYPES, PRIORITY_CHOICES, ROLE_CHOICES


class SendNotificationModal(ModalScreen[Optional[Dict[str, Any]]]):
    """Dismisses with the send_bulk payload, or None when cancelled."""

    DEFAULT_CSS = """
    SendNotificationModal {
        align: center middle;
    }

    #send-container {
        width: 80;
        height: auto;
        padding: 1 2;
        border: thick $primary;
        background: $surface;
    }

    #send-message {
        height: 6;
    }

    #send-buttons {
        height: 3;
        margin-top: 1;
    }
    """

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
    ]

    def compose(self) -> ComposeResult:
        with Container(id="send-container"):
            yield Label("Send Notification", id="send-title")
            yield Label("Target role:")
            yield Select(ROLE_CHOICES, value=ROLE_CHOICES[-1][1], allow_blank=False, id="send-role")
            yield Label("Type:")
            yield Select(
                NOTIFICATION_TYPES, value=NOTIFICATION_TYPES[1][1], allow_blank=False, id="send-type"
            )
            yield Label("Priority:")
            yield Select(PRIORITY_CHOICES, value="medium", allow_blank=False, id="send-priority")
            yield Label("Message:")
            yield TextArea(id="send-message")
            with Horizontal(id="send-buttons"):
                yield Button("Cancel", id="cancel-button")
                yield Button("Send", variant="success", id="send-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-button":
            self._submit()
        else:
            self.action_cancel()

    def _submit(self) -> None:
        message = self.query_one("#send-message", TextArea).text.strip()
        if not message:
            self.notify("Please enter a message", severity="warning", timeout=3)
            return
        self.dismiss(
            {
                "role": str(self.query_one("#send-role", Select).value),
                "message": message,
                "notification_type": str(self.query_one("#send-type", Select).value),
                "priority": str(self.query_one("#send-priority", Select).value),
            }
        )

    def action_cancel(self) -> None:
        self.dismiss(None)
