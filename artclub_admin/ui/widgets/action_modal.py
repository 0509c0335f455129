"""
Modal widget listing the row actions available for one row or a selection.
"""

from __future__ import annotations

from typing import Optional, Sequence

from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label

from artclub_admin.resources import RowAction


class RowActionsModal(ModalScreen[Optional[str]]):
    """Dismisses with the chosen action name, or None when closed."""

    DEFAULT_CSS = """
    RowActionsModal {
        align: center middle;
    }

    #row-actions-container {
        width: 50;
        height: auto;
        padding: 1 2;
        border: thick $primary;
        background: $surface;
    }

    #actions-list > Button {
        width: 100%;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        ("escape", "close", "Close"),
    ]

    def __init__(
        self,
        heading: str,
        actions: Sequence[RowAction],
        *,
        id: str | None = None,
        name: str | None = None,
        classes: str | None = None,
    ):
        super().__init__(id=id, name=name, classes=classes)
        self.heading = heading
        self.actions = tuple(actions)

    def compose(self) -> ComposeResult:
        with Container(id="row-actions-container"):
            yield Label(self.heading, id="row-actions-title")

            with Vertical(id="actions-list"):
                if not self.actions:
                    yield Label("No actions available")
                for action in self.actions:
                    yield Button(
                        action.label,
                        variant="error" if action.destructive else "primary",
                        id=f"action-{action.name}",
                    )
                yield Button("Close", id="close-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("action-"):
            self.dismiss(button_id[len("action-"):])
        else:
            self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
