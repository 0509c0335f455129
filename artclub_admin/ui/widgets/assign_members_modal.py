"""
Modal for choosing which members work on a project.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Label, SelectionList


class AssignMembersModal(ModalScreen[Optional[Tuple[int, ...]]]):
    """Dismisses with the chosen member ids, or None when cancelled."""

    DEFAULT_CSS = """
    AssignMembersModal {
        align: center middle;
    }

    #assign-container {
        width: 70;
        height: auto;
        max-height: 80%;
        padding: 1 2;
        border: thick $primary;
        background: $surface;
    }

    #assign-list {
        height: auto;
        max-height: 20;
    }

    #assign-buttons {
        height: 3;
        margin-top: 1;
    }
    """

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
    ]

    def __init__(
        self,
        title: str,
        members: Sequence[Tuple[str, int]],
        assigned: Iterable[int] = (),
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.title_text = title
        self.members = members
        self.assigned = set(assigned)

    def compose(self) -> ComposeResult:
        with Container(id="assign-container"):
            yield Label(self.title_text, id="assign-title")
            yield SelectionList[int](
                *((label, pk, pk in self.assigned) for label, pk in self.members),
                id="assign-list",
            )
            with Horizontal(id="assign-buttons"):
                yield Button("Cancel", id="cancel-button")
                yield Button("Assign", variant="success", id="assign-button")

    def on_mount(self) -> None:
        self.query_one(SelectionList).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "assign-button":
            self.dismiss(tuple(self.query_one(SelectionList).selected))
        else:
            self.action_cancel()

    def action_cancel(self) -> None:
        self.dismiss(None)
