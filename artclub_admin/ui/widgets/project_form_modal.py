"""
Modal form for creating or editing a project.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Checkbox, Input, Label, TextArea

from artclub_admin.errors import ValidationError
from artclub_admin.models.drafts import ProjectDraft


class ProjectFormModal(ModalScreen[Optional[ProjectDraft]]):
    """Dismisses with a validated ProjectDraft, or None when cancelled."""

    DEFAULT_CSS = """
    ProjectFormModal {
        align: center middle;
    }

    #project-form {
        width: 80;
        height: auto;
        padding: 1 2;
        border: thick $primary;
        background: $surface;
    }

    #project-description {
        height: 5;
    }

    #project-dates {
        height: auto;
    }

    #project-buttons {
        height: 3;
        margin-top: 1;
    }
    """

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("ctrl+s", "submit", "Save Project"),
    ]

    def __init__(self, title: str = "New Project", draft: Optional[ProjectDraft] = None, **kwargs):
        super().__init__(**kwargs)
        self.title_text = title
        # new projects start today
        self.draft = draft or ProjectDraft(start_date=date.today().isoformat())

    def compose(self) -> ComposeResult:
        d = self.draft
        with Container(id="project-form"):
            yield Label(self.title_text, id="project-form-title")
            yield Label("Title *")
            yield Input(d.title, id="project-title")
            yield Label("Description *")
            yield TextArea(d.description, id="project-description")
            yield Label("Progress (%)")
            yield Input(str(d.progress), type="integer", id="project-progress")
            with Horizontal(id="project-dates"):
                yield Input(d.start_date, placeholder="Start YYYY-MM-DD", id="project-start")
                yield Input(d.end_date, placeholder="End YYYY-MM-DD (optional)", id="project-end")
            yield Checkbox("Completed", d.is_completed, id="project-completed")
            with Horizontal(id="project-buttons"):
                yield Button("Cancel", id="cancel-button")
                yield Button("Save Project", variant="success", id="save-button")

    def on_mount(self) -> None:
        self.query_one("#project-title", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-button":
            self.action_submit()
        else:
            self.action_cancel()

    def action_submit(self) -> None:
        draft = ProjectDraft(
            title=self.query_one("#project-title", Input).value,
            description=self.query_one("#project-description", TextArea).text,
            progress=self.query_one("#project-progress", Input).value,
            start_date=self.query_one("#project-start", Input).value,
            end_date=self.query_one("#project-end", Input).value,
            is_completed=self.query_one("#project-completed", Checkbox).value,
            members=self.draft.members,
        )
        try:
            draft.to_payload()
        except ValidationError as e:
            self.notify(str(e), severity="warning", timeout=3)
            return
        self.dismiss(draft)

    def action_cancel(self) -> None:
        self.dismiss(None)
