# artclub_admin/ui/screens/resource_screen.py
"""
Generic list screen: one per resource, all driven by ResourceListController
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from simple_logger import Slogger

from artclub_admin.core.controller import ListState, ResourceListController
from artclub_admin.core.debounce import Debouncer
from artclub_admin.di import Container as ServiceContainer
from artclub_admin.errors import AdminError
from artclub_admin.models.drafts import MemberAssignment, ProjectDraft
from artclub_admin.resources import RowAction

# UI helpers
from artclub_admin.ui.controllers.status_bar import StatusBarController

# Widgets
from artclub_admin.ui.widgets.action_modal import RowActionsModal
from artclub_admin.ui.widgets.assign_members_modal import AssignMembersModal
from artclub_admin.ui.widgets.confirmation_modal import ConfirmationModal
from artclub_admin.ui.widgets.event_form_modal import EventFormModal
from artclub_admin.ui.widgets.feedback_modal import FeedbackModal
from artclub_admin.ui.widgets.filter_bar import FilterBar
from artclub_admin.ui.widgets.pagination import Pagination
from artclub_admin.ui.widgets.project_form_modal import ProjectFormModal
from artclub_admin.ui.widgets.resource_table import ResourceTable
from artclub_admin.ui.widgets.search_bar import SearchBar
from artclub_admin.ui.widgets.send_notification_modal import SendNotificationModal
from artclub_admin.ui.widgets.state_banner import StateBanner


class ResourceListScreen(Screen):
    """Searchable, filterable, sortable list of one remote resource."""

    FORMS = {
        "events": (EventFormModal, None),
        "projects": (ProjectFormModal, ProjectDraft.from_project),
    }

    BINDINGS = [
        Binding("f", "focus_search", "Search", show=True),
        Binding("r", "refresh", "Refresh", show=True),
        Binding("space", "toggle_row", "Select", show=True),
        Binding("ctrl+a", "select_all", "Select All", show=True),
        Binding("escape", "clear_selection", "Clear Selection", show=False),
        Binding("a", "row_actions", "Actions", show=True),
        Binding("delete", "delete_selected", "Delete", show=True),
        Binding("e", "export", "Export CSV", show=True),
        Binding("n", "next_page", "Next Page", show=False),
        Binding("p", "prev_page", "Prev Page", show=False),
        Binding("s", "send_notification", "Send", show=False),
        Binding("c", "create", "New", show=False),
        Binding("u", "edit", "Edit", show=False),
        Binding("m", "assign_members", "Members", show=False),
    ]

    # ------------------------------------------------------------------ #

    def __init__(
        self,
        container: ServiceContainer,
        resource: str,
        config: Dict[str, Any],
        *,
        id: Optional[str] = None,
    ) -> None:
        super().__init__(id=id or f"{resource}_screen")
        self.container = container
        self.controller: ResourceListController = container.controller_for(
            resource, notify=self._notify, on_change=self._render
        )
        self.config = config
        delay = config.get("ui", {}).get("debounce_ms", 500)
        self._debouncer: Debouncer[str] = Debouncer(self._apply_search, delay, initial="")

    # ------------------------------------------------------------------ #
    # Compose & mount
    # ------------------------------------------------------------------ #

    def compose(self) -> ComposeResult:
        cfg = self.controller.config
        yield Header(show_clock=True)

        with Container(id="main-container"):
            with Vertical(id="content-area"):
                yield Static(cfg.title, id="screen-title")
                yield SearchBar(cfg.search_placeholder, id="search-bar")
                yield FilterBar(cfg.filters, id="filter-bar")
                yield StateBanner(id="state-banner")
                yield ResourceTable(id="resource-table")
                yield Pagination(id="pagination")

        yield Static(id="status-bar", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(ResourceTable).styles.height = "1fr"
        self.status_controller = StatusBarController(self.query_one("#status-bar", Static))
        self._fetch()
        self._load_stats()

    def on_screen_resume(self) -> None:
        self.app.sub_title = self.controller.config.title

    def on_unmount(self) -> None:
        self._debouncer.cancel()

    # ------------------------------------------------------------------ #
    # controller plumbing
    # ------------------------------------------------------------------ #

    def _notify(self, message: str, severity: str) -> None:
        timeout = 5 if severity == "error" else 3
        self.app.notify(message, severity=severity, timeout=timeout)

    def _fetch(self) -> None:
        self.run_worker(self.controller.refresh(), group="fetch")

    def _load_stats(self) -> None:
        if self.controller.config.stats_path:
            self.run_worker(self.controller.load_stats(), group="stats")

    def _apply_search(self, text: str) -> None:
        self.run_worker(self.controller.set_search(text), group="fetch")

    def _render(self) -> None:
        """Redraw every widget from controller state."""
        if not self.is_mounted:
            return
        ctrl = self.controller
        cfg = ctrl.config

        self.query_one(StateBanner).show(ctrl.state, self._state_message())

        table = self.query_one(ResourceTable)
        table.load(
            cfg.columns,
            ctrl.items,
            [cfg.row_id(item) for item in ctrl.items],
            ctrl.selected_ids,
            ctrl.query.sort,
            all_selected=ctrl.selection.all_selected,
        )
        table.display = ctrl.state is ListState.POPULATED

        filter_bar = self.query_one(FilterBar)
        for spec in cfg.filters:
            if spec.dynamic is not None:
                filter_bar.set_options(
                    spec.name, ctrl.filter_options(spec.name), ctrl.query.filter_value(spec.name)
                )

        self.query_one(Pagination).update_pages(
            ctrl.navigator.page, ctrl.total_count, ctrl.has_prev, ctrl.has_next
        )
        self.status_controller.update(ctrl)

    def _state_message(self) -> str:
        ctrl = self.controller
        state = ctrl.state
        if state is ListState.LOADING:
            return f"Loading {ctrl.config.title.lower()}..."
        if state is ListState.ERROR and ctrl.last_error is not None:
            return f"Could not load {ctrl.config.title.lower()}: {ctrl.last_error}. Press r to retry."
        if state is ListState.EMPTY:
            return f"No {ctrl.config.noun}s found"
        return ""

    # ------------------------------------------------------------------ #
    # Event handlers
    # ------------------------------------------------------------------ #

    def on_search_bar_changed(self, event: SearchBar.Changed) -> None:
        self._debouncer.push(event.query)

    def on_search_bar_cleared(self, event: SearchBar.Cleared) -> None:
        self._debouncer.cancel()
        self.query_one(FilterBar).reset()
        self.query_one(SearchBar).reset()
        self.run_worker(self.controller.clear_filters(), group="fetch")

    def on_filter_bar_changed(self, event: FilterBar.Changed) -> None:
        self.run_worker(self.controller.set_filter(event.filter_name, event.value), group="fetch")

    def on_resource_table_sort_requested(self, event: ResourceTable.SortRequested) -> None:
        self.controller.sort_by_header(event.header)

    def on_resource_table_row_toggled(self, event: ResourceTable.RowToggled) -> None:
        self.controller.toggle(event.row_id)

    def on_resource_table_select_all_requested(self, event: ResourceTable.SelectAllRequested) -> None:
        self.action_select_all()

    def on_pagination_page_changed(self, event: Pagination.PageChanged) -> None:
        if event.step > 0:
            self.action_next_page()
        else:
            self.action_prev_page()

    # ------------------------------------------------------------------ #
    # Action handlers
    # ------------------------------------------------------------------ #

    def action_focus_search(self) -> None:
        self.query_one(SearchBar).focus_input()

    def action_refresh(self) -> None:
        self._fetch()
        self._load_stats()

    def action_next_page(self) -> None:
        self.run_worker(self.controller.next_page(), group="fetch")

    def action_prev_page(self) -> None:
        self.run_worker(self.controller.prev_page(), group="fetch")

    def action_toggle_row(self) -> None:
        row_id = self.query_one(ResourceTable).current_row_id
        if row_id is not None:
            self.controller.toggle(row_id)

    def action_select_all(self) -> None:
        self.controller.select_all(not self.controller.selection.all_selected)

    def action_clear_selection(self) -> None:
        self.controller.clear_selection()

    def action_export(self) -> None:
        self.controller.export()

    def action_row_actions(self) -> None:
        """Bulk actions when rows are selected, otherwise actions for the cursor row."""
        ctrl = self.controller
        cfg = ctrl.config
        selected = ctrl.selected_ids
        if selected:
            actions = [a for a in cfg.actions if a.bulk]
            heading = f"Actions for {cfg.plural(len(selected))}"
            target: Optional[Hashable] = None
        else:
            target = self.query_one(ResourceTable).current_row_id
            if target is None:
                self._notify(f"No {cfg.noun} selected for actions", "warning")
                return
            row = ctrl.row(target)
            actions = [a for a in cfg.actions if a.available_for(row)]
            heading = f"Actions for {cfg.noun} #{target}"

        def chosen(name: Optional[str]) -> None:
            if name:
                self._start_action(cfg.action(name), target)

        self.app.push_screen(RowActionsModal(heading, actions), chosen)

    def action_delete_selected(self) -> None:
        ctrl = self.controller
        try:
            action = ctrl.config.action("delete")
        except AdminError:
            return
        target = None if ctrl.selected_ids else self.query_one(ResourceTable).current_row_id
        if target is None and not ctrl.selected_ids:
            self._notify(f"No {ctrl.config.noun}s selected", "warning")
            return
        self._start_action(action, target)

    def action_send_notification(self) -> None:
        if self.controller.config.name != "notifications":
            return
        self.app.push_screen(SendNotificationModal(), self._send_notification)

    # ------------------------------------------------------------------ #
    # mutation flow
    # ------------------------------------------------------------------ #

    def _start_action(self, action: RowAction, row_id: Optional[Hashable]) -> None:
        """Collect feedback and confirmation as the action requires, then run it."""
        ids = None if row_id is None else [row_id]
        count = len(ids) if ids is not None else len(self.controller.selected_ids)
        subject = (
            f"{self.controller.config.noun} #{row_id}"
            if row_id is not None
            else self.controller.config.plural(count)
        )

        def run(feedback: Optional[str] = None) -> None:
            Slogger.info(
                f"Running '{action.name}' on {subject}",
                {"screen": "ResourceListScreen", "resource": self.controller.config.name},
            )
            self.run_worker(
                self.controller.run_action(action.name, ids, feedback=feedback),
                group="mutate",
            )

        if action.requires_feedback:
            def with_feedback(text: Optional[str]) -> None:
                if text:
                    run(text)

            self.app.push_screen(FeedbackModal(f"{action.label} {subject}"), with_feedback)
        elif action.destructive:
            def confirmed(answer: Optional[bool]) -> None:
                if answer:
                    run()

            self.app.push_screen(
                ConfirmationModal(
                    f"Confirm {action.label}",
                    f"Are you sure you want to {action.label.lower()} {subject}?\n\n"
                    "This action cannot be undone.",
                    confirm_label=action.label,
                ),
                confirmed,
            )
        else:
            run()

    def _send_notification(self, payload: Optional[Dict[str, Any]]) -> None:
        if payload:
            self.run_worker(self._send(payload), group="mutate")

    async def _send(self, payload: Dict[str, Any]) -> None:
        try:
            await self.container.notification_service.send(**payload)
        except AdminError as e:
            Slogger.exception(e, "Sending notification failed", {"role": payload.get("role")})
            self._notify(f"Failed to send notification: {e}", "error")
            return
        self._notify(f"Notification sent to all {payload['role']}s", "information")
        await self.controller.refresh()
        await self.controller.load_stats()

    # ------------------------------------------------------------------ #
    # create / edit forms
    # ------------------------------------------------------------------ #

    def action_create(self) -> None:
        cfg = self.controller.config
        if not cfg.creatable or cfg.name not in self.FORMS:
            return
        modal, _ = self.FORMS[cfg.name]

        def submitted(draft) -> None:
            if draft is not None:
                self.run_worker(self.controller.save(draft), group="mutate")

        self.app.push_screen(modal(f"New {cfg.noun.capitalize()}"), submitted)

    def action_edit(self) -> None:
        cfg = self.controller.config
        if not cfg.editable or self.FORMS.get(cfg.name, (None, None))[1] is None:
            return
        row_id = self.query_one(ResourceTable).current_row_id
        row = self.controller.row(row_id) if row_id is not None else None
        if row is None:
            self._notify(f"No {cfg.noun} selected to edit", "warning")
            return
        modal, to_draft = self.FORMS[cfg.name]

        def submitted(draft) -> None:
            if draft is not None:
                self.run_worker(self.controller.save(draft, row_id), group="mutate")

        self.app.push_screen(modal(f"Edit {cfg.noun.capitalize()} #{row_id}", to_draft(row)), submitted)

    def action_assign_members(self) -> None:
        if self.controller.config.name != "projects":
            return
        row_id = self.query_one(ResourceTable).current_row_id
        if row_id is None or self.controller.row(row_id) is None:
            self._notify("No project selected", "warning")
            return
        self.run_worker(self._assign_members(row_id), group="members")

    async def _assign_members(self, project_id: Hashable) -> None:
        try:
            members = await self.container.resource_service("members").all_rows()
        except AdminError as e:
            Slogger.exception(e, "Loading members failed", {"project": project_id})
            self._notify(f"Failed to fetch members: {e}", "error")
            return

        project = self.controller.row(project_id)
        if project is None:
            # the list was refetched while members were loading
            self._notify(f"Project #{project_id} is no longer on this page", "warning")
            return
        choices = [(m.full_name, m.pk) for m in members]

        def chosen(ids: Optional[tuple]) -> None:
            if ids is not None:
                self.run_worker(
                    self.controller.save(
                        MemberAssignment(ids), project_id, success="Members assigned successfully"
                    ),
                    group="mutate",
                )

        self.app.push_screen(
            AssignMembersModal(f"Assign Members to {project.title}", choices, project.members),
            chosen,
        )
