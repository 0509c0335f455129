# artclub_admin/resources.py
"""
Per-resource configuration for the generic list controller.

Each admin screen is the same controller bound to one `ResourceConfig`:
endpoint path, id field, filter declarations (in wire order), default sort,
table/CSV columns and the row actions the screen offers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from artclub_admin.errors import ConfigError, ValidationError
from artclub_admin.models import (
    DESC,
    Artwork,
    Event,
    Member,
    Notification,
    Project,
    SortSpec,
)
from artclub_admin.utils.formatters import format_date, truncate_text


def _iso(value: Any) -> str:
    return value.isoformat() if value is not None else ""


# ---------------------------------------------------------------------- #
# building blocks
# ---------------------------------------------------------------------- #

@dataclass(frozen=True)
class FilterSpec:
    """
    One server-side filter.

    `name` is what the screen and the ListQuery use; `param` is the query
    string key. `values` translates a UI choice into its wire value when the
    two differ (e.g. "active" -> "true").
    """

    name: str
    param: str
    label: str
    choices: Tuple[Tuple[str, str], ...] = ()
    values: Mapping[str, str] = field(default_factory=dict)
    dynamic: Optional[Callable[[Sequence[Any]], Iterable[str]]] = None

    def wire_value(self, value: str) -> str:
        return self.values.get(value, value)

    def options(self, items: Sequence[Any] = ()) -> Tuple[Tuple[str, str], ...]:
        """Choices for the screen; dynamic filters derive theirs from the loaded rows."""
        if self.dynamic is None:
            return self.choices
        seen = sorted({str(v) for v in self.dynamic(items) if v not in (None, "")})
        return tuple((v, v) for v in seen)


@dataclass(frozen=True)
class Column:
    """A table or CSV column: header text, value accessor and optional sort key."""

    header: str
    accessor: Callable[[Any], Any]
    sort_key: Optional[str] = None


@dataclass(frozen=True)
class RowAction:
    """A row-scoped mutation, also used for bulk fan-out."""

    name: str
    label: str
    method: str                       # PATCH | POST | DELETE
    path: str = "{id}/"               # relative to the resource path
    past_tense: str = ""
    payload: Optional[Callable[[Any, Optional[str]], Optional[Dict[str, Any]]]] = None
    requires_feedback: bool = False
    destructive: bool = False
    applies_to: Optional[Callable[[Any], bool]] = None
    bulk: bool = True

    def validate(self, feedback: Optional[str]) -> None:
        if self.requires_feedback and not (feedback or "").strip():
            raise ValidationError(f"Feedback is required to {self.label.lower()}")

    def url(self, resource_path: str, row_id: Any) -> str:
        return resource_path.rstrip("/") + "/" + self.path.format(id=row_id)

    def body(self, row: Any, feedback: Optional[str] = None) -> Optional[Dict[str, Any]]:
        if self.payload is None:
            return None
        return self.payload(row, (feedback or "").strip() or None)

    def available_for(self, row: Any) -> bool:
        return self.applies_to is None or self.applies_to(row)


@dataclass(frozen=True)
class ResourceConfig:
    name: str                                   # used in file names and messages
    title: str
    path: str
    decode: Callable[[Mapping[str, Any]], Any]
    id_field: str = "id"
    noun: str = "item"
    filters: Tuple[FilterSpec, ...] = ()
    default_sort: Optional[SortSpec] = None
    columns: Tuple[Column, ...] = ()
    csv_columns: Tuple[Column, ...] = ()
    actions: Tuple[RowAction, ...] = ()
    stats_path: Optional[str] = None
    search_placeholder: str = "Search..."
    creatable: bool = False                     # "New" form available
    editable: bool = False                      # "Edit" form available

    def __post_init__(self) -> None:
        names = [f.name for f in self.filters]
        if len(names) != len(set(names)):
            raise ConfigError(f"Duplicate filter names in resource '{self.name}'")
        action_names = [a.name for a in self.actions]
        if len(action_names) != len(set(action_names)):
            raise ConfigError(f"Duplicate action names in resource '{self.name}'")

    def row_id(self, row: Any) -> Any:
        return getattr(row, self.id_field)

    def filter(self, name: str) -> FilterSpec:
        for spec in self.filters:
            if spec.name == name:
                return spec
        raise ConfigError(f"Resource '{self.name}' has no filter named '{name}'")

    def action(self, name: str) -> RowAction:
        for action in self.actions:
            if action.name == name:
                return action
        raise ConfigError(f"Resource '{self.name}' has no action named '{name}'")

    def sort_key_for(self, header: str) -> Optional[str]:
        for column in self.columns:
            if column.header == header:
                return column.sort_key
        return None

    def plural(self, count: int) -> str:
        return f"{count} {self.noun}(s)"


# ---------------------------------------------------------------------- #
# members
# ---------------------------------------------------------------------- #

ROLE_CHOICES = (("Admin", "admin"), ("Manager", "manager"), ("Member", "member"))

MEMBERS = ResourceConfig(
    name="members",
    title="Members",
    path="users/",
    decode=Member.from_api,
    id_field="pk",
    noun="user",
    filters=(
        FilterSpec("role", "role", "Role", ROLE_CHOICES),
        FilterSpec(
            "status", "is_active", "Status",
            (("Active", "active"), ("Inactive", "inactive")),
            values={"active": "true", "inactive": "false"},
        ),
    ),
    default_sort=SortSpec("date_joined", DESC),
    columns=(
        Column("Name", lambda m: m.full_name, "first_name"),
        Column("Email", lambda m: m.email, "email"),
        Column("Role", lambda m: m.role),
        Column("Status", lambda m: "Active" if m.is_active else "Inactive"),
        Column("Last Active", lambda m: format_date(m.last_login), "last_login"),
        Column("Joined", lambda m: format_date(m.date_joined), "date_joined"),
    ),
    csv_columns=(
        Column("ID", lambda m: m.pk),
        Column("First Name", lambda m: m.first_name or ""),
        Column("Last Name", lambda m: m.last_name or ""),
        Column("Email", lambda m: m.email),
        Column("Role", lambda m: m.role),
        Column("Status", lambda m: "Active" if m.is_active else "Inactive"),
        Column("Joined", lambda m: _iso(m.date_joined)),
    ),
    actions=(
        RowAction("activate", "Activate", "PATCH", "{id}/activate/", "activated",
                  applies_to=lambda m: not m.is_active),
        RowAction("deactivate", "Deactivate", "PATCH", "{id}/deactivate/", "deactivated",
                  applies_to=lambda m: m.is_active),
        RowAction("delete", "Delete", "DELETE", "{id}/", "deleted", destructive=True),
    ),
    search_placeholder="Search users by name or email...",
)


# ---------------------------------------------------------------------- #
# artworks
# ---------------------------------------------------------------------- #

UNAPPROVE_FEEDBACK = "Removed from approved collection"

ARTWORKS = ResourceConfig(
    name="artworks",
    title="Artwork Approvals",
    path="artwork/",
    decode=Artwork.from_api,
    noun="artwork",
    filters=(
        FilterSpec(
            "approval_status", "approval_status", "Status",
            (("Pending", "pending"), ("Approved", "approved"), ("Rejected", "rejected")),
        ),
        FilterSpec(
            "category", "category", "Category",
            dynamic=lambda items: (a.category for a in items),
        ),
    ),
    default_sort=SortSpec("submission_date", DESC),
    columns=(
        Column("Title", lambda a: truncate_text(a.title, 40), "title"),
        Column("Artist", lambda a: a.artist_name, "artist_name"),
        Column("Category", lambda a: a.category, "category"),
        Column("Status", lambda a: a.approval_status),
        Column("Submitted", lambda a: format_date(a.submission_date), "submission_date"),
    ),
    csv_columns=(
        Column("ID", lambda a: a.id),
        Column("Title", lambda a: a.title),
        Column("Artist", lambda a: a.artist_name),
        Column("Category", lambda a: a.category),
        Column("Status", lambda a: a.approval_status),
        Column("Submission Date", lambda a: _iso(a.submission_date)),
    ),
    actions=(
        RowAction("approve", "Approve", "PATCH", "{id}/approve/", "approved",
                  applies_to=lambda a: a.approval_status != "approved"),
        RowAction("reject", "Reject", "PATCH", "{id}/reject/", "rejected",
                  payload=lambda a, feedback: {"feedback": feedback},
                  requires_feedback=True,
                  applies_to=lambda a: a.approval_status != "rejected"),
        RowAction("unapprove", "Unapprove", "PATCH", "{id}/reject/", "unapproved",
                  payload=lambda a, feedback: {"feedback": UNAPPROVE_FEEDBACK},
                  applies_to=lambda a: a.approval_status == "approved",
                  bulk=False),
        RowAction("delete", "Delete", "DELETE", "{id}/", "deleted", destructive=True),
    ),
    stats_path="artworks/stats/",
    search_placeholder="Search artworks by title, artist or description...",
)


# ---------------------------------------------------------------------- #
# events
# ---------------------------------------------------------------------- #

EVENTS = ResourceConfig(
    name="events",
    title="Events",
    path="events/",
    decode=Event.from_api,
    noun="event",
    filters=(
        FilterSpec(
            "status", "is_completed", "Status",
            (("Upcoming", "upcoming"), ("Completed", "completed")),
            values={"completed": "true", "upcoming": "false"},
        ),
        FilterSpec(
            "location", "location", "Location",
            dynamic=lambda items: (e.location for e in items),
        ),
    ),
    default_sort=SortSpec("date", DESC),
    columns=(
        Column("Title", lambda e: truncate_text(e.title, 40), "title"),
        Column("Location", lambda e: e.location, "location"),
        Column("Date", lambda e: format_date(e.date), "date"),
        Column("Status", lambda e: e.status_label),
        Column("Participants", lambda e: str(e.attendee_count)),
    ),
    csv_columns=(
        Column("ID", lambda e: e.id),
        Column("Title", lambda e: e.title),
        Column("Description", lambda e: e.description),
        Column("Location", lambda e: e.location),
        Column("Date", lambda e: _iso(e.date)),
        Column("Status", lambda e: e.status_label),
        Column("Participants", lambda e: e.attendee_count),
    ),
    actions=(
        RowAction("delete", "Delete", "DELETE", "{id}/", "deleted", destructive=True),
    ),
    stats_path="event-stats/",
    search_placeholder="Search events by title, description or location...",
    creatable=True,
)


# ---------------------------------------------------------------------- #
# projects
# ---------------------------------------------------------------------- #

PROJECTS = ResourceConfig(
    name="projects",
    title="Projects",
    path="projects/",
    decode=Project.from_api,
    noun="project",
    filters=(
        FilterSpec(
            "status", "status", "Status",
            (("In Progress", "in_progress"), ("Completed", "completed")),
        ),
        FilterSpec(
            "member", "members", "Member",
            dynamic=lambda items: (m for p in items for m in p.members),
        ),
    ),
    default_sort=SortSpec("start_date", DESC),
    columns=(
        Column("Title", lambda p: truncate_text(p.title, 40), "title"),
        Column("Progress", lambda p: f"{p.progress or 0}%", "progress"),
        Column("Status", lambda p: p.effective_status),
        Column("Start Date", lambda p: format_date(p.start_date), "start_date"),
        Column("Members", lambda p: str(p.member_count)),
    ),
    csv_columns=(
        Column("ID", lambda p: p.id),
        Column("Title", lambda p: p.title),
        Column("Description", lambda p: p.description),
        Column("Progress", lambda p: p.progress or 0),
        Column("Status", lambda p: p.effective_status),
        Column("Start Date", lambda p: _iso(p.start_date)),
        Column("Assigned Members", lambda p: p.member_count),
    ),
    actions=(
        RowAction("complete", "Mark Completed", "POST", "{id}/complete/", "marked as completed",
                  applies_to=lambda p: not p.is_completed),
        RowAction("delete", "Delete", "DELETE", "{id}/", "deleted", destructive=True),
    ),
    stats_path="project-stats/",
    search_placeholder="Search projects by title or description...",
    creatable=True,
    editable=True,
)


# ---------------------------------------------------------------------- #
# notifications
# ---------------------------------------------------------------------- #

NOTIFICATION_TYPES = (
    ("Artwork Approved", "artwork_approved"),
    ("Event Update", "event_update"),
    ("Project Invitation", "project_invite"),
)
PRIORITY_CHOICES = (("Low", "low"), ("Medium", "medium"), ("High", "high"))


def _resend_payload(n: Notification, feedback: Optional[str]) -> Dict[str, Any]:
    return {
        "role": n.target_role,
        "message": n.message,
        "notification_type": n.notification_type,
        "priority": n.priority,
    }


NOTIFICATIONS = ResourceConfig(
    name="notifications",
    title="Notifications",
    path="notifications/",
    decode=Notification.from_api,
    noun="notification",
    filters=(
        FilterSpec("type", "notification_type", "Type", NOTIFICATION_TYPES),
        FilterSpec("role", "target_role", "Role", ROLE_CHOICES),
        FilterSpec(
            "status", "is_read", "Status",
            (("Read", "read"), ("Unread", "unread")),
            values={"read": "true", "unread": "false"},
        ),
    ),
    default_sort=SortSpec("created_at", DESC),
    columns=(
        Column("Sender", lambda n: n.sender_label),
        Column("Message", lambda n: truncate_text(n.message, 50), "message"),
        Column("Type", lambda n: n.notification_type, "notification_type"),
        Column("Priority", lambda n: n.priority, "priority"),
        Column("Target Role", lambda n: n.target_role),
        Column("Status", lambda n: n.status_label),
        Column("Sent Date", lambda n: format_date(n.created_at), "created_at"),
    ),
    csv_columns=(
        Column("ID", lambda n: n.id),
        Column("Message", lambda n: n.message),
        Column("Type", lambda n: n.notification_type),
        Column("Priority", lambda n: n.priority),
        Column("Target Role", lambda n: n.target_role),
        Column("Status", lambda n: n.status_label),
        Column("Sent Date", lambda n: _iso(n.created_at)),
        Column("Sender", lambda n: n.sender_label),
    ),
    actions=(
        RowAction("read", "Mark Read", "PATCH", "{id}/", "marked as read",
                  payload=lambda n, feedback: {"is_read": True},
                  applies_to=lambda n: not n.is_read),
        RowAction("unread", "Mark Unread", "PATCH", "{id}/", "marked as unread",
                  payload=lambda n, feedback: {"is_read": False},
                  applies_to=lambda n: n.is_read),
        RowAction("resend", "Resend", "POST", "send_bulk/", "resent",
                  payload=_resend_payload, bulk=False),
        RowAction("delete", "Delete", "DELETE", "{id}/", "deleted", destructive=True),
    ),
    stats_path="notifications/stats/",
    search_placeholder="Search notifications by message...",
)


RESOURCES: Dict[str, ResourceConfig] = {
    cfg.name: cfg for cfg in (MEMBERS, ARTWORKS, EVENTS, PROJECTS, NOTIFICATIONS)
}


def get_resource(name: str) -> ResourceConfig:
    try:
        return RESOURCES[name]
    except KeyError:
        raise ConfigError(f"Unknown resource '{name}'") from None
