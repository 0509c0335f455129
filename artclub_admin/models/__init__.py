"""Art Club admin data models."""

from artclub_admin.models.artwork import Artwork
from artclub_admin.models.bulk import BulkOutcome
from artclub_admin.models.event import Event
from artclub_admin.models.member import Member
from artclub_admin.models.notification import Notification
from artclub_admin.models.pagination import Page
from artclub_admin.models.project import Project
from artclub_admin.models.query import ALL, ASC, DESC, ListQuery, SortSpec

__all__ = [
    "ALL",
    "ASC",
    "DESC",
    "Artwork",
    "BulkOutcome",
    "Event",
    "ListQuery",
    "Member",
    "Notification",
    "Page",
    "Project",
    "SortSpec",
]
