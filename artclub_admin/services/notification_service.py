# artclub_admin/services/notification_service.py
"""Sending new notifications (the list side lives in ResourceService)."""

from __future__ import annotations

from typing import Any

from simple_logger import Slogger

from artclub_admin.api.client import ApiClient
from artclub_admin.errors import ValidationError
from artclub_admin.models.notification import PRIORITIES

SEND_PATH = "notifications/send_bulk/"


class NotificationService:
    """Broadcasts a notification to every user holding a role."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def send(
        self,
        *,
        role: str,
        message: str,
        notification_type: str,
        priority: str = "medium",
    ) -> Any:
        message = (message or "").strip()
        if not message:
            raise ValidationError("A message is required")
        if not role:
            raise ValidationError("A target role is required")
        if priority not in PRIORITIES:
            raise ValidationError(f"Unknown priority '{priority}'")

        Slogger.info(
            "Sending notification",
            {"role": role, "type": notification_type, "priority": priority},
        )
        return await self._client.post(
            SEND_PATH,
            {
                "role": role,
                "message": message,
                "notification_type": notification_type,
                "priority": priority,
            },
        )
