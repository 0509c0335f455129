# artclub_admin/di.py
"""
Very small dependency-injection helper.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from artclub_admin.api.client import ApiClient
from artclub_admin.core.controller import Notifier, ResourceListController
from artclub_admin.resources import get_resource
from artclub_admin.services.notification_service import NotificationService
from artclub_admin.services.resource_service import ResourceService


class Container:
    """Holds lazily-created singletons."""

    def __init__(self, config: Dict[str, Any]) -> None:
        self._cfg = config
        self._api_client: ApiClient | None = None
        self._resource_services: Dict[str, ResourceService] = {}
        self._notification_service: NotificationService | None = None

    # ---------- infra ----------
    @property
    def api_client(self) -> ApiClient:
        if self._api_client is None:
            api = self._cfg.get("api", {})
            self._api_client = ApiClient(
                api.get("base_url", ""),
                api.get("token"),
                timeout=api.get("timeout", 30),
                impersonate=api.get("impersonate"),
            )
        return self._api_client

    async def close(self) -> None:
        if self._api_client is not None:
            await self._api_client.close()

    # ---------- services ----------
    def resource_service(self, name: str) -> ResourceService:
        if name not in self._resource_services:
            self._resource_services[name] = ResourceService(
                self.api_client, get_resource(name)
            )
        return self._resource_services[name]

    @property
    def notification_service(self) -> NotificationService:
        if self._notification_service is None:
            self._notification_service = NotificationService(self.api_client)
        return self._notification_service

    # ---------- controllers ----------
    def controller_for(
        self,
        name: str,
        notify: Optional[Notifier] = None,
        on_change: Optional[Callable[[], None]] = None,
    ) -> ResourceListController:
        """A fresh controller per mounted screen; services are shared."""
        return ResourceListController(
            get_resource(name),
            self.resource_service(name),
            notify=notify,
            on_change=on_change,
            export_dir=self._cfg.get("export", {}).get("directory", "exports"),
        )


# convenience factory
def build_container(config: Dict[str, Any]) -> Container:
    """Create a container for the given config."""
    return Container(config)
