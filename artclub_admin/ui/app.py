"""
Main Textual application class for the Art Club admin console
"""

from __future__ import annotations

from typing import Any, Dict

from textual.app import App
from textual.binding import Binding

from simple_logger import Slogger

from artclub_admin.di import Container, build_container
from artclub_admin.resources import RESOURCES
from artclub_admin.ui.screens.resource_screen import ResourceListScreen

# key -> resource name, in menu order
SCREEN_KEYS = {
    "1": "members",
    "2": "artworks",
    "3": "events",
    "4": "projects",
    "5": "notifications",
}


class AdminApp(App):
    """Terminal dashboard for club administrators."""

    TITLE = "Art Club Admin"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("1", "show('members')", "Members", show=True),
        Binding("2", "show('artworks')", "Artworks", show=True),
        Binding("3", "show('events')", "Events", show=True),
        Binding("4", "show('projects')", "Projects", show=True),
        Binding("5", "show('notifications')", "Notifications", show=True),
    ]

    # ------------------------------------------------------------------ #
    # init / mount
    # ------------------------------------------------------------------ #

    def __init__(self, config: Dict[str, Any], start: str = "artworks") -> None:
        super().__init__()
        self.config = config
        self.container: Container = build_container(config)
        self.start = start if start in RESOURCES else "artworks"

    def on_mount(self) -> None:
        for name in RESOURCES:
            self.install_screen(ResourceListScreen(self.container, name, self.config), name=name)
        self.push_screen(self.start)
        Slogger.info("Admin console started", {"screen": self.start})

    async def on_unmount(self) -> None:
        await self.container.close()

    # ------------------------------------------------------------------ #
    # key-binding actions
    # ------------------------------------------------------------------ #

    def action_show(self, name: str) -> None:
        if name not in RESOURCES:
            return
        Slogger.debug(f"Switching to {name}")
        self.switch_screen(name)
