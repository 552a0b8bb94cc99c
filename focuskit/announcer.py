"""Live-region announcements for screen readers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from focuskit.error_contract import require_choice
from focuskit.surface import Scheduler, Surface

__all__ = ["ASSERTIVE", "POLITE", "PRIORITIES", "Announcement", "Announcer"]

logger = logging.getLogger("announcer")

POLITE = "polite"
ASSERTIVE = "assertive"
PRIORITIES: tuple[str, ...] = (POLITE, ASSERTIVE)


@dataclass(eq=False)
class Announcement:
    message: str
    priority: str = POLITE
    node: Any = field(default=None, repr=False)
    state: str = "created"


class Announcer:
    """Inserts an empty live region, fills it after a delay, removes it later.

    Screen readers notice a new region first and its text second, so the two
    steps are split across the scheduler. Each call owns its own region.
    """

    def __init__(
        self,
        surface: Surface,
        scheduler: Scheduler,
        *,
        delay_ms: int = 100,
        display_ms: int = 1000,
    ) -> None:
        self.surface = surface
        self.scheduler = scheduler
        self.delay_ms = max(0, int(delay_ms))
        self.display_ms = max(0, int(display_ms))

    def announce(self, message: str, priority: str = POLITE) -> Announcement:
        level = require_choice("Announcer", "priority", priority, PRIORITIES)
        announcement = Announcement(str(message), level)
        announcement.node = self.surface.create_live_region(level)
        announcement.state = "inserted"
        self.scheduler.schedule(self.delay_ms, lambda: self._speak(announcement))
        logger.debug("Announcement queued (%s): %s", level, announcement.message)
        return announcement

    def _speak(self, announcement: Announcement) -> None:
        self.surface.set_text(announcement.node, announcement.message)
        announcement.state = "spoken"
        self.scheduler.schedule(self.display_ms, lambda: self._remove(announcement))

    def _remove(self, announcement: Announcement) -> None:
        if self.surface.contains(announcement.node):
            self.surface.remove_node(announcement.node)
        announcement.state = "removed"
