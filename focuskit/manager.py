"""Focus manager facade used by dialogs, menus and toolbars."""

from __future__ import annotations

import logging
from typing import Any

from focuskit.announcer import POLITE, Announcement, Announcer
from focuskit.config import FocusConfig
from focuskit.history import FocusHistory
from focuskit.landmarks import SkipNavigation
from focuskit.locator import find_unreachable_controls, locate
from focuskit.modality import KeyboardModalityTracker
from focuskit.roving import BOTH, RovingHandle, RovingOptions, RovingTabindexController
from focuskit.surface import Scheduler, Surface
from focuskit.trap import FocusTrapController, TrapHandle

__all__ = ["FocusManager"]

logger = logging.getLogger("focus_manager")


class FocusManager:
    """One engine per surface, built by the application's composition root.

    Not thread-safe: every call must come from the UI thread, and every
    handle returned by `trap_focus` / `create_roving_tabindex` must be
    invoked exactly once.
    """

    def __init__(
        self,
        surface: Surface,
        scheduler: Scheduler,
        config: FocusConfig | None = None,
    ) -> None:
        self.surface = surface
        self.scheduler = scheduler
        self.config = config or FocusConfig()
        self.history = FocusHistory(surface, scroll_into_view=self.config.scroll_into_view)
        self.traps = FocusTrapController(surface, self.history)
        self.roving = RovingTabindexController(surface, self.history)
        self.announcer = Announcer(
            surface,
            scheduler,
            delay_ms=self.config.announce_delay_ms,
            display_ms=self.config.announce_display_ms,
        )
        self.modality = KeyboardModalityTracker(surface)
        self.skip_navigation = SkipNavigation(surface, self.history, self.announcer)

    def get_focusable_elements(self, container: Any | None = None) -> list[Any]:
        return locate(self.surface, self.surface.root if container is None else container)

    def set_focus(self, element: Any, add_to_history: bool = True) -> None:
        self.history.record_and_focus(element, record=add_to_history)

    def return_focus(self) -> bool:
        return self.history.restore()

    def clear_history(self) -> None:
        self.history.clear()

    def trap_focus(self, container: Any) -> TrapHandle:
        return self.traps.activate(container)

    def get_current_trap(self) -> Any | None:
        return self.traps.current()

    def create_roving_tabindex(
        self,
        container: Any,
        *,
        orientation: str = BOTH,
        wrap: bool = True,
        initial_index: int = 0,
    ) -> RovingHandle:
        options = RovingOptions(orientation=orientation, wrap=wrap, initial_index=initial_index)
        return self.roving.activate(container, options)

    def announce(self, message: str, priority: str = POLITE) -> Announcement:
        return self.announcer.announce(message, priority)

    def focus_first(self, container: Any) -> bool:
        """Focus the first focusable descendant, e.g. when a panel mounts."""

        elements = locate(self.surface, container)
        if not elements:
            return False
        self.set_focus(elements[0])
        return True

    def focus_and_announce(self, element: Any) -> Announcement:
        self.set_focus(element)
        name = self.surface.traits(element).name.strip() or "Element"
        return self.announce(f"Focus moved to {name}")

    def find_unreachable_controls(self, container: Any | None = None) -> list[Any]:
        return find_unreachable_controls(self.surface, self.surface.root if container is None else container)

    def start(self) -> None:
        """Install the document-level listeners (modality tracking, skip shortcuts)."""

        self.modality.activate()
        if self.config.skip_shortcuts:
            self.skip_navigation.activate()
        logger.debug("Focus manager started.")

    def stop(self) -> None:
        self.modality.deactivate()
        self.skip_navigation.deactivate()
        logger.debug("Focus manager stopped.")
