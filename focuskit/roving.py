"""Roving tabindex: one tab stop per widget group, arrows move inside it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from focuskit.error_contract import require_choice
from focuskit.history import FocusHistory
from focuskit.locator import locate
from focuskit.surface import KeyEvent, Surface

__all__ = [
    "BOTH",
    "HORIZONTAL",
    "ORIENTATIONS",
    "VERTICAL",
    "RovingGroup",
    "RovingHandle",
    "RovingOptions",
    "RovingTabindexController",
]

logger = logging.getLogger("roving_tabindex")

HORIZONTAL = "horizontal"
VERTICAL = "vertical"
BOTH = "both"
ORIENTATIONS: tuple[str, ...] = (HORIZONTAL, VERTICAL, BOTH)

# key -> (axis, step)
_ARROW_KEYS: dict[str, tuple[str, int]] = {
    "ArrowRight": (HORIZONTAL, 1),
    "ArrowLeft": (HORIZONTAL, -1),
    "ArrowDown": (VERTICAL, 1),
    "ArrowUp": (VERTICAL, -1),
}


@dataclass(frozen=True)
class RovingOptions:
    orientation: str = BOTH
    wrap: bool = True
    initial_index: int = 0

    def __post_init__(self) -> None:
        require_choice("Roving tabindex", "orientation", self.orientation, ORIENTATIONS)

    def allows(self, axis: str) -> bool:
        return self.orientation in (axis, BOTH)


@dataclass(eq=False)
class RovingGroup:
    container: Any
    members: tuple[Any, ...]
    options: RovingOptions
    current_index: int = 0
    listener_token: object = field(default=None, repr=False)

    @property
    def current(self) -> Any:
        return self.members[self.current_index]

    def resolve(self, target: int) -> int:
        last = len(self.members) - 1
        if target > last:
            return 0 if self.options.wrap else last
        if target < 0:
            return last if self.options.wrap else 0
        return target

    def target_for(self, event: KeyEvent) -> int | None:
        if event.key == "Home":
            return 0
        if event.key == "End":
            return len(self.members) - 1
        axis_step = _ARROW_KEYS.get(event.key)
        if axis_step is None or not self.options.allows(axis_step[0]):
            return None
        return self.resolve(self.current_index + axis_step[1])


class RovingHandle:
    def __init__(self, controller: RovingTabindexController | None, group: RovingGroup | None) -> None:
        self._controller = controller
        self.group = group

    def __call__(self) -> None:
        if self._controller is None or self.group is None:
            return
        controller = self._controller
        self._controller = None
        controller.deactivate(self.group)


class RovingTabindexController:
    def __init__(self, surface: Surface, history: FocusHistory) -> None:
        self.surface = surface
        self.history = history
        self._groups: list[RovingGroup] = []

    def groups(self) -> tuple[RovingGroup, ...]:
        return tuple(self._groups)

    def activate(self, container: Any, options: RovingOptions | None = None) -> RovingHandle:
        opts = options or RovingOptions()
        members = locate(self.surface, container)
        if not members:
            logger.debug("Roving tabindex skipped: container has no focusable elements.")
            return RovingHandle(None, None)

        start = max(0, min(int(opts.initial_index), len(members) - 1))
        group = RovingGroup(container, tuple(members), opts, current_index=start)
        for index, member in enumerate(group.members):
            self.surface.set_tab_index(member, 0 if index == start else -1)

        def _on_key(event: KeyEvent, group: RovingGroup = group) -> None:
            self._handle_key(group, event)

        group.listener_token = self.surface.add_key_listener(container, _on_key)
        self._groups.append(group)
        logger.debug(
            "Roving tabindex activated (%s, wrap=%s, members=%d, index=%d).",
            opts.orientation,
            opts.wrap,
            len(members),
            start,
        )
        return RovingHandle(self, group)

    def deactivate(self, group: RovingGroup) -> None:
        self.surface.remove_key_listener(group.container, group.listener_token)
        for member in group.members:
            self.surface.set_tab_index(member, 0)
        if group in self._groups:
            self._groups.remove(group)

    def move_to(self, group: RovingGroup, index: int) -> None:
        if index == group.current_index:
            return
        self.surface.set_tab_index(group.current, -1)
        group.current_index = index
        self.surface.set_tab_index(group.current, 0)
        self.history.record_and_focus(group.current, record=False)

    def _handle_key(self, group: RovingGroup, event: KeyEvent) -> None:
        target = group.target_for(event)
        if target is None:
            return
        event.prevent_default()
        self.move_to(group, target)
