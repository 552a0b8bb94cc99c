"""Nested Tab-cycling traps for modals and dialogs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from focuskit.history import FocusHistory
from focuskit.locator import locate
from focuskit.surface import KeyEvent, Surface

__all__ = ["FocusTrapController", "TrapHandle", "TrapScope"]

logger = logging.getLogger("focus_trap")


@dataclass(eq=False)
class TrapScope:
    container: Any
    elements: tuple[Any, ...]
    listener_token: object = field(default=None, repr=False)

    @property
    def first(self) -> Any:
        return self.elements[0]

    @property
    def last(self) -> Any:
        return self.elements[-1]


class TrapHandle:
    """Cleanup callable returned by `FocusTrapController.activate`."""

    def __init__(self, controller: FocusTrapController | None, scope: TrapScope | None, container: Any) -> None:
        self._controller = controller
        self._scope = scope
        self.container = container

    @property
    def active(self) -> bool:
        return self._controller is not None and self._scope is not None

    def __call__(self) -> None:
        if self._controller is None or self._scope is None:
            return
        controller, scope = self._controller, self._scope
        self._controller = None
        self._scope = None
        controller.deactivate(scope)


class FocusTrapController:
    def __init__(self, surface: Surface, history: FocusHistory) -> None:
        self.surface = surface
        self.history = history
        self._stack: list[TrapScope] = []

    @property
    def depth(self) -> int:
        return len(self._stack)

    def current(self) -> Any | None:
        return self._stack[-1].container if self._stack else None

    def activate(self, container: Any) -> TrapHandle:
        elements = locate(self.surface, container)
        if not elements:
            logger.debug("Focus trap skipped: container has no focusable elements.")
            return TrapHandle(None, None, container)

        scope = TrapScope(container, tuple(elements))
        self._stack.append(scope)
        self.history.record_and_focus(scope.first)

        def _on_key(event: KeyEvent, scope: TrapScope = scope) -> None:
            self._handle_key(scope, event)

        scope.listener_token = self.surface.add_key_listener(self.surface.root, _on_key)
        logger.debug("Focus trap activated (depth=%d, elements=%d).", len(self._stack), len(elements))
        return TrapHandle(self, scope, container)

    def deactivate(self, scope: TrapScope) -> None:
        self.surface.remove_key_listener(self.surface.root, scope.listener_token)
        if self._stack and self._stack[-1] is scope:
            self._stack.pop()
        elif scope in self._stack:
            logger.warning(
                "Focus trap released out of order (depth=%d); removing its own scope only.",
                len(self._stack),
            )
            self._stack.remove(scope)
        logger.debug("Focus trap deactivated (depth=%d).", len(self._stack))

    def _handle_key(self, scope: TrapScope, event: KeyEvent) -> None:
        if event.key != "Tab" or event.has_command_modifier:
            return
        if not self._stack or self._stack[-1] is not scope:
            return
        active = self.surface.active_element()
        if event.shift:
            if active is scope.first:
                event.prevent_default()
                self.history.record_and_focus(scope.last, record=False)
        elif active is scope.last:
            event.prevent_default()
            self.history.record_and_focus(scope.first, record=False)
