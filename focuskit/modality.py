"""Keyboard-navigation detection with change subscriptions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from focuskit.surface import KeyEvent, Surface

__all__ = ["KeyboardModalityTracker", "ModalityState"]

logger = logging.getLogger("keyboard_modality")


@dataclass(frozen=True)
class ModalityState:
    keyboard_navigation: bool = False


class KeyboardModalityTracker:
    def __init__(self, surface: Surface) -> None:
        self.surface = surface
        self.state = ModalityState()
        self._listeners: list[Callable[[ModalityState], None]] = []
        self._token: object | None = None

    @property
    def active(self) -> bool:
        return self._token is not None

    def activate(self) -> None:
        if self._token is not None:
            return
        self._token = self.surface.add_key_listener(self.surface.root, self._on_key)

    def deactivate(self) -> None:
        if self._token is None:
            return
        self.surface.remove_key_listener(self.surface.root, self._token)
        self._token = None

    def subscribe(self, listener: Callable[[ModalityState], None]) -> Callable[[], None]:
        self._listeners.append(listener)
        listener(self.state)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def reset(self) -> None:
        """Back to pointer modality, e.g. after a mouse click."""

        self._set(ModalityState(keyboard_navigation=False))

    def _on_key(self, event: KeyEvent) -> None:
        if event.key == "Tab":
            self._set(ModalityState(keyboard_navigation=True))

    def _set(self, state: ModalityState) -> None:
        if state == self.state:
            return
        self.state = state
        logger.debug("Keyboard navigation: %s", state.keyboard_navigation)
        for listener in list(self._listeners):
            listener(state)
