"""Landmark registry with skip-to shortcuts (Alt+1 main content, Alt+2 navigation)."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from focuskit.announcer import Announcer
from focuskit.error_contract import format_actionable_error
from focuskit.history import FocusHistory
from focuskit.surface import KeyEvent, Surface

__all__ = ["Landmark", "SkipNavigation"]

logger = logging.getLogger("skip_navigation")


@dataclass(frozen=True)
class Landmark:
    landmark_id: str
    resolver: Callable[[], Any | None]
    label: str = ""
    shortcut: str | None = None


class SkipNavigation:
    """Named focus targets reachable through Alt+<shortcut>."""

    def __init__(self, surface: Surface, history: FocusHistory, announcer: Announcer) -> None:
        self.surface = surface
        self.history = history
        self.announcer = announcer
        self._landmarks: dict[str, Landmark] = {}
        self._order: list[str] = []
        self._token: object | None = None

    def add_landmark(
        self,
        landmark_id: str,
        resolver: Callable[[], Any | None],
        *,
        label: str = "",
        shortcut: str | None = None,
    ) -> None:
        key = str(landmark_id).strip()
        if key == "":
            raise ValueError(
                format_actionable_error(
                    "Skip navigation",
                    "landmark_id",
                    "a landmark id is required",
                    "provide a non-empty landmark id",
                )
            )
        shortcut_key = None if shortcut is None else str(shortcut).strip() or None
        if shortcut_key is not None:
            for other in self._landmarks.values():
                if other.shortcut == shortcut_key and other.landmark_id != key:
                    raise ValueError(
                        format_actionable_error(
                            "Skip navigation",
                            f"shortcut Alt+{shortcut_key}",
                            f"already used by landmark '{other.landmark_id}'",
                            "pick a different shortcut key",
                        )
                    )
        self._landmarks[key] = Landmark(key, resolver, label=label.strip() or key, shortcut=shortcut_key)
        if key not in self._order:
            self._order.append(key)

    def landmark_ids(self) -> tuple[str, ...]:
        return tuple(self._order)

    def skip_to(self, landmark_id: str) -> bool:
        key = str(landmark_id).strip()
        landmark = self._landmarks.get(key)
        if landmark is None:
            raise KeyError(
                format_actionable_error(
                    "Skip navigation",
                    f"landmark '{key}'",
                    "not registered",
                    "register the landmark with add_landmark() before skipping to it",
                )
            )
        element = landmark.resolver()
        if element is None or not self.surface.contains(element):
            logger.debug("Skip target '%s' is not available.", key)
            return False
        self.history.record_and_focus(element, record=False)
        self.announcer.announce(f"Skipped to {landmark.label}")
        return True

    def activate(self) -> None:
        if self._token is not None:
            return
        self._token = self.surface.add_key_listener(self.surface.root, self._on_key)

    def deactivate(self) -> None:
        if self._token is None:
            return
        self.surface.remove_key_listener(self.surface.root, self._token)
        self._token = None

    def _on_key(self, event: KeyEvent) -> None:
        if not event.alt or event.ctrl or event.meta:
            return
        for key in self._order:
            landmark = self._landmarks[key]
            if landmark.shortcut is not None and landmark.shortcut == event.key:
                event.prevent_default()
                self.skip_to(key)
                return
