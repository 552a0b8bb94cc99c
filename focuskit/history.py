"""LIFO record of previous focus holders."""

from __future__ import annotations

import logging
import weakref
from collections.abc import Callable
from typing import Any

from focuskit.surface import Surface

__all__ = ["FocusHistory", "HistoryEntry"]

logger = logging.getLogger("focus_history")


class HistoryEntry:
    """Weak handle to a previously focused element."""

    def __init__(self, element: Any) -> None:
        self._resolve: Callable[[], Any | None]
        try:
            self._resolve = weakref.ref(element)
        except TypeError:
            # Not weak-referenceable (e.g. some C-level handles); hold it strongly.
            self._resolve = lambda: element

    def element(self) -> Any | None:
        return self._resolve()


class FocusHistory:
    def __init__(self, surface: Surface, *, scroll_into_view: bool = True) -> None:
        self.surface = surface
        self.scroll_into_view = scroll_into_view
        self._entries: list[HistoryEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def focus(self, element: Any) -> None:
        self.surface.focus(element)
        if self.scroll_into_view:
            self.surface.scroll_into_view(element)

    def record_and_focus(self, element: Any, *, record: bool = True) -> None:
        if record:
            current = self.surface.active_element()
            if current is not None:
                self._entries.append(HistoryEntry(current))
        self.focus(element)

    def restore(self) -> bool:
        """Pop one entry and refocus it; stale entries are dropped, not skipped over."""

        if not self._entries:
            return False
        entry = self._entries.pop()
        element = entry.element()
        if element is None or not self.surface.contains(element):
            logger.debug("Discarded stale focus history entry (%d left).", len(self._entries))
            return False
        self.focus(element)
        return True

    def clear(self) -> None:
        self._entries.clear()

    def elements(self) -> list[Any | None]:
        return [entry.element() for entry in self._entries]
