"""Public focuskit API and machine-readable component catalog.

The catalog gives tools a stable way to discover the focus engine's
components without scraping module internals.
"""

from __future__ import annotations

from typing import TypedDict

from focuskit.announcer import ASSERTIVE, POLITE, Announcement, Announcer
from focuskit.config import FocusConfig
from focuskit.history import FocusHistory
from focuskit.landmarks import SkipNavigation
from focuskit.locator import find_unreachable_controls, locate
from focuskit.manager import FocusManager
from focuskit.modality import KeyboardModalityTracker, ModalityState
from focuskit.roving import BOTH, HORIZONTAL, VERTICAL, RovingOptions, RovingTabindexController
from focuskit.surface import ElementTraits, KeyEvent, Scheduler, Surface, Visibility
from focuskit.synthetic import SyntheticNode, SyntheticSurface, VirtualClock
from focuskit.trap import FocusTrapController, TrapHandle


class FocusKitComponent(TypedDict):
    """Machine-readable descriptor for one public focuskit component."""

    export: str
    module: str
    kind: str
    summary: str

__all__ = [
    "ASSERTIVE",
    "BOTH",
    "HORIZONTAL",
    "POLITE",
    "VERTICAL",
    "Announcement",
    "Announcer",
    "ElementTraits",
    "FocusConfig",
    "FocusHistory",
    "FocusKitComponent",
    "FocusManager",
    "FocusTrapController",
    "KeyEvent",
    "KeyboardModalityTracker",
    "ModalityState",
    "RovingOptions",
    "RovingTabindexController",
    "Scheduler",
    "SkipNavigation",
    "Surface",
    "SyntheticNode",
    "SyntheticSurface",
    "TrapHandle",
    "VirtualClock",
    "Visibility",
    "find_unreachable_controls",
    "get_component_catalog",
    "locate",
]

_COMPONENT_CATALOG: tuple[FocusKitComponent, ...] = (
    {
        "export": "FocusManager",
        "module": "focuskit.manager",
        "kind": "facade",
        "summary": "Per-surface engine coordinating history, traps, roving groups and announcements.",
    },
    {
        "export": "locate",
        "module": "focuskit.locator",
        "kind": "locator",
        "summary": "Tree-order scan for interactive, rendered descendants of a container.",
    },
    {
        "export": "FocusHistory",
        "module": "focuskit.history",
        "kind": "history_stack",
        "summary": "LIFO record of previous focus holders with stale-entry discard.",
    },
    {
        "export": "FocusTrapController",
        "module": "focuskit.trap",
        "kind": "focus_trap",
        "summary": "Nested Tab-cycling scopes for modals and dialogs.",
    },
    {
        "export": "RovingTabindexController",
        "module": "focuskit.roving",
        "kind": "roving_tabindex",
        "summary": "Single tab stop with arrow/Home/End navigation for menus and toolbars.",
    },
    {
        "export": "Announcer",
        "module": "focuskit.announcer",
        "kind": "live_region",
        "summary": "Two-phase live-region announcements for screen readers.",
    },
    {
        "export": "KeyboardModalityTracker",
        "module": "focuskit.modality",
        "kind": "modality_tracker",
        "summary": "Detects keyboard navigation and notifies subscribers.",
    },
    {
        "export": "SkipNavigation",
        "module": "focuskit.landmarks",
        "kind": "skip_links",
        "summary": "Landmark registry with Alt+digit skip shortcuts.",
    },
    {
        "export": "SyntheticSurface",
        "module": "focuskit.synthetic",
        "kind": "surface",
        "summary": "In-memory element tree with style emulation and native Tab traversal.",
    },
    {
        "export": "VirtualClock",
        "module": "focuskit.synthetic",
        "kind": "scheduler",
        "summary": "Deterministic scheduler advanced by hand.",
    },
)


def get_component_catalog() -> tuple[FocusKitComponent, ...]:
    """Return stable focuskit component metadata for tools and docs."""

    return _COMPONENT_CATALOG


def _validate_component_catalog() -> None:
    required_keys = ("export", "module", "kind", "summary")
    for index, component in enumerate(_COMPONENT_CATALOG, start=1):
        for key in required_keys:
            value = component.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(
                    f"Invalid focuskit catalog entry #{index}: field '{key}' is missing or blank. "
                    "Fix: provide a non-empty string for each catalog field."
                )

        export = component["export"]
        module = component["module"]
        if export not in __all__:
            raise ValueError(
                f"Invalid focuskit catalog entry #{index}: export '{export}' is not listed in __all__. "
                "Fix: add the symbol to __all__ or correct the catalog entry."
            )

        if export not in globals():
            raise ValueError(
                f"Invalid focuskit catalog entry #{index}: export '{export}' is not imported in focuskit.__init__. "
                "Fix: import the symbol before validating the catalog."
            )

        if not module.startswith("focuskit."):
            raise ValueError(
                f"Invalid focuskit catalog entry #{index}: module '{module}' must start with 'focuskit.'. "
                "Fix: point the entry to the canonical focuskit module path."
            )


_validate_component_catalog()
