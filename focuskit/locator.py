"""Focusable element lookup for a scoped container."""

from __future__ import annotations

import logging
from typing import Any

from focuskit.surface import ElementTraits, Surface

__all__ = ["NATIVE_CONTROL_KINDS", "find_unreachable_controls", "is_interactive", "is_rendered", "locate"]

logger = logging.getLogger("focus_locator")

NATIVE_CONTROL_KINDS: frozenset[str] = frozenset({"button", "input", "select", "textarea"})
MEDIA_KINDS: frozenset[str] = frozenset({"audio", "video"})


def is_interactive(traits: ElementTraits) -> bool:
    if traits.kind == "a" and traits.has_href:
        return True
    if traits.kind in NATIVE_CONTROL_KINDS and not traits.disabled:
        return True
    if traits.tab_index is not None and traits.tab_index != -1:
        return True
    if traits.editable:
        return True
    if traits.kind in MEDIA_KINDS and traits.has_controls:
        return True
    return traits.kind == "summary"


def is_rendered(surface: Surface, element: Any) -> bool:
    return surface.computed_visibility(element).rendered


def locate(surface: Surface, container: Any) -> list[Any]:
    """Return the focusable, rendered descendants of `container` in tree order.

    The scan runs on every call: containers gain and lose children between
    activations, so results are never cached.
    """

    candidates = surface.query_descendants(
        container,
        lambda element: is_interactive(surface.traits(element)),
    )
    return [element for element in candidates if is_rendered(surface, element)]


def find_unreachable_controls(surface: Surface, container: Any) -> list[Any]:
    """Native controls that are enabled but pulled out of the tab order."""

    found: list[Any] = []

    def _unreachable(element: Any) -> bool:
        traits = surface.traits(element)
        native = traits.kind in NATIVE_CONTROL_KINDS or traits.kind == "a"
        return native and not traits.disabled and traits.tab_index == -1

    for element in surface.query_descendants(container, _unreachable):
        traits = surface.traits(element)
        logger.warning("Interactive element not focusable: %s", traits.name or traits.kind)
        found.append(element)
    return found
