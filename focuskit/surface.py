"""Capability interface between the focus engine and a rendering surface.

The engine never touches a widget toolkit directly. Everything it needs from
the outside world goes through a `Surface` (tree queries, computed style,
focus, key delivery, live regions) and a `Scheduler` (deferred callbacks).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

__all__ = [
    "ElementTraits",
    "KeyEvent",
    "KeyHandler",
    "Scheduler",
    "Surface",
    "Visibility",
]


@dataclass(frozen=True)
class Visibility:
    """Computed style and layout box of one element."""

    display: str = "block"
    visibility: str = "visible"
    width: float = 0
    height: float = 0

    @property
    def rendered(self) -> bool:
        return (
            self.display != "none"
            and self.visibility != "hidden"
            and self.width > 0
            and self.height > 0
        )


@dataclass(frozen=True)
class ElementTraits:
    """Focus-relevant attributes of one element.

    `tab_index` is the explicit tab index, or None when the element carries
    none and relies on its native behaviour.
    """

    kind: str = "div"
    disabled: bool = False
    has_href: bool = False
    tab_index: int | None = None
    editable: bool = False
    has_controls: bool = False
    name: str = ""


@dataclass
class KeyEvent:
    key: str
    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False
    default_prevented: bool = field(default=False, init=False)

    def prevent_default(self) -> None:
        self.default_prevented = True

    @property
    def has_command_modifier(self) -> bool:
        return self.ctrl or self.alt or self.meta


KeyHandler = Callable[[KeyEvent], None]


class Surface(Protocol):
    root: Any

    def query_descendants(self, container: Any, predicate: Callable[[Any], bool]) -> list[Any]:
        ...

    def traits(self, element: Any) -> ElementTraits:
        ...

    def computed_visibility(self, element: Any) -> Visibility:
        ...

    def active_element(self) -> Any | None:
        ...

    def focus(self, element: Any) -> None:
        ...

    def scroll_into_view(self, element: Any) -> None:
        ...

    def contains(self, element: Any) -> bool:
        ...

    def set_tab_index(self, element: Any, value: int) -> None:
        ...

    def add_key_listener(self, target: Any, handler: KeyHandler) -> object:
        ...

    def remove_key_listener(self, target: Any, token: object) -> None:
        ...

    def create_live_region(self, priority: str) -> Any:
        ...

    def set_text(self, node: Any, text: str) -> None:
        ...

    def remove_node(self, node: Any) -> None:
        ...


class Scheduler(Protocol):
    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> object:
        ...
