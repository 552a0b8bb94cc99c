"""In-memory surface and virtual clock for headless use and tests.

`SyntheticSurface` emulates the parts of a rendering surface the focus engine
relies on: inherited display/visibility, layout boxes, key events that bubble
from the focused element to the root, and native Tab traversal when no
listener prevents the default action.
"""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from focuskit.locator import locate
from focuskit.surface import ElementTraits, KeyEvent, KeyHandler, Visibility

__all__ = ["SyntheticNode", "SyntheticSurface", "VirtualClock"]


@dataclass(eq=False)
class SyntheticNode:
    kind: str = "div"
    node_id: str = ""
    name: str = ""
    disabled: bool = False
    href: str | None = None
    tab_index: int | None = None
    editable: bool = False
    controls: bool = False
    display: str = "block"
    visibility: str | None = None  # None inherits from the parent
    width: float = 100
    height: float = 24
    text: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[SyntheticNode] = field(default_factory=list, repr=False)
    parent: SyntheticNode | None = field(default=None, repr=False)

    def append(self, *nodes: SyntheticNode) -> SyntheticNode:
        for node in nodes:
            if node.parent is not None:
                node.parent.remove(node)
            node.parent = self
            self.children.append(node)
        return self

    def remove(self, node: SyntheticNode) -> None:
        if node in self.children:
            self.children.remove(node)
            node.parent = None

    def iter_descendants(self) -> Iterator[SyntheticNode]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def ancestors(self) -> Iterator[SyntheticNode]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent


class SyntheticSurface:
    def __init__(self, root: SyntheticNode | None = None) -> None:
        self.root = root or SyntheticNode("body", width=1024, height=768)
        self._active: SyntheticNode | None = None
        self._listeners: dict[SyntheticNode, list[tuple[int, KeyHandler]]] = {}
        self._tokens = itertools.count(1)
        self.scrolled: list[SyntheticNode] = []

    # tree and style

    def query_descendants(self, container: SyntheticNode, predicate: Callable[[Any], bool]) -> list[SyntheticNode]:
        return [node for node in container.iter_descendants() if predicate(node)]

    def traits(self, element: SyntheticNode) -> ElementTraits:
        return ElementTraits(
            kind=element.kind,
            disabled=element.disabled,
            has_href=element.href is not None,
            tab_index=element.tab_index,
            editable=element.editable,
            has_controls=element.controls,
            name=element.name or element.text,
        )

    def computed_visibility(self, element: SyntheticNode) -> Visibility:
        display = element.display
        if any(node.display == "none" for node in element.ancestors()):
            display = "none"
        visibility = element.visibility
        if visibility is None:
            visibility = next(
                (node.visibility for node in element.ancestors() if node.visibility is not None),
                "visible",
            )
        if display == "none":
            return Visibility(display="none", visibility=visibility, width=0, height=0)
        return Visibility(display=display, visibility=visibility, width=element.width, height=element.height)

    def contains(self, element: SyntheticNode) -> bool:
        return element is self.root or any(node is self.root for node in element.ancestors())

    def get_element_by_id(self, node_id: str) -> SyntheticNode | None:
        return next((node for node in self.root.iter_descendants() if node.node_id == node_id), None)

    # focus

    def active_element(self) -> SyntheticNode | None:
        if self._active is not None and not self.contains(self._active):
            self._active = None
        return self._active

    def focus(self, element: SyntheticNode) -> None:
        if self.contains(element):
            self._active = element

    def blur(self) -> None:
        self._active = None

    def scroll_into_view(self, element: SyntheticNode) -> None:
        self.scrolled.append(element)

    def set_tab_index(self, element: SyntheticNode, value: int) -> None:
        element.tab_index = int(value)

    # key events

    def add_key_listener(self, target: SyntheticNode, handler: KeyHandler) -> int:
        token = next(self._tokens)
        self._listeners.setdefault(target, []).append((token, handler))
        return token

    def remove_key_listener(self, target: SyntheticNode, token: object) -> None:
        handlers = self._listeners.get(target, [])
        self._listeners[target] = [item for item in handlers if item[0] != token]

    def listener_count(self, target: SyntheticNode | None = None) -> int:
        if target is not None:
            return len(self._listeners.get(target, []))
        return sum(len(handlers) for handlers in self._listeners.values())

    def press(self, key: str, *, shift: bool = False, ctrl: bool = False, alt: bool = False, meta: bool = False) -> KeyEvent:
        """Deliver a key press to the focused element (or the root) and run the default action."""

        event = KeyEvent(key, shift=shift, ctrl=ctrl, alt=alt, meta=meta)
        target = self.active_element() or self.root
        path = [target, *target.ancestors()]
        for node in path:
            for _token, handler in list(self._listeners.get(node, [])):
                handler(event)
        if not event.default_prevented and key == "Tab" and not event.has_command_modifier:
            self._native_tab(backwards=shift)
        return event

    def natural_tab_order(self) -> list[SyntheticNode]:
        return [
            node
            for node in locate(self, self.root)
            if node.tab_index is None or node.tab_index >= 0
        ]

    def _native_tab(self, *, backwards: bool) -> None:
        order = self.natural_tab_order()
        if not order:
            return
        active = self.active_element()
        if active in order:
            step = -1 if backwards else 1
            self._active = order[(order.index(active) + step) % len(order)]
        else:
            self._active = order[-1] if backwards else order[0]

    # live regions

    def create_live_region(self, priority: str) -> SyntheticNode:
        node = SyntheticNode(
            "div",
            width=1,
            height=1,
            attributes={
                "aria-live": priority,
                "aria-atomic": "true",
                "style": "position:absolute;left:-10000px;width:1px;height:1px;overflow:hidden",
            },
        )
        self.root.append(node)
        return node

    def set_text(self, node: SyntheticNode, text: str) -> None:
        node.text = text

    def remove_node(self, node: SyntheticNode) -> None:
        if node.parent is not None:
            node.parent.remove(node)

    def live_regions(self) -> list[SyntheticNode]:
        return [node for node in self.root.iter_descendants() if "aria-live" in node.attributes]


class VirtualClock:
    """Deterministic scheduler; callbacks run only when time is advanced."""

    def __init__(self) -> None:
        self.now_ms = 0
        self._queue: list[tuple[int, int, Callable[[], None]]] = []
        self._seq = itertools.count()

    @property
    def pending(self) -> int:
        return len(self._queue)

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> int:
        due = self.now_ms + max(0, int(delay_ms))
        seq = next(self._seq)
        heapq.heappush(self._queue, (due, seq, callback))
        return seq

    def advance(self, ms: int) -> int:
        """Move time forward, running due callbacks (including ones they schedule). Returns the count run."""

        deadline = self.now_ms + max(0, int(ms))
        ran = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _seq, callback = heapq.heappop(self._queue)
            self.now_ms = due
            callback()
            ran += 1
        self.now_ms = deadline
        return ran
