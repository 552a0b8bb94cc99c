"""Surface adapter over a live tkinter widget tree.

Tab order maps onto the `takefocus` option (tab index >= 0 -> 1, -1 -> 0),
"display: none" onto an unmapped widget, and key listeners onto one
`<KeyPress>` binding per toplevel. Handlers run from the focused widget up
through its masters, so a listener on a container sees its children's keys;
a prevented event returns "break" and skips Tk's own Tab traversal. Toplevels
opened later are bound when they first take focus, and modifier bits are
decoded per windowing system.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
import tkinter as tk

from focuskit.surface import ElementTraits, KeyEvent, KeyHandler, Visibility
from focuskit.tk_kit.ui_dispatch import widget_alive

__all__ = [
    "MODIFIER_MASKS",
    "ModifierMasks",
    "TkSurface",
    "modifier_masks_for",
    "safe_focus",
    "translate_key_event",
]

logger = logging.getLogger("tk_surface")

_KIND_BY_CLASS: dict[str, str] = {
    "Button": "button",
    "TButton": "button",
    "Checkbutton": "button",
    "TCheckbutton": "button",
    "Radiobutton": "button",
    "TRadiobutton": "button",
    "Menubutton": "button",
    "TMenubutton": "button",
    "Entry": "input",
    "TEntry": "input",
    "Spinbox": "input",
    "TSpinbox": "input",
    "Scale": "input",
    "TScale": "input",
    "TCombobox": "select",
    "Listbox": "select",
    "Treeview": "select",
    "Text": "textarea",
}

_KEYSYMS: dict[str, str] = {
    "Right": "ArrowRight",
    "Left": "ArrowLeft",
    "Up": "ArrowUp",
    "Down": "ArrowDown",
    "ISO_Left_Tab": "Tab",
}

_SHIFT_MASK = 0x0001
_CONTROL_MASK = 0x0004


@dataclass(frozen=True)
class ModifierMasks:
    alt: int
    meta: int
    shift: int = _SHIFT_MASK
    ctrl: int = _CONTROL_MASK


# 0x0008 is Mod1: Alt on X11, NumLock on Windows, Command on macOS.
MODIFIER_MASKS: dict[str, ModifierMasks] = {
    "x11": ModifierMasks(alt=0x0008, meta=0x0040),
    "win32": ModifierMasks(alt=0x20000, meta=0),
    "aqua": ModifierMasks(alt=0x0010, meta=0x0008),
}


def modifier_masks_for(windowing_system: str) -> ModifierMasks:
    return MODIFIER_MASKS.get(str(windowing_system).strip(), MODIFIER_MASKS["x11"])


def translate_key_event(keysym: str, state: int, masks: ModifierMasks | None = None) -> KeyEvent:
    bits = masks or MODIFIER_MASKS["x11"]
    key = _KEYSYMS.get(keysym, keysym)
    return KeyEvent(
        key,
        shift=bool(state & bits.shift) or keysym == "ISO_Left_Tab",
        ctrl=bool(state & bits.ctrl),
        alt=bool(state & bits.alt),
        meta=bool(state & bits.meta),
    )


def safe_focus(widget: tk.Misc | None) -> bool:
    if widget is None:
        return False
    try:
        if not bool(widget.winfo_exists()):
            return False
        widget.focus_set()
        return True
    except tk.TclError:
        return False


def _is_disabled(widget: tk.Misc) -> bool:
    instate = getattr(widget, "instate", None)
    try:
        if callable(instate):
            return bool(instate(["disabled"]))
        return str(widget.cget("state")) == "disabled"
    except tk.TclError:
        return False


def _tab_index(widget: tk.Misc) -> int | None:
    try:
        value = str(widget.cget("takefocus")).strip()
    except tk.TclError:
        return None
    if value in ("1", "true"):
        return 0
    if value in ("0", "false"):
        return -1
    return None


class TkSurface:
    def __init__(self, root: tk.Misc) -> None:
        self.root = root.winfo_toplevel()
        self.live_priorities: dict[str, str] = {}
        self._listeners: dict[str, list[tuple[int, KeyHandler]]] = {}
        self._bound: dict[str, tuple[tk.Misc, str]] = {}
        self._focus_hook: str | None = None
        self._next_token = 1
        try:
            self.windowing_system = str(self.root.tk.call("tk", "windowingsystem"))
        except tk.TclError:
            self.windowing_system = "x11"
        self.modifier_masks = modifier_masks_for(self.windowing_system)

    # tree and style

    def query_descendants(self, container: tk.Misc, predicate: Callable[[Any], bool]) -> list[tk.Misc]:
        found: list[tk.Misc] = []
        for child in container.winfo_children():
            if predicate(child):
                found.append(child)
            found.extend(self.query_descendants(child, predicate))
        return found

    def traits(self, element: tk.Misc) -> ElementTraits:
        kind = _KIND_BY_CLASS.get(element.winfo_class(), "generic")
        try:
            name = str(element.cget("text"))
        except tk.TclError:
            name = ""
        return ElementTraits(
            kind=kind,
            disabled=_is_disabled(element),
            tab_index=_tab_index(element),
            name=name,
        )

    def computed_visibility(self, element: tk.Misc) -> Visibility:
        if not widget_alive(element) or not element.winfo_ismapped():
            return Visibility(display="none", width=0, height=0)
        return Visibility(width=element.winfo_width(), height=element.winfo_height())

    def contains(self, element: tk.Misc) -> bool:
        return widget_alive(element)

    # focus

    def active_element(self) -> tk.Misc | None:
        try:
            return self.root.focus_get()
        except (KeyError, tk.TclError):
            # focus_get() raises KeyError for unnamed popdowns (ttk.Combobox)
            return None

    def focus(self, element: tk.Misc) -> None:
        safe_focus(element)

    def scroll_into_view(self, element: tk.Misc) -> None:
        canvas = element.master
        while canvas is not None and not isinstance(canvas, tk.Canvas):
            canvas = canvas.master
        if canvas is None:
            return
        try:
            region = [float(part) for part in str(canvas.cget("scrollregion")).split()]
        except (ValueError, tk.TclError):
            return
        if len(region) != 4 or region[3] - region[1] <= 0:
            return
        total = region[3] - region[1]
        view_top = canvas.canvasy(0)
        view_height = canvas.winfo_height()
        top = element.winfo_rooty() - canvas.winfo_rooty() + view_top
        bottom = top + element.winfo_height()
        if top < view_top:
            canvas.yview_moveto((top - region[1]) / total)
        elif bottom > view_top + view_height:
            canvas.yview_moveto((bottom - view_height - region[1]) / total)

    def set_tab_index(self, element: tk.Misc, value: int) -> None:
        try:
            element.configure(takefocus=1 if int(value) >= 0 else 0)
        except tk.TclError:
            logger.debug("Widget %s has no takefocus option.", element)

    # key events

    def add_key_listener(self, target: tk.Misc, handler: KeyHandler) -> int:
        token = self._next_token
        self._next_token += 1
        self._listeners.setdefault(str(target), []).append((token, handler))
        self._ensure_bound(self.root if target is self.root else target.winfo_toplevel())
        if target is self.root:
            # document-level listeners also follow focus into dialogs
            for toplevel in self._toplevels(self.root):
                self._ensure_bound(toplevel)
            self._install_focus_hook()
        return token

    def remove_key_listener(self, target: tk.Misc, token: object) -> None:
        key = str(target)
        remaining = [item for item in self._listeners.get(key, []) if item[0] != token]
        if remaining:
            self._listeners[key] = remaining
        else:
            self._listeners.pop(key, None)
        if not self._listeners:
            self._unbind_all()

    def _ensure_bound(self, toplevel: tk.Misc) -> None:
        key = str(toplevel)
        if key in self._bound:
            return
        bind_id = toplevel.bind("<KeyPress>", self._dispatch, add="+")
        if bind_id:
            self._bound[key] = (toplevel, bind_id)

    def _toplevels(self, widget: tk.Misc) -> list[tk.Misc]:
        found: list[tk.Misc] = []
        for child in widget.winfo_children():
            if isinstance(child, tk.Toplevel):
                found.append(child)
            found.extend(self._toplevels(child))
        return found

    def _install_focus_hook(self) -> None:
        if self._focus_hook is not None:
            return
        # installed once per surface; a no-op while no root listener is registered
        self._focus_hook = self.root.bind_all("<FocusIn>", self._on_focus_in, add="+")

    def _on_focus_in(self, tk_event: tk.Event) -> None:
        if str(self.root) not in self._listeners:
            return
        widget = tk_event.widget
        if isinstance(widget, str) or not widget_alive(widget):
            return
        self._ensure_bound(widget.winfo_toplevel())

    def _unbind_all(self) -> None:
        for toplevel, bind_id in list(self._bound.values()):
            if widget_alive(toplevel):
                toplevel.unbind("<KeyPress>", bind_id)
        self._bound.clear()

    def _event_path(self, widget: object) -> list[str]:
        if isinstance(widget, str):
            try:
                widget = self.root.nametowidget(widget)
            except KeyError:
                return [str(self.root)]
        path: list[str] = []
        node = widget
        while node is not None:
            path.append(str(node))
            node = getattr(node, "master", None)
        if str(self.root) not in path:
            path.append(str(self.root))
        return path

    def _dispatch(self, tk_event: tk.Event) -> str | None:
        event = translate_key_event(str(tk_event.keysym), int(tk_event.state), self.modifier_masks)
        for key in self._event_path(tk_event.widget):
            for _token, handler in list(self._listeners.get(key, [])):
                handler(event)
        return "break" if event.default_prevented else None

    # live regions

    def create_live_region(self, priority: str) -> tk.Label:
        label = tk.Label(self.root, text="")
        label.place(x=-10000, y=-10000, width=1, height=1)
        self.live_priorities[str(label)] = priority
        return label

    def set_text(self, node: tk.Label, text: str) -> None:
        node.configure(text=text)

    def remove_node(self, node: tk.Label) -> None:
        self.live_priorities.pop(str(node), None)
        node.destroy()
