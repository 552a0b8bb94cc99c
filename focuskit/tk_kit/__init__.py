"""tkinter bindings for the focus engine."""

from __future__ import annotations

import tkinter as tk

from focuskit.config import FocusConfig
from focuskit.manager import FocusManager
from focuskit.tk_kit.tk_surface import TkSurface, modifier_masks_for, safe_focus, translate_key_event
from focuskit.tk_kit.ui_dispatch import UIDispatcher, safe_dispatch

__all__ = [
    "TkSurface",
    "UIDispatcher",
    "create_tk_focus_manager",
    "modifier_masks_for",
    "safe_dispatch",
    "safe_focus",
    "translate_key_event",
]


def create_tk_focus_manager(widget: tk.Misc, config: FocusConfig | None = None) -> FocusManager:
    """Build the focus manager for the toplevel that owns `widget`."""

    surface = TkSurface(widget)
    return FocusManager(surface, UIDispatcher.from_widget(surface.root), config)
