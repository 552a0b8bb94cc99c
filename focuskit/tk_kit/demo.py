# To run:
# python -m focuskit.tk_kit.demo

from __future__ import annotations

import logging
from collections.abc import Callable
import traceback
import tkinter as tk
from tkinter import ttk

from focuskit.config import FocusConfig
from focuskit.logging_setup import setup_logging
from focuskit.manager import FocusManager
from focuskit.roving import HORIZONTAL
from focuskit.tk_kit import create_tk_focus_manager
from focuskit.trap import TrapHandle

logger = logging.getLogger("demo")


class DemoApp:
    """Toolbar with a roving tab stop, a modal dialog with a focus trap, skip shortcuts."""

    def __init__(self, root: tk.Tk, manager: FocusManager) -> None:
        self.root = root
        self.manager = manager
        self._trap: TrapHandle | None = None
        self.dialog: tk.Toplevel | None = None
        self.release_toolbar: Callable[[], None] | None = None

        root.title("focuskit demo")
        self.toolbar = ttk.Frame(root, padding=6)
        self.toolbar.pack(fill="x")
        for label in ("New", "Open", "Save", "Close"):
            ttk.Button(self.toolbar, text=label).pack(side="left", padx=2)

        self.main = ttk.Frame(root, padding=12)
        self.main.pack(fill="both", expand=True)
        self.name_entry = ttk.Entry(self.main)
        self.name_entry.pack(fill="x")
        ttk.Button(self.main, text="Open dialog", command=self.open_dialog).pack(anchor="w", pady=(8, 0))

        skip = manager.skip_navigation
        skip.add_landmark("main-content", lambda: self.name_entry, label="main content", shortcut="1")
        skip.add_landmark("navigation", self._first_tool, label="navigation", shortcut="2")

    def _first_tool(self) -> tk.Misc | None:
        children = self.toolbar.winfo_children()
        return children[0] if children else None

    def start(self) -> None:
        self.root.update_idletasks()
        self.manager.start()
        self.release_toolbar = self.manager.create_roving_tabindex(self.toolbar, orientation=HORIZONTAL)
        self.manager.focus_first(self.main)

    def open_dialog(self) -> None:
        if self.dialog is not None:
            return
        dialog = tk.Toplevel(self.root)
        dialog.title("Rename")
        dialog.transient(self.root)
        body = ttk.Frame(dialog, padding=12)
        body.pack(fill="both", expand=True)
        ttk.Entry(body).pack(fill="x")
        buttons = ttk.Frame(body)
        buttons.pack(fill="x", pady=(10, 0))
        ttk.Button(buttons, text="OK", command=self.close_dialog).pack(side="right")
        ttk.Button(buttons, text="Cancel", command=self.close_dialog).pack(side="right", padx=(0, 6))
        dialog.protocol("WM_DELETE_WINDOW", self.close_dialog)
        self.dialog = dialog

        dialog.update_idletasks()
        dialog.wait_visibility()
        self._trap = self.manager.trap_focus(body)
        self.manager.announce("Rename dialog opened")

    def close_dialog(self) -> None:
        if self._trap is not None:
            self._trap()
            self._trap = None
        if self.dialog is not None:
            self.dialog.destroy()
            self.dialog = None
        self.manager.return_focus()
        self.manager.announce("Rename dialog closed")


def main() -> int:
    cfg = FocusConfig(debug=True, log_level="DEBUG")

    setup_logging(cfg.log_level)
    logger.info("Focus demo booting...")

    try:
        root = tk.Tk()
        app = DemoApp(root, create_tk_focus_manager(root, cfg))
        app.start()
        root.mainloop()
        return 0
    except Exception as exc:
        logger.error("Unhandled error: %s", exc)
        if cfg.debug:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
