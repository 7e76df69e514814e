#!/usr/bin/env python3
"""
Spectra Settings Window

A small Tk window for choosing what screen_capture_latest captures: the main
display, a specific display, a window, or a region typed in by hand. Every
selection is written to the settings file immediately.

Lists load in the background; thumbnails then fill in one row at a time.
Worker threads never touch Tk: they put results on a queue that the main
loop drains with ``after``.
"""

import argparse
import queue
import sys
import threading
import tkinter as tk
from tkinter import ttk
from typing import Any, Dict, List, Optional

from PIL import ImageTk
from loguru import logger

from spectra.core.client import CaptureClient
from spectra.core.config import load_config
from spectra.core.constants import GUI_SETTINGS, PRIMARY_DISPLAY
from spectra.core.models import CaptureTarget, Region, default_settings
from spectra.core.settings import SettingsStore
from spectra.core.utils import ensure_directory
from spectra.gui.bridge import GuiBridge
from spectra.gui.loader import InitialState, ThumbnailLoader, decode_thumbnail, load_initial, thumbnail_jobs
from spectra.gui.selection import (
    MAIN_DISPLAY_LABEL,
    describe_target,
    selected_item,
    settings_for_selection,
    target_for_item,
    target_for_region,
)


class SpectraApp:
    def __init__(self, root: tk.Tk, bridge: GuiBridge):
        self.root = root
        self.bridge = bridge
        self.results: "queue.Queue[tuple]" = queue.Queue()
        self.loader = ThumbnailLoader()

        self.windows = []
        self.displays = []
        self.settings = default_settings()
        # PhotoImages must stay referenced or Tk drops them
        self._images: Dict[str, Any] = {}

        self.setup_gui()
        self.root.protocol("WM_DELETE_WINDOW", self.close)
        self.root.after(GUI_SETTINGS["QUEUE_POLL_MS"], self._drain_queue)
        self.refresh()

    def setup_gui(self) -> None:
        self.root.title("Spectra")
        self.root.geometry("900x640")

        style = ttk.Style(self.root)
        style.configure("Spectra.Treeview", rowheight=GUI_SETTINGS["ICON_SIZE"] // 2 + 12)

        main_frame = ttk.Frame(self.root, padding=12)
        main_frame.pack(fill=tk.BOTH, expand=True)

        header = ttk.Frame(main_frame)
        header.pack(fill=tk.X, pady=(0, 10))
        ttk.Label(header, text="Capture target:", font=("TkDefaultFont", 11, "bold")).pack(side=tk.LEFT)
        self.status_var = tk.StringVar(value="Loading...")
        ttk.Label(header, textvariable=self.status_var).pack(side=tk.LEFT, padx=(6, 0))
        self.refresh_button = ttk.Button(header, text="Refresh", command=self.refresh)
        self.refresh_button.pack(side=tk.RIGHT)

        lists = ttk.Panedwindow(main_frame, orient=tk.HORIZONTAL)
        lists.pack(fill=tk.BOTH, expand=True)
        self.display_tree = self._make_tree(lists, "Displays", "Resolution")
        self.window_tree = self._make_tree(lists, "Windows", "Title")

        region_frame = ttk.LabelFrame(main_frame, text="Region", padding=8)
        region_frame.pack(fill=tk.X, pady=(10, 0))
        self.region_vars = {}
        for field in ("x", "y", "width", "height"):
            ttk.Label(region_frame, text=field).pack(side=tk.LEFT)
            var = tk.StringVar(value="0")
            ttk.Entry(region_frame, textvariable=var, width=7).pack(side=tk.LEFT, padx=(2, 10))
            self.region_vars[field] = var
        ttk.Button(region_frame, text="Use Region", command=self.select_region).pack(side=tk.RIGHT)

    def _make_tree(self, parent: ttk.Panedwindow, title: str, detail: str) -> ttk.Treeview:
        frame = ttk.LabelFrame(parent, text=title, padding=4)
        parent.add(frame, weight=1)

        tree = ttk.Treeview(frame, columns=("detail",), style="Spectra.Treeview", selectmode="browse")
        tree.heading("#0", text="Name")
        tree.heading("detail", text=detail)
        tree.column("#0", width=260)
        scrollbar = ttk.Scrollbar(frame, orient=tk.VERTICAL, command=tree.yview)
        tree.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        tree.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        tree.bind("<<TreeviewSelect>>", self._on_select)
        return tree

    def refresh(self) -> None:
        self.loader.cancel()
        self.status_var.set("Loading...")
        self.refresh_button.state(["disabled"])
        threading.Thread(target=self._load_worker, name="initial-load", daemon=True).start()

    def _load_worker(self) -> None:
        try:
            state = load_initial(self.bridge)
        except Exception as e:
            # Always post a state so the window leaves "Loading..."
            logger.exception(f"Initial load failed: {str(e)}")
            state = InitialState([], [], default_settings())
        self.results.put(("loaded", state))

    def _drain_queue(self) -> None:
        try:
            while True:
                kind, payload = self.results.get_nowait()
                if kind == "loaded":
                    self._show_initial(payload)
                elif kind == "thumbnail":
                    self._show_thumbnail(*payload)
        except queue.Empty:
            pass
        self.root.after(GUI_SETTINGS["QUEUE_POLL_MS"], self._drain_queue)

    def _show_initial(self, state: InitialState) -> None:
        self.windows, self.displays, self.settings = state
        self._images.clear()

        self.display_tree.delete(*self.display_tree.get_children())
        self.display_tree.insert("", tk.END, iid=f"display:{PRIMARY_DISPLAY}", text=MAIN_DISPLAY_LABEL,
                                 values=("Follows the primary display",))
        for display in self.displays:
            detail = f"{display.width}x{display.height}" + (" (primary)" if display.is_main else "")
            self.display_tree.insert("", tk.END, iid=f"display:{display.id}", text=display.name, values=(detail,))

        self.window_tree.delete(*self.window_tree.get_children())
        for window in self.windows:
            self.window_tree.insert("", tk.END, iid=f"window:{window.id}", text=window.owner_name,
                                    values=(window.name,))

        self._highlight_selection()
        self._fill_region_fields()
        self._update_status()
        self.refresh_button.state(["!disabled"])

        self.loader.start(
            thumbnail_jobs(state),
            self.bridge.fetch_thumbnail,
            lambda kind, item_id, data: self.results.put(("thumbnail", (kind, item_id, data))),
        )

    def _show_thumbnail(self, kind: str, item_id: int, data: str) -> None:
        img = decode_thumbnail(data)
        if img is None:
            return

        rows: List[str] = [f"{kind}:{item_id}"]
        if kind == "display" and any(d.id == item_id and d.is_main for d in self.displays):
            rows.append(f"display:{PRIMARY_DISPLAY}")

        tree = self.display_tree if kind == "display" else self.window_tree
        for row in rows:
            if tree.exists(row):
                photo = ImageTk.PhotoImage(img)
                self._images[row] = photo
                tree.item(row, image=photo)

    def _highlight_selection(self) -> None:
        row = selected_item(self.settings)
        for tree in (self.display_tree, self.window_tree):
            if row and tree.exists(row):
                tree.selection_set(row)
                tree.see(row)
            else:
                tree.selection_remove(*tree.selection())

    def _fill_region_fields(self) -> None:
        region = self.settings.target.region or self.settings.region
        if region is None:
            return
        for field, var in self.region_vars.items():
            var.set(f"{getattr(region, field):g}")

    def _update_status(self) -> None:
        self.status_var.set(describe_target(self.settings, self.windows, self.displays))

    def _on_select(self, event: tk.Event) -> None:
        selection = event.widget.selection()
        if not selection:
            return
        self.save_target(target_for_item(selection[0]))

    def select_region(self) -> None:
        try:
            values = {field: float(var.get()) for field, var in self.region_vars.items()}
        except ValueError:
            self.status_var.set("Region values must be numbers")
            return
        if values["width"] <= 0 or values["height"] <= 0:
            self.status_var.set("Region width and height must be positive")
            return
        self.save_target(target_for_region(Region(**values)))

    def save_target(self, target: CaptureTarget) -> None:
        settings = settings_for_selection(self.settings, target)
        if settings is None:
            return
        if not self.bridge.save_settings(settings):
            self.status_var.set("Failed to save settings")
            return

        self.settings = settings
        self._highlight_selection()
        self._update_status()

    def close(self) -> None:
        self.loader.cancel()
        self.root.destroy()


def configure_logging(level: str, log_dir: Optional[str]) -> None:
    logger.remove()
    if log_dir and ensure_directory(log_dir):
        logger.add(f"{log_dir}/gui.log", rotation="10 MB", retention="1 week", level=level,
                   format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}")
    logger.add(sys.stderr, format="<level>{level: <8}</level> | {message}", level=level)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="spectra-gui", description="Choose what Spectra captures")
    parser.add_argument("--capture-command", help="Capture backend command line")
    parser.add_argument("--settings-path", help="Settings file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    config = load_config(
        capture_command=args.capture_command,
        settings_path=args.settings_path,
        log_level="DEBUG" if args.debug else None,
    )
    configure_logging(config.log_level, config.log_dir)

    bridge = GuiBridge(CaptureClient.from_config(config), SettingsStore(config.settings_path))
    root = tk.Tk()
    SpectraApp(root, bridge)
    root.mainloop()


if __name__ == "__main__":
    main()
