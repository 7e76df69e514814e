#!/usr/bin/env python3
"""
Formatters for the Spectra CLI

Machine output (single-line JSON) goes to stdout untouched; diagnostics go
to stderr through a Rich console; ``--table`` renders listings as Rich
tables for humans.

This module is part of the Presentation Layer and should only depend on
Core Layer components, not on Integration Layer.

Sample input:
- List of WindowDescriptor records
- Error messages

Expected output:
- Rich tables on stdout, one-line errors on stderr
"""

import sys
from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from spectra.core.models import DisplayDescriptor, WindowDescriptor


# Tables go to stdout, diagnostics to stderr
console = Console()
err_console = Console(stderr=True)


# Color scheme
COLORS = {
    "success": "green",
    "error": "red",
    "warning": "yellow",
    "info": "blue",
    "highlight": "magenta",
    "dim": "grey70",
}


def print_json_line(payload: str) -> None:
    """Write one JSON document to stdout as a single line."""
    sys.stdout.write(payload + "\n")
    sys.stdout.flush()


def print_error(message: str) -> None:
    """
    Print an error to stderr on one line, prefixed with "Error:".

    Callers of the capture backend read the last stderr line as the failure
    message, so this never wraps.
    """
    err_console.print(f"[bold {COLORS['error']}]Error:[/] {escape(message)}", soft_wrap=True, highlight=False)


def print_warning(message: str) -> None:
    err_console.print(f"[{COLORS['warning']}]Warning:[/] {escape(message)}", soft_wrap=True, highlight=False)


def _thumbnail_cell(thumbnail) -> str:
    if thumbnail is None:
        return f"[{COLORS['dim']}]-[/]"
    if not thumbnail:
        return f"[{COLORS['warning']}]unavailable[/]"
    return f"[{COLORS['success']}]{len(thumbnail) // 1024} KB[/]"


def print_windows_table(windows: List[WindowDescriptor]) -> None:
    """
    Render a window list as a table.

    Args:
        windows: Windows to render
    """
    if not windows:
        print_warning("No windows found")
        return

    table = Table(title="Windows", show_header=True, header_style="bold")
    table.add_column("ID", style=COLORS["highlight"], justify="right")
    table.add_column("Application", style=COLORS["info"])
    table.add_column("Title")
    table.add_column("Layer", justify="right")
    table.add_column("Bounds", style=COLORS["dim"])
    table.add_column("Thumbnail")

    for window in windows:
        b = window.bounds
        table.add_row(
            str(window.id),
            escape(window.owner_name),
            escape(window.name) or f"[{COLORS['dim']}](untitled)[/]",
            str(window.layer),
            f"{b.x:g},{b.y:g} {b.width:g}x{b.height:g}",
            _thumbnail_cell(window.thumbnail),
        )

    console.print(table)


def print_displays_table(displays: List[DisplayDescriptor]) -> None:
    """
    Render a display list as a table.

    Args:
        displays: Displays to render
    """
    if not displays:
        print_warning("No displays found")
        return

    table = Table(title="Displays", show_header=True, header_style="bold")
    table.add_column("ID", style=COLORS["highlight"], justify="right")
    table.add_column("Name", style=COLORS["info"])
    table.add_column("Pixels")
    table.add_column("Origin", style=COLORS["dim"])
    table.add_column("Primary")
    table.add_column("Thumbnail")

    for display in displays:
        table.add_row(
            str(display.id),
            escape(display.name),
            f"{display.width}x{display.height}",
            f"{display.bounds.x:g},{display.bounds.y:g}",
            f"[{COLORS['success']}]yes[/]" if display.is_main else "",
            _thumbnail_cell(display.thumbnail),
        )

    console.print(table)
